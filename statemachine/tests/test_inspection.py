from smcore.types.block import Block, Extrinsic
from statemachine.pallets.balances import Transfer
from statemachine.pallets.proof_of_existence import CreateClaim
from statemachine.runtime.dispatcher import RuntimeCall
from statemachine.runtime.runtime import Runtime


def _demo_runtime(order=("alice", "bob")) -> Runtime:
    rt = Runtime()
    for who in order:
        rt.balances.set_balance(who, 100 if who == "alice" else 0)
    rt.execute_block(
        Block.build(1, [Extrinsic("alice", RuntimeCall.balances(Transfer(to="bob", amount=20)))])
    ).expect("block 1")
    rt.execute_block(
        Block.build(
            2, [Extrinsic("alice", RuntimeCall.proof_of_existence(CreateClaim("Hello, World!")))]
        )
    ).expect("block 2")
    return rt


def test_snapshot_of_fresh_runtime(runtime) -> None:
    assert runtime.snapshot() == {
        "block_number": 0,
        "nonces": {},
        "balances": {},
        "claims": {},
    }


def test_snapshot_maps_are_sorted() -> None:
    rt = Runtime()
    for who in ("zed", "carol", "alice"):
        rt.balances.set_balance(who, 1)
    assert list(rt.snapshot()["balances"]) == ["alice", "carol", "zed"]


def test_render_fresh_runtime(runtime) -> None:
    assert runtime.render() == "\n".join(
        [
            "Runtime {",
            "    system: {",
            "        block_number: 0,",
            "        nonces: {},",
            "    },",
            "    balances: {",
            "        balances: {},",
            "    },",
            "    proof_of_existence: {",
            "        claims: {},",
            "    },",
            "}",
        ]
    )


def test_render_after_demo() -> None:
    text = _demo_runtime().render()
    assert "        block_number: 2," in text
    assert "            'alice': 2," in text
    assert "            'alice': 80," in text
    assert "            'bob': 20," in text
    assert "            'Hello, World!': 'alice'," in text


def test_state_root_is_order_independent() -> None:
    a = _demo_runtime(order=("alice", "bob"))
    b = _demo_runtime(order=("bob", "alice"))
    assert a.render() == b.render()
    assert a.state_root() == b.state_root()
    assert len(a.state_root()) == 32


def test_state_root_tracks_state(runtime) -> None:
    before = runtime.state_root()
    runtime.balances.set_balance("alice", 1)
    assert runtime.state_root() != before


def test_repr_mentions_block_number(runtime) -> None:
    assert repr(runtime).startswith("Runtime(block_number=0")
