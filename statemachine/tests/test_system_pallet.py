import pytest

from smcore.errors import InvalidValue, StateInvariant
from smcore.types.primitives import UInt
from statemachine.pallets import system
from statemachine.runtime.bindings import RuntimeConfig


@pytest.fixture
def pallet() -> system.Pallet:
    return system.Pallet(RuntimeConfig())


def test_init_system(pallet) -> None:
    pallet.inc_block_number()
    pallet.inc_nonce("alice")

    assert pallet.block_number() == 1
    assert pallet.nonce("alice") == 1


def test_fresh_state_is_zero(pallet) -> None:
    assert pallet.block_number() == 0
    assert pallet.nonce("nobody") == 0
    assert pallet.nonces() == {}


def test_nonce_counts_every_increment(pallet) -> None:
    for _ in range(5):
        pallet.inc_nonce("alice")
    pallet.inc_nonce("bob")
    assert pallet.nonce("alice") == 5
    assert pallet.nonce("bob") == 1
    assert list(pallet.nonces()) == ["alice", "bob"]


def test_block_number_only_moves_forward(pallet) -> None:
    seen = []
    for _ in range(3):
        pallet.inc_block_number()
        seen.append(pallet.block_number())
    assert seen == [1, 2, 3]


def test_exhausted_block_number_is_an_invariant_violation() -> None:
    pallet = system.Pallet(RuntimeConfig(block_number=UInt("BlockNumber", 1)))
    pallet.inc_block_number()
    with pytest.raises(StateInvariant):
        pallet.inc_block_number()
    assert pallet.block_number() == 1


def test_nonce_account_must_match_binding(pallet) -> None:
    with pytest.raises(InvalidValue):
        pallet.inc_nonce(7)
    assert pallet.nonces() == {}
