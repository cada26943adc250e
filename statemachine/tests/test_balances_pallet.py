import pytest

from smcore.errors import InvalidCall, InvalidValue, ValueOutOfRange
from smcore.types.primitives import UInt
from statemachine.errors import DispatchError, DispatchResult
from statemachine.pallets import balances
from statemachine.pallets.proof_of_existence import CreateClaim
from statemachine.runtime.bindings import RuntimeConfig

ALICE = "alice"
BOB = "bob"


@pytest.fixture
def pallet() -> balances.Pallet:
    return balances.Pallet(RuntimeConfig())


def test_init_balances(pallet) -> None:
    assert pallet.balance(ALICE) == 0

    pallet.set_balance(ALICE, 100)
    assert pallet.balance(ALICE) == 100
    assert pallet.balance(BOB) == 0


def test_transfer_balance_valid(pallet) -> None:
    pallet.set_balance(ALICE, 100)
    pallet.set_balance(BOB, 50)

    res = pallet.transfer(ALICE, BOB, 50)

    assert res == DispatchResult.ok()
    assert pallet.balance(ALICE) == 50
    assert pallet.balance(BOB) == 100


def test_transfer_balance_insufficient_funds(pallet) -> None:
    pallet.set_balance(ALICE, 50)
    pallet.set_balance(BOB, 50)

    res = pallet.transfer(ALICE, BOB, 100)

    assert res == DispatchResult.err(DispatchError.INSUFFICIENT_FUNDS)
    assert res.data == {"balance": 50, "amount": 100}
    assert pallet.balance(ALICE) == 50
    assert pallet.balance(BOB) == 50


def test_transfer_overflow_leaves_both_balances_untouched() -> None:
    pallet = balances.Pallet(RuntimeConfig(balance=UInt("Balance", 8)))
    pallet.set_balance(ALICE, 10)
    pallet.set_balance(BOB, 250)

    res = pallet.transfer(ALICE, BOB, 10)

    assert res.error is DispatchError.OVERFLOW
    assert pallet.balance(ALICE) == 10
    assert pallet.balance(BOB) == 250


def test_transfer_overflow_at_u128_max(pallet) -> None:
    pallet.set_balance(ALICE, 1)
    pallet.set_balance(BOB, pallet.balance_type.max_value)

    assert pallet.transfer(ALICE, BOB, 1).error is DispatchError.OVERFLOW
    assert pallet.balance(ALICE) == 1


def test_transfer_to_self_is_a_noop(pallet) -> None:
    pallet.set_balance(ALICE, 100)

    assert pallet.transfer(ALICE, ALICE, 60).is_ok
    assert pallet.balance(ALICE) == 100

    res = pallet.transfer(ALICE, ALICE, 101)
    assert res.error is DispatchError.INSUFFICIENT_FUNDS
    assert pallet.balance(ALICE) == 100


def test_transfer_to_self_near_max_does_not_overflow(pallet) -> None:
    top = pallet.balance_type.max_value
    pallet.set_balance(ALICE, top)
    assert pallet.transfer(ALICE, ALICE, top).is_ok
    assert pallet.balance(ALICE) == top


def test_transfer_creates_recipient_entry(pallet) -> None:
    pallet.set_balance(ALICE, 30)
    assert pallet.transfer(ALICE, BOB, 30).is_ok
    assert pallet.balances() == {ALICE: 0, BOB: 30}
    assert pallet.total_issuance() == 30


def test_zero_transfer_from_empty_account_succeeds(pallet) -> None:
    assert pallet.transfer(ALICE, BOB, 0).is_ok
    assert pallet.balance(ALICE) == 0
    assert pallet.balance(BOB) == 0


def test_set_balance_validates_amount_and_account(pallet) -> None:
    with pytest.raises(ValueOutOfRange):
        pallet.set_balance(ALICE, -1)
    with pytest.raises(ValueOutOfRange):
        pallet.set_balance(ALICE, 2**128)
    with pytest.raises(InvalidValue):
        pallet.set_balance(b"alice", 1)
    assert pallet.balances() == {}


def test_negative_transfer_amount_is_rejected_before_any_write(pallet) -> None:
    pallet.set_balance(ALICE, 10)
    with pytest.raises(ValueOutOfRange):
        pallet.transfer(ALICE, BOB, -5)
    assert pallet.balances() == {ALICE: 10}


def test_dispatch_routes_transfer(pallet) -> None:
    pallet.set_balance(ALICE, 100)
    res = pallet.dispatch(ALICE, balances.Transfer(to=BOB, amount=20))
    assert res.is_ok
    assert pallet.balance(ALICE) == 80
    assert pallet.balance(BOB) == 20


def test_dispatch_propagates_failure_unchanged(pallet) -> None:
    res = pallet.dispatch(ALICE, balances.Transfer(to=BOB, amount=1))
    assert res == pallet.transfer(ALICE, BOB, 1)
    assert res.error is DispatchError.INSUFFICIENT_FUNDS


def test_dispatch_of_foreign_call_is_an_invariant_violation(pallet) -> None:
    with pytest.raises(InvalidCall) as ei:
        pallet.dispatch(ALICE, CreateClaim("x"))
    assert ei.value.data == {"pallet": "balances", "call": "CreateClaim"}
