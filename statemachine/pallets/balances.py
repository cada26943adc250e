"""
statemachine.pallets.balances — fund custody and transfers.

State is a mapping AccountId → Balance where a missing key reads as zero.
`set_balance` is the trusted, administrative seeding path (it is *not* a
dispatchable call); the only dispatchable operation is `Transfer`.

Transfer semantics
------------------
- new sender balance    = checked_sub(sender, amount)  → InsufficientFunds on underflow
- new recipient balance = checked_add(recipient, amount) → Overflow past Balance.max_value
- Both checks run before either write, so a failed transfer leaves both
  balances untouched.
- A transfer to oneself only checks funds and then writes nothing; the
  balance is unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Protocol, Tuple

from smcore import logging as slog
from smcore.types.primitives import UInt, check_instance

from ..errors import DispatchError, DispatchResult, InvalidCall

log = slog.get_logger(__name__)

PALLET_NAME = "balances"


class Config(Protocol):
    """Bindings the Balances pallet needs from the enclosing runtime."""

    @property
    def account_id(self) -> type: ...

    @property
    def balance(self) -> UInt: ...


# ------------------------------------------------------------------------------
# Calls
# ------------------------------------------------------------------------------


@dataclass(frozen=True)
class Transfer:
    """Move `amount` from the dispatching caller to `to`."""

    name: ClassVar[str] = "transfer"
    # field -> RuntimeConfig binding, checked when decoding the wire form
    bindings: ClassVar[Dict[str, str]] = {"to": "account_id", "amount": "balance"}

    to: Any
    amount: int


CALLS: Tuple[type, ...] = (Transfer,)


# ------------------------------------------------------------------------------
# Pallet
# ------------------------------------------------------------------------------


class Pallet:
    def __init__(self, config: Config) -> None:
        self._config = config
        self._balances: Dict[Any, int] = {}

    @property
    def balance_type(self) -> UInt:
        return self._config.balance

    def set_balance(self, who: Any, amount: int) -> None:
        """Overwrite the balance of `who`. Administrative; bypasses dispatch."""
        check_instance("AccountId", self._config.account_id, who)
        self._balances[who] = self._config.balance.check(amount)

    def balance(self, who: Any) -> int:
        return self._balances.get(who, self._config.balance.zero)

    def transfer(self, caller: Any, to: Any, amount: int) -> DispatchResult:
        bal = self._config.balance
        check_instance("AccountId", self._config.account_id, caller)
        check_instance("AccountId", self._config.account_id, to)
        bal.check(amount)

        caller_balance = self.balance(caller)
        new_caller_balance = bal.checked_sub(caller_balance, amount)
        if new_caller_balance is None:
            return DispatchResult.err(
                DispatchError.INSUFFICIENT_FUNDS, balance=caller_balance, amount=amount
            )
        if caller == to:
            return DispatchResult.ok()

        new_to_balance = bal.checked_add(self.balance(to), amount)
        if new_to_balance is None:
            return DispatchResult.err(DispatchError.OVERFLOW, amount=amount)

        self._balances[caller] = new_caller_balance
        self._balances[to] = new_to_balance
        log.debug("transfer applied", extra={"to": to, "amount": amount})
        return DispatchResult.ok()

    def dispatch(self, caller: Any, call: Any) -> DispatchResult:
        if isinstance(call, Transfer):
            return self.transfer(caller, call.to, call.amount)
        raise InvalidCall(
            "call is not owned by this pallet",
            pallet=PALLET_NAME,
            call=type(call).__name__,
        )

    def balances(self) -> Dict[Any, int]:
        """Sorted copy of every stored balance."""
        return dict(sorted(self._balances.items()))

    def total_issuance(self) -> int:
        return sum(self._balances.values())

    def __repr__(self) -> str:
        return f"balances.Pallet(accounts={len(self._balances)})"


__all__ = ["Config", "Transfer", "CALLS", "Pallet", "PALLET_NAME"]
