"""
statemachine.errors — dispatch outcomes for pallets and the block executor.

Business failures are *values*, not exceptions. Every pallet operation that
can fail returns a `DispatchResult`; `dispatch` forwards it unchanged, and the
block executor decides what is fatal (a header mismatch) and what is isolated
to one extrinsic (everything else).

Taxonomy
--------
DispatchError
 ├─ InsufficientFunds    : transfer amount exceeds the sender's balance
 ├─ Overflow             : transfer would overflow the recipient's balance type
 ├─ ClaimAlreadyExists   : content is already claimed
 ├─ ClaimNotFound        : revoking content nobody claimed
 ├─ NotClaimOwner        : revoking a claim owned by another account
 └─ BlockNumberMismatch  : header number differs from the next expected number

Exceptions (see smcore.errors) are reserved for violated invariants such as a
call routed to a pallet that does not own it; they are re-exported here for
convenience.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from smcore.errors import (
    InvalidBlock,
    InvalidCall,
    InvalidValue,
    StateInvariant,
    StateMachineError,
    ValueOutOfRange,
)


class DispatchError(str, Enum):
    INSUFFICIENT_FUNDS = "InsufficientFunds"
    OVERFLOW = "Overflow"
    CLAIM_ALREADY_EXISTS = "ClaimAlreadyExists"
    CLAIM_NOT_FOUND = "ClaimNotFound"
    NOT_CLAIM_OWNER = "NotClaimOwner"
    BLOCK_NUMBER_MISMATCH = "BlockNumberMismatch"

    @property
    def code(self) -> str:
        """Uppercase code form, e.g. 'INSUFFICIENT_FUNDS'."""
        return self.name

    @property
    def message(self) -> str:
        return _MESSAGES[self]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


_MESSAGES: Dict[DispatchError, str] = {
    DispatchError.INSUFFICIENT_FUNDS: "sender does not have enough balance",
    DispatchError.OVERFLOW: "recipient balance would overflow",
    DispatchError.CLAIM_ALREADY_EXISTS: "claim already exists",
    DispatchError.CLAIM_NOT_FOUND: "claim does not exist",
    DispatchError.NOT_CLAIM_OWNER: "caller is not the owner of the claim",
    DispatchError.BLOCK_NUMBER_MISMATCH: "block number does not match current block number",
}


class DispatchFailed(StateMachineError):
    """Raised by `DispatchResult.expect` when a caller insists on success."""

    def __init__(self, context: str, error: DispatchError, data: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(
            code=f"DISPATCH/{error.code}",
            message=f"{context}: {error.message}",
            data={"error": error.value, **dict(data or {})},
        )
        self.error = error


@dataclass(frozen=True)
class DispatchResult:
    """
    Outcome of a dispatch: success, or one `DispatchError`.

    `data` carries optional details (e.g. expected/got block numbers) and is
    not part of equality, so `res == DispatchResult.err(e)` compares kinds.
    """

    error: Optional[DispatchError] = None
    data: Mapping[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def ok(cls) -> "DispatchResult":
        return _OK

    @classmethod
    def err(cls, error: DispatchError, **data: Any) -> "DispatchResult":
        return cls(error=error, data=data)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @property
    def is_err(self) -> bool:
        return self.error is not None

    def __bool__(self) -> bool:
        return self.is_ok

    def expect(self, context: str) -> None:
        """Raise DispatchFailed unless this is a success."""
        if self.error is not None:
            raise DispatchFailed(context, self.error, self.data)

    def to_dict(self) -> Dict[str, Any]:
        if self.error is None:
            return {"ok": True}
        out: Dict[str, Any] = {
            "ok": False,
            "error": self.error.value,
            "message": self.error.message,
        }
        if self.data:
            out["data"] = dict(self.data)
        return out


_OK = DispatchResult()


__all__ = [
    "DispatchError",
    "DispatchFailed",
    "DispatchResult",
    "InvalidBlock",
    "InvalidCall",
    "InvalidValue",
    "StateInvariant",
    "StateMachineError",
    "ValueOutOfRange",
]
