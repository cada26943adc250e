"""
statemachine.runtime.dispatcher — the dispatch contract and the runtime call union.

`Dispatch` is the one seam every pallet and the Runtime implement:

    dispatch(caller, call) -> DispatchResult

`RuntimeCall` is the closed, tagged union of every pallet's calls. The tag
(`PalletId`) tells the Runtime which pallet to forward to; the inner value is
one of that pallet's `CALLS`. Construction validates the pairing, so a
RuntimeCall can never carry a call its tagged pallet does not own.

Wire form (scenario files, CLI output)::

    {"pallet": "balances", "call": "transfer", "args": {"to": "bob", "amount": 20}}
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping, Protocol, Tuple, runtime_checkable

from smcore.types.primitives import UInt

from ..errors import DispatchResult, InvalidCall
from ..pallets import balances, proof_of_existence
from .bindings import DEFAULT, RuntimeConfig


@runtime_checkable
class Dispatch(Protocol):
    def dispatch(self, caller: Any, call: Any) -> DispatchResult: ...


class PalletId(str, Enum):
    BALANCES = balances.PALLET_NAME
    PROOF_OF_EXISTENCE = proof_of_existence.PALLET_NAME

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


# Closed registry: pallet → its call variants.
CALLS: Dict[PalletId, Tuple[type, ...]] = {
    PalletId.BALANCES: balances.CALLS,
    PalletId.PROOF_OF_EXISTENCE: proof_of_existence.CALLS,
}

_BY_NAME: Dict[PalletId, Dict[str, type]] = {
    pid: {c.name: c for c in calls} for pid, calls in CALLS.items()
}


def pallet_of(call: Any) -> PalletId:
    """Return the pallet owning `call`'s variant."""
    for pid, calls in CALLS.items():
        if isinstance(call, calls):
            return pid
    raise InvalidCall("no pallet owns this call", call=type(call).__name__)


@dataclass(frozen=True)
class RuntimeCall:
    pallet: PalletId
    call: Any

    def __post_init__(self) -> None:
        if not isinstance(self.pallet, PalletId):
            raise InvalidCall("unknown pallet", pallet=repr(self.pallet))
        if not isinstance(self.call, CALLS[self.pallet]):
            raise InvalidCall(
                "call does not belong to pallet",
                pallet=self.pallet.value,
                call=type(self.call).__name__,
            )

    # ---------- constructors ----------

    @classmethod
    def balances(cls, call: Any) -> "RuntimeCall":
        return cls(PalletId.BALANCES, call)

    @classmethod
    def proof_of_existence(cls, call: Any) -> "RuntimeCall":
        return cls(PalletId.PROOF_OF_EXISTENCE, call)

    @classmethod
    def wrap(cls, call: Any) -> "RuntimeCall":
        """Tag a pallet call with its owning pallet."""
        if isinstance(call, RuntimeCall):
            return call
        return cls(pallet_of(call), call)

    # ---------- wire form ----------

    @property
    def name(self) -> str:
        return f"{self.pallet.value}.{self.call.name}"

    def to_obj(self) -> Dict[str, Any]:
        return {
            "pallet": self.pallet.value,
            "call": self.call.name,
            "args": {f.name: getattr(self.call, f.name) for f in fields(self.call)},
        }

    @classmethod
    def from_obj(cls, o: Any, config: RuntimeConfig = DEFAULT) -> "RuntimeCall":
        """
        Decode the wire form. Argument values are checked against `config`
        here, so a decoded call can only fail at dispatch with a DispatchError.
        """
        if not isinstance(o, Mapping):
            raise InvalidCall("call must be a mapping", got=type(o).__name__)
        try:
            pallet = PalletId(o.get("pallet"))
        except ValueError:
            raise InvalidCall("unknown pallet", pallet=repr(o.get("pallet"))) from None
        call_name = o.get("call")
        variant = _BY_NAME[pallet].get(call_name) if isinstance(call_name, str) else None
        if variant is None:
            raise InvalidCall("unknown call", pallet=pallet.value, call=repr(call_name))
        args = o.get("args") or {}
        if not isinstance(args, Mapping):
            raise InvalidCall("call args must be a mapping", call=variant.name)
        try:
            inner = variant(**args)
        except TypeError as e:
            raise InvalidCall("bad call arguments", call=variant.name, reason=str(e)) from None
        for arg, binding in variant.bindings.items():
            value = getattr(inner, arg)
            bound = getattr(config, binding)
            fits = bound.contains(value) if isinstance(bound, UInt) else isinstance(value, bound)
            if not fits:
                raise InvalidCall(
                    "call argument does not fit its binding",
                    call=variant.name,
                    arg=arg,
                    expected=str(bound) if isinstance(bound, UInt) else bound.__name__,
                    got=repr(value),
                )
        return cls(pallet, inner)


__all__ = ["Dispatch", "PalletId", "RuntimeCall", "CALLS", "pallet_of"]
