"""
smcore.errors
-------------

Exception hierarchy for *programming* errors and violated invariants.

Expected business failures (insufficient funds, missing claim, a stale block
header, ...) are never raised: pallets and the block executor return them as
explicit `statemachine.errors.DispatchResult` values. The classes below are
for everything else: malformed calls, values that do not fit a configured
primitive type, bad configuration, and calls routed to the wrong pallet.

Design goals
------------
- One root `StateMachineError` with machine-friendly `code` and optional `data`.
- Safe JSON representation (`to_dict`) suitable for logs and CLI output.
- Stdlib only, so the module can be imported from anywhere without cycles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class CoreErrorCode(str, Enum):
    CONFIG = "CORE/CONFIG"
    VALUE_OUT_OF_RANGE = "CORE/VALUE_OUT_OF_RANGE"
    INVALID_VALUE = "CORE/INVALID_VALUE"
    INVALID_CALL = "CORE/INVALID_CALL"
    INVALID_BLOCK = "CORE/INVALID_BLOCK"
    STATE_INVARIANT = "CORE/STATE_INVARIANT"


@dataclass(eq=False)
class StateMachineError(Exception):
    """
    Root error for state-machine components.

    Attributes
    ----------
    code: str
        Machine-stable error code (see CoreErrorCode).
    message: str
        Human hint suitable for logs.
    data: dict
        Optional machine data (values, names, bounds). JSON-serializable.
    cause: Optional[BaseException]
        Wrapped original exception; not included in equality comparison.
    """

    code: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    cause: Optional[BaseException] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        super().__init__(f"{_code_str(self.code)}: {self.message}")

    def with_context(self, **ctx: Any) -> "StateMachineError":
        """Return a *new* error with extra context merged (does not mutate)."""
        # Subclasses have bespoke __init__ signatures; clone without calling them.
        err = type(self).__new__(type(self))
        err.__dict__.update(self.__dict__)
        err.args = self.args
        err.data = {**self.data, **_jsonmap(ctx)}
        return err

    def to_dict(self, include_cause: bool = False) -> Dict[str, Any]:
        """JSON-safe shape suitable for logs and CLI output."""
        out: Dict[str, Any] = {
            "code": _code_str(self.code),
            "message": self.message,
            "data": _jsonmap(self.data),
        }
        if include_cause and self.cause is not None:
            out["cause"] = {
                "type": type(self.cause).__name__,
                "message": str(self.cause),
            }
        return out

    def __str__(self) -> str:  # pragma: no cover - human formatting
        parts = [f"{_code_str(self.code)}: {self.message}"]
        if self.data:
            preview = ", ".join(f"{k}={_preview(v)}" for k, v in self.data.items())
            parts.append(f"[{preview}]")
        return " ".join(parts)


class ConfigError(StateMachineError, ValueError):
    def __init__(self, message="invalid configuration", **data: Any) -> None:
        super().__init__(code=CoreErrorCode.CONFIG, message=message, data=_jsonmap(data))


class ValueOutOfRange(StateMachineError, ValueError):
    """A numeric value does not fit the primitive type it is bound to."""

    def __init__(self, type_name: str, value: Any, *, bits: Optional[int] = None) -> None:
        data: Dict[str, Any] = {"type": type_name, "value": value}
        if bits is not None:
            data["bits"] = bits
        super().__init__(
            code=CoreErrorCode.VALUE_OUT_OF_RANGE,
            message=f"value out of range for {type_name}",
            data=_jsonmap(data),
        )


class InvalidValue(StateMachineError, TypeError):
    """A value has the wrong Python type for the binding it is used as."""

    def __init__(self, binding: str, expected: type, got: Any) -> None:
        super().__init__(
            code=CoreErrorCode.INVALID_VALUE,
            message=f"{binding} must be {expected.__name__}, got {type(got).__name__}",
            data={"binding": binding, "expected": expected.__name__, "got": type(got).__name__},
        )


class InvalidCall(StateMachineError):
    """
    A call value is malformed, unknown, or was routed to a pallet that does
    not own it. Routing errors indicate a bug in the composition root.
    """

    def __init__(self, message="invalid call", **data: Any) -> None:
        super().__init__(code=CoreErrorCode.INVALID_CALL, message=message, data=_jsonmap(data))


class InvalidBlock(StateMachineError):
    """A block description (e.g. from a scenario file) cannot be decoded."""

    def __init__(self, message="invalid block", **data: Any) -> None:
        super().__init__(code=CoreErrorCode.INVALID_BLOCK, message=message, data=_jsonmap(data))


class StateInvariant(StateMachineError):
    def __init__(self, message="state invariant broken", **data: Any) -> None:
        super().__init__(
            code=CoreErrorCode.STATE_INVARIANT, message=message, data=_jsonmap(data)
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _code_str(code: Any) -> str:
    return code.value if isinstance(code, Enum) else str(code)


def _jsonmap(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: _coerce_json(v) for k, v in data.items()}


def _coerce_json(v: Any) -> Any:
    # Keep JSON primitives; stringify the rest; hex-encode bytes.
    if v is None or isinstance(v, (bool, int, float, str, list, dict)):
        return v
    if isinstance(v, (bytes, bytearray)):
        return v.hex()
    try:
        return str(v)
    except Exception:
        return "<unprintable>"


def _preview(v: Any, limit: int = 96) -> str:
    s = str(_coerce_json(v))
    return s if len(s) <= limit else s[:limit] + "…"


__all__ = [
    "CoreErrorCode",
    "StateMachineError",
    "ConfigError",
    "ValueOutOfRange",
    "InvalidValue",
    "InvalidCall",
    "InvalidBlock",
    "StateInvariant",
]
