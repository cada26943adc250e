"""
statemachine.runtime — composition and block execution.

Submodules (thin overview)
--------------------------
- bindings    : RuntimeConfig, the one place concrete types are bound
- dispatcher  : Dispatch protocol, PalletId, RuntimeCall union
- executor    : execute_block, ExtrinsicFailure, FailureSink
- runtime     : Runtime aggregate (owns pallets, routes calls)
- inspection  : snapshot / render / state_root

Re-exports
----------
    from statemachine.runtime import Runtime, RuntimeCall, RuntimeConfig
    from statemachine.runtime import execute_block

These are lazily loaded; importing this package does not import the
submodules until an attribute is first accessed.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple

__all__ = (
    "bindings",
    "dispatcher",
    "executor",
    "runtime",
    "inspection",
)

# Lazy symbol re-exports: name -> (module, attribute)
_EXPORTS: Dict[str, Tuple[str, str]] = {
    "Runtime": ("runtime", "Runtime"),
    "RuntimeCall": ("dispatcher", "RuntimeCall"),
    "PalletId": ("dispatcher", "PalletId"),
    "Dispatch": ("dispatcher", "Dispatch"),
    "RuntimeConfig": ("bindings", "RuntimeConfig"),
    "execute_block": ("executor", "execute_block"),
    "ExtrinsicFailure": ("executor", "ExtrinsicFailure"),
}


def __getattr__(name: str) -> Any:  # PEP 562 lazy attribute access
    if name in __all__:
        return import_module(f".{name}", __name__)
    target = _EXPORTS.get(name)
    if target:
        mod, attr = target
        return getattr(import_module(f".{mod}", __name__), attr)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(__all__) + list(_EXPORTS))
