"""
statemachine — a minimal pallet runtime.

Pallets own state, a `RuntimeCall` union names every dispatchable operation,
and the `Runtime` routes (caller, call) pairs to pallets and executes blocks
of extrinsics in order.

    from statemachine.runtime import Runtime
"""

from smcore.version import __version__

__all__ = ["__version__"]
