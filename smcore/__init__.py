"""
smcore — deterministic substrate for the pallet runtime.

Primitive types, block containers, the error root, structured logging and
canonical digests. The pallets and the runtime live in `statemachine`.

Only re-exports the version here to keep import-time side effects near zero.
"""

from __future__ import annotations

from .version import __version__

__all__ = ["__version__"]
