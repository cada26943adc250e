"""
statemachine.pallets — independently owned state modules.

- system             : block number and per-account nonces (no calls)
- balances           : balances map; Transfer
- proof_of_existence : content → owner claims; CreateClaim / RevokeClaim

Each module declares a `Config` protocol naming the bindings it needs, a
`Pallet` class owning its private state, and (where dispatchable) the closed
tuple `CALLS` of its call variants.
"""

from __future__ import annotations

from . import balances, proof_of_existence, system

__all__ = ["balances", "proof_of_existence", "system"]
