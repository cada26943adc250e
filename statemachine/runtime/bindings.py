"""
statemachine.runtime.bindings — the single composition root for pallet types.

Each pallet declares the bindings it needs as a `Config` protocol
(`system.Config`, `balances.Config`, `proof_of_existence.Config`).
`RuntimeConfig` supplies all of them at once; the Runtime hands the same
instance to every pallet, so AccountId means the same thing everywhere.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from smcore.types import primitives as prim
from smcore.types.primitives import UInt

from ..config import ExecutionConfig


@dataclass(frozen=True)
class RuntimeConfig:
    account_id: type = prim.AccountId
    content: type = prim.Content
    balance: UInt = prim.Balance
    block_number: UInt = prim.BlockNumber
    nonce: UInt = prim.Nonce

    @classmethod
    def from_settings(cls, settings: Optional[ExecutionConfig] = None) -> "RuntimeConfig":
        if settings is None:
            return cls()
        w = settings.widths
        return cls(
            balance=UInt("Balance", w.balance_bits),
            block_number=UInt("BlockNumber", w.block_number_bits),
            nonce=UInt("Nonce", w.nonce_bits),
        )


DEFAULT = RuntimeConfig()

__all__ = ["RuntimeConfig", "DEFAULT"]
