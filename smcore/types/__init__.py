"""
smcore.types
============

- primitives: UInt descriptors and the default AccountId/Balance/BlockNumber/Nonce/Content bindings
- block:      Header, Extrinsic, Block
"""

from __future__ import annotations

from .block import Block, Extrinsic, Header
from .primitives import AccountId, Balance, BlockNumber, Content, Nonce, UInt

__all__ = [
    "AccountId",
    "Balance",
    "Block",
    "BlockNumber",
    "Content",
    "Extrinsic",
    "Header",
    "Nonce",
    "UInt",
]
