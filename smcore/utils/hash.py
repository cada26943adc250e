"""
smcore.utils.hash
=================

Hashing helpers and the canonical-CBOR digest used for state roots.

- sha3_256(data) -> bytes
- canonical_cbor(obj) -> bytes   (cbor2, canonical mode: sorted map keys,
                                  shortest int forms, bignums for > 64-bit)
- canonical_digest(obj) -> bytes (sha3_256 over canonical_cbor)

Two structurally equal objects always produce the same digest regardless of
dict insertion order.
"""

from __future__ import annotations

import hashlib
from typing import Any

import cbor2

def sha3_256(data: bytes) -> bytes:
    return hashlib.sha3_256(data).digest()


def canonical_cbor(obj: Any) -> bytes:
    return cbor2.dumps(obj, canonical=True)


def canonical_digest(obj: Any) -> bytes:
    return sha3_256(canonical_cbor(obj))


__all__ = ["sha3_256", "canonical_cbor", "canonical_digest"]
