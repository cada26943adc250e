"""
statemachine.pallets.system — block counter and per-account nonces.

The System pallet has no dispatchable calls. The block executor is its only
writer: it bumps the block number once per block and the caller's nonce once
per extrinsic, whether or not the extrinsic's dispatch succeeds.
"""

from __future__ import annotations

from typing import Any, Dict, Protocol

from smcore.errors import StateInvariant
from smcore.types.primitives import UInt, check_instance


class Config(Protocol):
    """Bindings the System pallet needs from the enclosing runtime."""

    @property
    def account_id(self) -> type: ...

    @property
    def block_number(self) -> UInt: ...

    @property
    def nonce(self) -> UInt: ...


class Pallet:
    def __init__(self, config: Config) -> None:
        self._config = config
        self._block_number: int = config.block_number.zero
        self._nonces: Dict[Any, int] = {}

    def block_number(self) -> int:
        """Current block number (0 before the first block)."""
        return self._block_number

    def inc_block_number(self) -> None:
        bn = self._config.block_number
        nxt = bn.checked_add(self._block_number, bn.one)
        if nxt is None:
            raise StateInvariant("block number exhausted", bits=bn.bits)
        self._block_number = nxt

    def nonce(self, who: Any) -> int:
        """Nonce of `who`; an account never seen has nonce zero."""
        return self._nonces.get(who, self._config.nonce.zero)

    def inc_nonce(self, who: Any) -> None:
        check_instance("AccountId", self._config.account_id, who)
        n = self._config.nonce
        nxt = n.checked_add(self.nonce(who), n.one)
        if nxt is None:
            raise StateInvariant("nonce exhausted", account=who, bits=n.bits)
        self._nonces[who] = nxt

    def nonces(self) -> Dict[Any, int]:
        """Sorted copy of every stored nonce."""
        return dict(sorted(self._nonces.items()))

    def __repr__(self) -> str:
        return f"system.Pallet(block_number={self._block_number}, accounts={len(self._nonces)})"


__all__ = ["Config", "Pallet"]
