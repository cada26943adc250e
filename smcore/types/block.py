"""
smcore/types/block.py
=====================

Block containers consumed by the block executor:

  - Header:     the claimed block number
  - Extrinsic:  an externally supplied (caller, call) pair
  - Block:      header + ordered tuple of extrinsics

All three are frozen. The call inside an extrinsic is opaque at this layer;
`Block.from_obj` takes a `decode_call` callable so the runtime can plug in
its own call union (see statemachine.runtime.dispatcher.RuntimeCall.from_obj).
Callers are checked against `caller_type` while decoding, so a decoded block
never carries an account the runtime would refuse.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Mapping, Sequence, Tuple, TypeVar

from ..errors import InvalidBlock
from .primitives import AccountId

CallerT = TypeVar("CallerT")
CallT = TypeVar("CallT")


@dataclass(frozen=True)
class Header:
    block_number: int

    @staticmethod
    def from_obj(o: Mapping[str, Any]) -> "Header":
        if not isinstance(o, Mapping) or "block_number" not in o:
            raise InvalidBlock("header must be a mapping with 'block_number'")
        n = o["block_number"]
        if not isinstance(n, int) or isinstance(n, bool) or n < 0:
            raise InvalidBlock("header.block_number must be a non-negative integer", got=repr(n))
        return Header(block_number=n)


@dataclass(frozen=True)
class Extrinsic(Generic[CallerT, CallT]):
    caller: CallerT
    call: CallT


@dataclass(frozen=True)
class Block(Generic[CallerT, CallT]):
    header: Header
    extrinsics: Tuple[Extrinsic[CallerT, CallT], ...] = ()

    @classmethod
    def build(
        cls, block_number: int, extrinsics: Iterable[Extrinsic[CallerT, CallT]] = ()
    ) -> "Block[CallerT, CallT]":
        return cls(header=Header(block_number), extrinsics=tuple(extrinsics))

    def __len__(self) -> int:
        return len(self.extrinsics)

    @staticmethod
    def from_obj(
        o: Mapping[str, Any],
        decode_call: Callable[[Any], Any],
        *,
        caller_type: type = AccountId,
    ) -> "Block":
        if not isinstance(o, Mapping):
            raise InvalidBlock("block must be a mapping")
        header = Header.from_obj(o.get("header", {}))
        raw = o.get("extrinsics", [])
        if not isinstance(raw, Sequence) or isinstance(raw, (str, bytes)):
            raise InvalidBlock("block.extrinsics must be a list")
        xts = []
        for i, x in enumerate(raw):
            if not isinstance(x, Mapping) or "caller" not in x or "call" not in x:
                raise InvalidBlock("extrinsic must have 'caller' and 'call'", index=i)
            caller = x["caller"]
            if not isinstance(caller, caller_type):
                raise InvalidBlock(
                    f"extrinsic caller must be {caller_type.__name__}",
                    index=i,
                    got=repr(caller),
                )
            xts.append(Extrinsic(caller=caller, call=decode_call(x["call"])))
        return Block(header=header, extrinsics=tuple(xts))


__all__ = ["Header", "Extrinsic", "Block"]
