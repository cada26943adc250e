"""
statemachine.runtime.executor — apply a block of extrinsics to a runtime.

Steps for `execute_block(runtime, block)`:

  1. Bump the System block number (unconditionally).
  2. Compare it with `block.header.block_number`; on mismatch return
     err(BlockNumberMismatch) without touching any extrinsic or nonce.
  3. For each extrinsic, in order:
       a. bump the caller's nonce,
       b. dispatch (caller, call),
       c. on failure, record an ExtrinsicFailure (block number, index,
          caller, error) and carry on with the next extrinsic.
  4. Return ok. Per-extrinsic outcomes never change the block result.

Exceptions raised during dispatch (invariant violations such as a misrouted
call) are not business failures and propagate to the caller.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Deque, Dict, Iterator, List, Optional

from smcore import logging as slog
from smcore.types.block import Block

from ..errors import DispatchError, DispatchResult

if TYPE_CHECKING:  # type-only imports to avoid cycles
    from ..pallets.system import Pallet as SystemPallet

log = slog.get_logger(__name__)


# --------------------------------------------------------------------------------------
# Failure records
# --------------------------------------------------------------------------------------


@dataclass(frozen=True)
class ExtrinsicFailure:
    block_number: int
    index: int
    caller: Any
    error: DispatchError

    def to_dict(self) -> Dict[str, Any]:
        return {
            "block_number": self.block_number,
            "index": self.index,
            "caller": self.caller,
            "error": self.error.value,
        }

    def __str__(self) -> str:
        return (
            f"Extrinsic Error: block={self.block_number} "
            f"extrinsic={self.index} error={self.error.value}"
        )


class FailureSink:
    """
    Bounded, in-order record of failed extrinsics (most recent `capacity`).
    A capacity of zero keeps nothing.
    """

    def __init__(self, capacity: int = 1024) -> None:
        self._items: Deque[ExtrinsicFailure] = deque(maxlen=max(0, capacity))

    def record(self, failure: ExtrinsicFailure) -> None:
        self._items.append(failure)

    def for_block(self, block_number: int) -> List[ExtrinsicFailure]:
        return [f for f in self._items if f.block_number == block_number]

    def clear(self) -> None:
        self._items.clear()

    def __iter__(self) -> Iterator[ExtrinsicFailure]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)


# --------------------------------------------------------------------------------------
# Block execution
# --------------------------------------------------------------------------------------


def execute_block(
    runtime: Any,
    block: Block,
    *,
    sink: Optional[FailureSink] = None,
    log_failures: bool = True,
) -> DispatchResult:
    """
    Execute `block` against `runtime`.

    `runtime` must expose `system` (the System pallet) and
    `dispatch(caller, call) -> DispatchResult`.
    """
    system: SystemPallet = runtime.system

    with slog.trace_scope(component="executor"):
        system.inc_block_number()
        current = system.block_number()
        claimed = block.header.block_number
        slog.bind(height=current)

        if claimed != current:
            log.warning(
                "block rejected: number mismatch",
                extra={"expected": current, "got": claimed},
            )
            return DispatchResult.err(
                DispatchError.BLOCK_NUMBER_MISMATCH, expected=current, got=claimed
            )

        failed = 0
        for index, xt in enumerate(block.extrinsics):
            system.inc_nonce(xt.caller)
            res = runtime.dispatch(xt.caller, xt.call)
            if res.is_ok:
                continue

            failed += 1
            failure = ExtrinsicFailure(
                block_number=claimed, index=index, caller=xt.caller, error=res.error
            )
            if sink is not None:
                sink.record(failure)
            if log_failures:
                slog.bind(extrinsic=index, caller=xt.caller)
                log.warning("extrinsic failed", extra={"reason": res.error.value})
                slog.unbind("extrinsic", "caller")

        log.debug(
            "block executed",
            extra={"extrinsics": len(block.extrinsics), "failed": failed},
        )
        return DispatchResult.ok()


__all__ = ["ExtrinsicFailure", "FailureSink", "execute_block"]
