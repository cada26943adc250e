"""
statemachine.runtime.runtime — the Runtime aggregate.

The Runtime owns exactly one instance of each pallet, all built from the same
`RuntimeConfig`. It does no business logic of its own: `dispatch` matches the
RuntimeCall tag and forwards (caller, inner call) to the owning pallet, and
`execute_block` hands the block to the executor.

    runtime = Runtime()
    runtime.balances.set_balance("alice", 100)
    block = Block.build(1, [Extrinsic("alice", RuntimeCall.balances(Transfer("bob", 20)))])
    runtime.execute_block(block).expect("invalid block")
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from smcore.types.block import Block

from ..config import ExecutionConfig, get_config
from ..errors import DispatchResult, InvalidCall
from ..pallets import balances, proof_of_existence, system
from . import executor, inspection
from .bindings import RuntimeConfig
from .dispatcher import PalletId, RuntimeCall


class Runtime:
    def __init__(
        self,
        config: Optional[RuntimeConfig] = None,
        *,
        settings: Optional[ExecutionConfig] = None,
    ) -> None:
        settings = settings or get_config()
        self.config = config or RuntimeConfig.from_settings(settings)
        self.settings = settings

        self.system = system.Pallet(self.config)
        self.balances = balances.Pallet(self.config)
        self.proof_of_existence = proof_of_existence.Pallet(self.config)

        self.failures = executor.FailureSink(settings.limits.max_recorded_failures)

    # ---------------- genesis ----------------

    @classmethod
    def with_balances(cls, initial: Mapping[Any, int], **kwargs: Any) -> "Runtime":
        """Build a runtime and seed balances (administrative, not extrinsics)."""
        rt = cls(**kwargs)
        for who, amount in initial.items():
            rt.balances.set_balance(who, amount)
        return rt

    # ---------------- dispatch ----------------

    def dispatch(self, caller: Any, call: RuntimeCall) -> DispatchResult:
        if not isinstance(call, RuntimeCall):
            raise InvalidCall("runtime dispatch expects a RuntimeCall", got=type(call).__name__)
        if call.pallet is PalletId.BALANCES:
            return self.balances.dispatch(caller, call.call)
        if call.pallet is PalletId.PROOF_OF_EXISTENCE:
            return self.proof_of_existence.dispatch(caller, call.call)
        raise InvalidCall("no pallet registered for tag", pallet=call.pallet.value)

    # ---------------- blocks ----------------

    def execute_block(self, block: Block) -> DispatchResult:
        return executor.execute_block(
            self,
            block,
            sink=self.failures,
            log_failures=self.settings.features.log_failures,
        )

    # ---------------- reads ----------------

    def block_number(self) -> int:
        return self.system.block_number()

    def nonce(self, who: Any) -> int:
        return self.system.nonce(who)

    def balance(self, who: Any) -> int:
        return self.balances.balance(who)

    def get_claim(self, content: Any) -> Optional[Any]:
        return self.proof_of_existence.get_claim(content)

    # ---------------- inspection ----------------

    def snapshot(self) -> Dict[str, Any]:
        return inspection.snapshot(self)

    def render(self) -> str:
        return inspection.render(self)

    def state_root(self) -> bytes:
        return inspection.state_root(self)

    def __repr__(self) -> str:
        return (
            f"Runtime(block_number={self.system.block_number()}, "
            f"{self.system!r}, {self.balances!r}, {self.proof_of_existence!r})"
        )


__all__ = ["Runtime"]
