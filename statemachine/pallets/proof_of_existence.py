"""
statemachine.pallets.proof_of_existence — exclusive ownership registry for content.

Claims map Content → owning AccountId. Content can be the data itself or its
hash; the runtime picks the binding. An account may hold many claims, but a
piece of content has at most one owner, and the presence of a key is the
proof of an active claim.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Protocol, Tuple

from smcore import logging as slog
from smcore.types.primitives import check_instance

from ..errors import DispatchError, DispatchResult, InvalidCall

log = slog.get_logger(__name__)

PALLET_NAME = "proof_of_existence"


class Config(Protocol):
    """Bindings the ProofOfExistence pallet needs from the enclosing runtime."""

    @property
    def account_id(self) -> type: ...

    @property
    def content(self) -> type: ...


@dataclass(frozen=True)
class CreateClaim:
    name: ClassVar[str] = "create_claim"
    bindings: ClassVar[Dict[str, str]] = {"content": "content"}

    content: Any


@dataclass(frozen=True)
class RevokeClaim:
    name: ClassVar[str] = "revoke_claim"
    bindings: ClassVar[Dict[str, str]] = {"content": "content"}

    content: Any


CALLS: Tuple[type, ...] = (CreateClaim, RevokeClaim)


class Pallet:
    def __init__(self, config: Config) -> None:
        self._config = config
        self._claims: Dict[Any, Any] = {}

    def get_claim(self, content: Any) -> Optional[Any]:
        """Owner of `content`, or None when unclaimed."""
        return self._claims.get(content)

    def create_claim(self, caller: Any, content: Any) -> DispatchResult:
        check_instance("AccountId", self._config.account_id, caller)
        check_instance("Content", self._config.content, content)
        if content in self._claims:
            return DispatchResult.err(DispatchError.CLAIM_ALREADY_EXISTS)
        self._claims[content] = caller
        log.debug("claim created", extra={"content": content})
        return DispatchResult.ok()

    def revoke_claim(self, caller: Any, content: Any) -> DispatchResult:
        check_instance("AccountId", self._config.account_id, caller)
        check_instance("Content", self._config.content, content)
        owner = self._claims.get(content)
        if owner is None:
            return DispatchResult.err(DispatchError.CLAIM_NOT_FOUND)
        if owner != caller:
            return DispatchResult.err(DispatchError.NOT_CLAIM_OWNER)
        del self._claims[content]
        log.debug("claim revoked", extra={"content": content})
        return DispatchResult.ok()

    def dispatch(self, caller: Any, call: Any) -> DispatchResult:
        if isinstance(call, CreateClaim):
            return self.create_claim(caller, call.content)
        if isinstance(call, RevokeClaim):
            return self.revoke_claim(caller, call.content)
        raise InvalidCall(
            "call is not owned by this pallet",
            pallet=PALLET_NAME,
            call=type(call).__name__,
        )

    def claims(self) -> Dict[Any, Any]:
        """Sorted copy of every active claim."""
        return dict(sorted(self._claims.items()))

    def __repr__(self) -> str:
        return f"proof_of_existence.Pallet(claims={len(self._claims)})"


__all__ = ["Config", "CreateClaim", "RevokeClaim", "CALLS", "Pallet", "PALLET_NAME"]
