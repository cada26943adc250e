"""
statemachine.config — runtime configuration for the pallet runtime.

This module centralizes knobs for:
  • Primitive type widths (Balance / BlockNumber / Nonce bit sizes)
  • Failure reporting (log each failed extrinsic, how many failures to retain)

Configuration may be provided via environment variables. Safe defaults are chosen so a
local run works out of the box (u128 balances, u32 block numbers and nonces).

Environment variables (all optional):
  STATEMACHINE_BALANCE_BITS            -> integer > 0 (default: 128)
  STATEMACHINE_BLOCK_NUMBER_BITS       -> integer > 0 (default: 32)
  STATEMACHINE_NONCE_BITS              -> integer > 0 (default: 32)
  STATEMACHINE_MAX_RECORDED_FAILURES   -> integer ≥ 0 (default: 1024)
  STATEMACHINE_LOG_FAILURES            -> 0/1/true/false (default: 1)

Programmatic usage:
    from statemachine.config import get_config
    cfg = get_config()
    if cfg.features.log_failures:
        ...

Explicit `overrides` passed to `load_config` take precedence over the environment.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field
from functools import lru_cache
from typing import Any, Dict, Mapping, Optional, Union

from smcore.errors import ConfigError
from smcore.types.primitives import BALANCE_BITS, BLOCK_NUMBER_BITS, NONCE_BITS

ENV_PREFIX = "STATEMACHINE_"

# ----------------------------- helpers -------------------------------------


_BOOL_TRUE = {"1", "true", "t", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "f", "no", "n", "off"}


def _bool_value(value: Union[str, bool, int, None], default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    v = str(value).strip().lower()
    if v in _BOOL_TRUE:
        return True
    if v in _BOOL_FALSE:
        return False
    raise ConfigError("invalid boolean", value=str(value))


def _int_value(name: str, value: Union[str, int, None], default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer", value=value)
    try:
        return int(str(value).strip(), 10) if isinstance(value, str) else int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer", value=str(value)) from None


def _pick(
    key: str,
    env: Mapping[str, str],
    overrides: Mapping[str, Any],
) -> Any:
    if key in overrides:
        return overrides[key]
    return env.get(ENV_PREFIX + key.upper())


# ------------------------------ dataclasses ---------------------------------


@dataclass(frozen=True)
class TypeWidths:
    balance_bits: int = BALANCE_BITS
    block_number_bits: int = BLOCK_NUMBER_BITS
    nonce_bits: int = NONCE_BITS


@dataclass(frozen=True)
class FeatureFlags:
    log_failures: bool = True


@dataclass(frozen=True)
class Limits:
    max_recorded_failures: int = 1024


@dataclass(frozen=True)
class ExecutionConfig:
    widths: TypeWidths = field(default_factory=TypeWidths)
    features: FeatureFlags = field(default_factory=FeatureFlags)
    limits: Limits = field(default_factory=Limits)

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


# ------------------------------ loader --------------------------------------


def _validate(cfg: ExecutionConfig) -> ExecutionConfig:
    w = cfg.widths
    for name in ("balance_bits", "block_number_bits", "nonce_bits"):
        if getattr(w, name) <= 0:
            raise ConfigError(f"{name} must be > 0", value=getattr(w, name))
    if cfg.limits.max_recorded_failures < 0:
        raise ConfigError(
            "max_recorded_failures must be ≥ 0", value=cfg.limits.max_recorded_failures
        )
    return cfg


def load_config(
    env: Optional[Mapping[str, str]] = None,
    *,
    overrides: Optional[Mapping[str, Union[str, int, bool]]] = None,
) -> ExecutionConfig:
    """
    Build an ExecutionConfig from environment and optional overrides.

    Args:
        env: mapping to read variables from (default: os.environ)
        overrides: explicit field overrides; keys support:
          'balance_bits', 'block_number_bits', 'nonce_bits',
          'max_recorded_failures', 'log_failures'
    """
    env = os.environ if env is None else env
    overrides = dict(overrides or {})

    unknown = set(overrides) - {
        "balance_bits",
        "block_number_bits",
        "nonce_bits",
        "max_recorded_failures",
        "log_failures",
    }
    if unknown:
        raise ConfigError("unknown config override", keys=sorted(unknown))

    widths = TypeWidths(
        balance_bits=_int_value(
            "balance_bits", _pick("balance_bits", env, overrides), BALANCE_BITS
        ),
        block_number_bits=_int_value(
            "block_number_bits",
            _pick("block_number_bits", env, overrides),
            BLOCK_NUMBER_BITS,
        ),
        nonce_bits=_int_value("nonce_bits", _pick("nonce_bits", env, overrides), NONCE_BITS),
    )
    features = FeatureFlags(
        log_failures=_bool_value(_pick("log_failures", env, overrides), True),
    )
    limits = Limits(
        max_recorded_failures=_int_value(
            "max_recorded_failures", _pick("max_recorded_failures", env, overrides), 1024
        ),
    )
    return _validate(ExecutionConfig(widths=widths, features=features, limits=limits))


@lru_cache(maxsize=1)
def get_config() -> ExecutionConfig:
    """
    Cached global config. Suitable for application bootstraps and module-level consumers.
    """
    return load_config()


# ----------------------------- pretty-print ---------------------------------


def summary(cfg: Optional[ExecutionConfig] = None) -> str:
    """
    Return a human-friendly one-line summary of the execution knobs.
    """
    cfg = cfg or get_config()
    w = cfg.widths
    return (
        "exec{"
        f"balance=u{w.balance_bits}, block=u{w.block_number_bits}, nonce=u{w.nonce_bits}, "
        f"log_failures={int(cfg.features.log_failures)}, "
        f"max_failures={cfg.limits.max_recorded_failures}"
        "}"
    )


__all__ = [
    "TypeWidths",
    "FeatureFlags",
    "Limits",
    "ExecutionConfig",
    "load_config",
    "get_config",
    "summary",
]
