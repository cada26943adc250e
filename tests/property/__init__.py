"""
tests.property package bootstrap.

Registers named Hypothesis profiles (dev/ci/fast) and selects one using
HYPOTHESIS_PROFILE, otherwise "ci" when the CI env var is truthy and "dev"
locally.

Environment knobs:
- HYPOTHESIS_PROFILE=dev|ci|fast
- CI=true (auto-pick the 'ci' profile if HYPOTHESIS_PROFILE not set)

The root conftest has an autouse fixture, so every profile suppresses the
function-scoped-fixture health check.
"""
from __future__ import annotations

import os
from typing import Final, Tuple

from hypothesis import HealthCheck, Verbosity, given, settings
from hypothesis import strategies as st


def _hc(*items: HealthCheck) -> Tuple[HealthCheck, ...]:
    return items


_COMMON = _hc(HealthCheck.too_slow, HealthCheck.function_scoped_fixture)

settings.register_profile(
    "dev",
    settings(
        max_examples=100,
        deadline=None,
        suppress_health_check=_COMMON,
        verbosity=Verbosity.normal,
    ),
)

settings.register_profile(
    "ci",
    settings(
        max_examples=200,
        deadline=None,
        suppress_health_check=_COMMON + _hc(HealthCheck.filter_too_much),
        verbosity=Verbosity.verbose,
        derandomize=True,
    ),
)

settings.register_profile(
    "fast",
    settings(max_examples=25, deadline=None, suppress_health_check=_COMMON),
)


def _env_truthy(name: str) -> bool:
    v = os.getenv(name)
    return (v or "").lower() not in ("", "0", "false", "no", "off")


_active: Final[str] = os.getenv("HYPOTHESIS_PROFILE") or (
    "ci" if _env_truthy("CI") else "dev"
)
settings.load_profile(_active)


def active_profile() -> str:
    return _active


__all__ = ["st", "given", "active_profile"]
