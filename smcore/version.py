"""
Version helpers.

Resolution order:
  1) STATEMACHINE_VERSION env var (authoritative override)
  2) installed distribution metadata ("pallet-runtime")
  3) DEFAULT_VERSION
"""

from __future__ import annotations

import os
from importlib.metadata import PackageNotFoundError, version as _dist_version

DEFAULT_VERSION = "0.1.0"
DIST_NAME = "pallet-runtime"


def _resolve() -> str:
    env = os.environ.get("STATEMACHINE_VERSION", "").strip()
    if env:
        return env
    try:
        return _dist_version(DIST_NAME)
    except PackageNotFoundError:
        return DEFAULT_VERSION


__version__ = _resolve()

__all__ = ["__version__", "DEFAULT_VERSION", "DIST_NAME"]
