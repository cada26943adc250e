import logging
import os

import pytest

from smcore import logging as slog
from statemachine import config as sm_config
from statemachine.runtime.bindings import RuntimeConfig
from statemachine.runtime.runtime import Runtime


@pytest.fixture(autouse=True)
def _isolate_process_state(monkeypatch):
    """
    Keep tests independent of the developer's environment: drop any
    STATEMACHINE_* variables, reset the cached config and the log context.
    The CLI reconfigures the root logger, so its handlers are restored too.
    """
    for key in list(os.environ):
        if key.startswith(sm_config.ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    sm_config.get_config.cache_clear()
    slog.clear_context()
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
    sm_config.get_config.cache_clear()
    slog.clear_context()


@pytest.fixture
def runtime() -> Runtime:
    return Runtime()


@pytest.fixture
def small_runtime() -> Runtime:
    """Runtime with 8-bit balances so overflow is easy to reach."""
    return Runtime(
        settings=sm_config.load_config(env={}, overrides={"balance_bits": 8})
    )


@pytest.fixture
def runtime_config() -> RuntimeConfig:
    return RuntimeConfig()


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "property: hypothesis-driven property tests"
    )
