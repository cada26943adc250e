"""
smcore.logging
--------------

Structured logging for the state machine, on top of the stdlib `logging`.

Fields that describe *where* execution is (trace id, block height, the
extrinsic being applied and its caller) live in a ContextVar and are attached
to every record emitted while they are bound. Per-call fields go through the
usual `extra={...}`.

    from smcore import logging as slog

    slog.setup_logging(level="INFO", fmt="text")   # once, in the entry point
    log = slog.get_logger(__name__)

    with slog.trace_scope(component="executor"):
        slog.bind(height=7)
        log.warning("extrinsic failed", extra={"reason": "InsufficientFunds"})

Output is either one JSON object per line or a single text line
(`ts | LEVEL | logger | ctx extras | msg`), colored on a TTY.
STATEMACHINE_LOG_FORMAT=json|text forces the format.
"""

from __future__ import annotations

import datetime as _dt
import json as _json
import logging
import os
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from enum import Enum
from typing import Any, Dict, Iterator, Optional, TextIO

LOG_FORMAT_ENV = "STATEMACHINE_LOG_FORMAT"
LOG_LEVEL_ENV = "STATEMACHINE_LOG_LEVEL"

DEFAULT_CONTEXT_KEYS = ("trace_id", "component", "height", "extrinsic", "caller")

_CONTEXT: ContextVar[Dict[str, Any]] = ContextVar("statemachine_log_context", default={})

# Attributes every LogRecord carries; anything else on a record came from `extra`.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


# ----------------------------
# Context
# ----------------------------


def context() -> Dict[str, Any]:
    """Copy of the fields bound in the current context."""
    return dict(_CONTEXT.get())


def bind(**fields: Any) -> None:
    _CONTEXT.set({**_CONTEXT.get(), **{k: _plain(v) for k, v in fields.items()}})


def unbind(*keys: str) -> None:
    cur = dict(_CONTEXT.get())
    for k in keys:
        cur.pop(k, None)
    _CONTEXT.set(cur)


def clear_context() -> None:
    _CONTEXT.set({})


@contextmanager
def trace_scope(trace_id: Optional[str] = None, **fields: Any) -> Iterator[None]:
    """Bind a trace id (generated when omitted) plus `fields`; restore on exit."""
    token = _CONTEXT.set(dict(_CONTEXT.get()))
    try:
        bind(trace_id=trace_id or uuid.uuid4().hex[:12], **fields)
        yield
    finally:
        _CONTEXT.reset(token)


def _plain(v: Any) -> Any:
    if isinstance(v, Enum):
        return v.value
    if isinstance(v, (bytes, bytearray)):
        return v.hex()
    if v is None or isinstance(v, (bool, int, float, str, list, dict)):
        return v
    return str(v)


def _extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        k: _plain(v)
        for k, v in record.__dict__.items()
        if k not in _RECORD_ATTRS and not k.startswith("_")
    }


def _now() -> str:
    return _dt.datetime.now(_dt.timezone.utc).isoformat(timespec="milliseconds")


# ----------------------------
# Formatters
# ----------------------------


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": _now(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            **context(),
        }
        for k, v in _extras(record).items():
            payload.setdefault(k, v)
        if record.exc_info:
            payload["err"] = self.formatException(record.exc_info)
        return _json.dumps(payload, default=str, separators=(",", ":"))


_COLORS = {
    logging.DEBUG: "\x1b[90m",
    logging.INFO: "\x1b[32m",
    logging.WARNING: "\x1b[33m",
    logging.ERROR: "\x1b[31m",
    logging.CRITICAL: "\x1b[1m\x1b[35m",
}
_RESET = "\x1b[0m"


class TextFormatter(logging.Formatter):
    """
    One line per record:
      2026-01-05T12:34:56.789+00:00 | WARNING | statemachine.runtime.executor | height=2 extrinsic=1 reason=ClaimNotFound | extrinsic failed
    """

    def __init__(self, stream: Any):
        super().__init__()
        self._color = _is_tty(stream)

    def format(self, record: logging.LogRecord) -> str:
        ctx = context()
        pairs = [f"{k}={ctx[k]}" for k in DEFAULT_CONTEXT_KEYS if ctx.get(k) is not None]
        pairs += [f"{k}={v}" for k, v in _extras(record).items() if k not in ctx]

        level = record.levelname
        if self._color:
            level = f"{_COLORS.get(record.levelno, '')}{level}{_RESET}"
        cols = [_now(), level, record.name]
        if pairs:
            cols.append(" ".join(pairs))
        cols.append(record.getMessage())
        line = " | ".join(cols)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


# ----------------------------
# Setup
# ----------------------------


def configure(
    *,
    json: Optional[bool] = None,
    level: str | int = "INFO",
    stream: TextIO = sys.stderr,
) -> None:
    """
    Replace the root handlers with one console handler on `stream`.
    `json=None` picks JSON from STATEMACHINE_LOG_FORMAT, else JSON when `stream`
    is not a TTY.
    """
    if json is None:
        json = _env_json()
    if json is None:
        json = not _is_tty(stream)
    lvl = _level(level)

    root = logging.getLogger()
    root.setLevel(lvl)
    for h in list(root.handlers):
        root.removeHandler(h)
    handler = logging.StreamHandler(stream)
    handler.setLevel(lvl)
    handler.setFormatter(JSONFormatter() if json else TextFormatter(stream))
    root.addHandler(handler)


def setup_logging(
    *,
    level: str | int | None = None,
    fmt: str = "text",
    stream: TextIO = sys.stderr,
) -> None:
    """CLI entry point setup; STATEMACHINE_LOG_FORMAT / STATEMACHINE_LOG_LEVEL win when set."""
    env = _env_json()
    configure(
        json=env if env is not None else fmt.strip().lower() == "json",
        level=level if level is not None else os.environ.get(LOG_LEVEL_ENV, "INFO"),
        stream=stream,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or "statemachine")


def _level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def _env_json() -> Optional[bool]:
    return {"json": True, "text": False}.get(os.environ.get(LOG_FORMAT_ENV, "").strip().lower())


def _is_tty(stream: Any) -> bool:
    try:
        return bool(stream.isatty()) and os.environ.get("NO_COLOR") is None
    except (AttributeError, ValueError):
        return False


__all__ = [
    "DEFAULT_CONTEXT_KEYS",
    "JSONFormatter",
    "LOG_FORMAT_ENV",
    "LOG_LEVEL_ENV",
    "TextFormatter",
    "bind",
    "clear_context",
    "configure",
    "context",
    "get_logger",
    "setup_logging",
    "trace_scope",
    "unbind",
]
