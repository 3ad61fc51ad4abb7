"""Environment-variable switches shared by the runner and the REPL."""

from __future__ import annotations

import logging
import os

DEBUG_ENV = "MONKEY_DEBUG"
PY_TRACE_ENV = "MONKEY_DEBUG_PY_TRACE"

_TRUTHY = ("1", "true", "yes", "on")


def env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


def debug_enabled() -> bool:
    return env_flag(DEBUG_ENV)


def debug_py_trace_enabled() -> bool:
    return env_flag(PY_TRACE_ENV)


def configure_logging() -> None:
    """Send monkey.* debug records to stderr when MONKEY_DEBUG is set."""
    if debug_enabled():
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
