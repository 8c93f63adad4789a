"""
Environment-driven settings.

Values are read on every call so tests (and the CLI entry point) can change the
environment without reloading modules.
"""

from __future__ import annotations

import os

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    return default


def store_backend() -> str:
    """
    Which car store to build: "postgres" (default) or "memory".
    """
    return env_str("CARS_STORE", "postgres").lower()


def store_timeout_s() -> float:
    # Deadline for a single store call; the original server used 15s read/write timeouts.
    return env_float("CARS_STORE_TIMEOUT_S", 15.0)


def init_schema() -> bool:
    return env_bool("CARS_INIT_SCHEMA", True)


def legacy_error_status() -> bool:
    return env_bool("CARS_LEGACY_ERROR_STATUS", False)


def log_level() -> str:
    return env_str("LOG_LEVEL", "INFO").upper()
