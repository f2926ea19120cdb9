from __future__ import annotations
import logging
import os


# Defaults
_DEFAULT_MAX_DEPTH = 400
_DEFAULT_LOG_LEVEL = "WARNING"


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{var} must be positive, got {value}")
    return value


def get_max_depth() -> int:
    """Maximum nesting of non-tail evaluations before a recursion error."""
    return int_from_env("PEBBLE_MAX_DEPTH", _DEFAULT_MAX_DEPTH)


def get_log_level() -> int:
    name = os.environ.get("PEBBLE_LOG_LEVEL", _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    # getLevelName returns "Level X" for unknown names
    return level if isinstance(level, int) else logging.WARNING
