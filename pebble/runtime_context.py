from __future__ import annotations
from contextlib import contextmanager
from contextvars import ContextVar
from functools import lru_cache
from typing import Iterator, Optional

from pebble import config

# Limit of the evaluation currently running; None means the configured default.
# A ContextVar keeps one Interpreter's limit from leaking into another's.
_max_depth: ContextVar[Optional[int]] = ContextVar("pebble_max_depth", default=None)


@lru_cache(maxsize=None)
def configured_max_depth() -> int:
    """PEBBLE_MAX_DEPTH, read once per process."""
    return config.get_max_depth()


def get_max_depth() -> int:
    depth = _max_depth.get()
    if depth is None:
        return configured_max_depth()
    return depth


@contextmanager
def max_depth(depth: int) -> Iterator[None]:
    """Run the enclosed evaluation with `depth` as its recursion limit."""
    if depth <= 0:
        raise ValueError(f"max depth must be positive, got {depth}")
    token = _max_depth.set(depth)
    try:
        yield
    finally:
        _max_depth.reset(token)
