"""Reduced motion preference.

Single source of truth for whether springs should animate at all. When the
preference is on, running springs jump straight to their destination on the
next tick and report rest.

Bootstrap: ``APP_PREFER_REDUCED_MOTION=1`` (or "true"/"yes"/"on",
case-insensitive) enables the preference at import time.

Public API:
- set_reduced_motion(enabled: bool) -> None
- is_reduced_motion() -> bool
- temporarily_reduced_motion(force: bool = True) -> context manager
"""

from __future__ import annotations

import contextlib
import os
from typing import Iterator

__all__ = [
    "set_reduced_motion",
    "is_reduced_motion",
    "temporarily_reduced_motion",
]

_reduced_motion_enabled: bool = (
    os.getenv("APP_PREFER_REDUCED_MOTION", "").strip().lower() in {"1", "true", "yes", "on"}
)


def set_reduced_motion(enabled: bool) -> None:
    global _reduced_motion_enabled
    _reduced_motion_enabled = bool(enabled)


def is_reduced_motion() -> bool:
    return _reduced_motion_enabled


@contextlib.contextmanager
def temporarily_reduced_motion(force: bool = True) -> Iterator[None]:
    """Override the preference for the duration of the block.

    The previous value is restored on normal exit and on exception.
    """
    prev = _reduced_motion_enabled
    try:
        set_reduced_motion(force)
        yield
    finally:
        set_reduced_motion(prev)
