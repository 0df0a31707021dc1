"""Environment helper utilities.

Provides functions for parsing environment variables into typed
configuration values.
"""

from __future__ import annotations

import os


def env_flag(name: str, default: bool) -> bool:
    """Return True/False for typical truthy env encodings."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int) -> int:
    """Return an int from the environment, or the default when unset/blank."""
    value = (os.getenv(name) or "").strip()
    if not value:
        return default
    return int(value)


def env_float(name: str, default: float) -> float:
    """Return a float from the environment, or the default when unset/blank."""
    value = (os.getenv(name) or "").strip()
    if not value:
        return default
    return float(value)


__all__ = [
    "env_flag",
    "env_int",
    "env_float",
]
