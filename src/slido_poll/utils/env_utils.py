"""Helpers for reading settings from ``.env`` files and the environment."""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv


def load_env(path: Optional[str] = None) -> bool:
    """Populate :data:`os.environ` from a ``.env`` file.

    Existing environment variables win over file values. ``path`` defaults to
    ``ENV_FILE`` or ``.env``. Returns False when the file does not exist.
    """
    target = path or os.getenv("ENV_FILE", ".env")
    if not os.path.exists(target):
        return False
    return load_dotenv(dotenv_path=target, override=False)


def getenv_bool(name: str, default: bool = False) -> bool:
    """Return True for 1/true/yes/on (case-insensitive), else default."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def env_ms(name: str, default: int) -> int:
    """Read a non-negative millisecond value; fall back to default when unparsable."""
    try:
        return max(int(os.getenv(name, str(default))), 0)
    except ValueError:
        return default


__all__ = ["env_ms", "getenv_bool", "load_env"]
