"""Configuration helpers for loading environment variables.

Variables defined in a project-level ``.env`` file are loaded once, before the
first lookup. Consumers should rely on :func:`get_env` and :func:`get_bool`
instead of :func:`os.getenv` so that the file is read in a single place.
Values already present in the process environment always win.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_FILE = Path(__file__).resolve().parents[1] / ".env"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@lru_cache(maxsize=1)
def _load_environment() -> None:
    """Load ``ENV_FILE`` if it exists, otherwise fall back to dotenv discovery."""

    if ENV_FILE.exists():
        load_dotenv(ENV_FILE, override=False)
    else:
        load_dotenv(override=False)


def get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Return the value for ``key`` from the environment.

    Parameters
    ----------
    key:
        The name of the environment variable to look up.
    default:
        The value to return when ``key`` is not present.
    """

    _load_environment()
    return os.environ.get(key, default)


def get_bool(key: str, default: bool) -> bool:
    """Interpret ``key`` as a boolean flag such as ``true``/``0``/``off``."""

    raw = get_env(key)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {key}: {raw!r}")


def configure_logging(level: str | int | None = None) -> None:
    """Apply ``level`` (or ``CASCADEGRAPH_LOG_LEVEL``) to the package logger."""

    if level is None:
        level = get_env("CASCADEGRAPH_LOG_LEVEL", "WARNING")
    if isinstance(level, str):
        level = level.upper()
    logging.getLogger("cascadegraph").setLevel(level)


__all__ = ["configure_logging", "get_bool", "get_env"]
