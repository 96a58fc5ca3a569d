"""Root logger setup for the dashboard runtime."""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"
# Per-request lines from httpx are noise at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore")


def _env_level(env: Mapping[str, str]) -> Optional[int]:
    """Level from FINDASH_LOG_LEVEL (name or number), else DEBUG if FINDASH_DEBUG is truthy."""
    text = (env.get("FINDASH_LOG_LEVEL") or "").strip().upper()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text) if text else None
    if isinstance(level, int):
        return level
    if (env.get("FINDASH_DEBUG") or "").strip().lower() in {"1", "true", "yes", "on"}:
        return logging.DEBUG
    return None


def configure_root(
    default_level: int = logging.INFO, environ: Optional[Mapping[str, str]] = None
) -> int:
    """Configure the root logger and return the effective level."""
    env = os.environ if environ is None else environ
    effective = _env_level(env) or default_level

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=effective, format=_FORMAT, datefmt=_DATEFMT)
    root.setLevel(effective)
    quiet = logging.WARNING if effective > logging.DEBUG else logging.NOTSET
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(quiet)
    return effective


__all__ = ["configure_root"]
