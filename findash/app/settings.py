"""Startup configuration for the dashboard runtime.

The API base URL is the only required external setting. It is read from the
environment once at startup; every other value has a fixed default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from findash.domain.ports import DEFAULT_TRANSACTIONS_LIMIT

DEFAULT_API_BASE_URL = "http://localhost:8000"
DEFAULT_REQUEST_TIMEOUT_S = 10.0

# First non-empty wins; VITE_BACKEND_URL is the frontend build variable.
_BASE_URL_ENV_VARS = ("FINDASH_API_BASE_URL", "VITE_BACKEND_URL")
_TIMEOUT_ENV_VAR = "FINDASH_REQUEST_TIMEOUT_S"


def _as_float(value: Optional[str], default: float) -> float:
    """Convert env text to a positive float with deterministic fallback."""
    try:
        parsed = float(str(value).strip())
    except (TypeError, ValueError):
        return float(default)
    if not parsed > 0 or parsed == float("inf"):
        return float(default)
    return parsed


@dataclass(frozen=True)
class DashboardSettings:
    """Resolved runtime settings."""

    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout_s: float = DEFAULT_REQUEST_TIMEOUT_S
    transactions_limit: int = DEFAULT_TRANSACTIONS_LIMIT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DashboardSettings":
        env = os.environ if environ is None else environ
        base_url = DEFAULT_API_BASE_URL
        for var in _BASE_URL_ENV_VARS:
            value = (env.get(var) or "").strip()
            if value:
                base_url = value
                break
        return cls(
            api_base_url=base_url.rstrip("/"),
            request_timeout_s=_as_float(env.get(_TIMEOUT_ENV_VAR), DEFAULT_REQUEST_TIMEOUT_S),
        )

    def with_base_url(self, base_url: Optional[str]) -> "DashboardSettings":
        """Return a copy with an explicit base URL override (CLI flag)."""
        cleaned = (base_url or "").strip()
        if not cleaned:
            return self
        return DashboardSettings(
            api_base_url=cleaned.rstrip("/"),
            request_timeout_s=self.request_timeout_s,
            transactions_limit=self.transactions_limit,
        )


__all__ = ["DEFAULT_API_BASE_URL", "DashboardSettings"]
