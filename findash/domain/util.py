"""Tolerant field coercion for raw bank API records."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Sequence


def coerce_amount(value: Any) -> Optional[Decimal]:
    """
    Convert a JSON number (or numeric string) into a finite Decimal.

    Returns None for missing, boolean, non-numeric, NaN or infinite input.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        candidate = value
    elif isinstance(value, (int, float)):
        candidate = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            candidate = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    if not candidate.is_finite():
        return None
    return candidate


def first_present(payload: Mapping[str, Any], keys: Sequence[str]) -> Any:
    """Return the first non-None value stored under any of ``keys``."""
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return None


def as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def parse_server_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 server timestamp; naive values are taken as UTC."""
    if isinstance(value, datetime):
        parsed = value
    else:
        text = as_text(value)
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


__all__ = ["as_text", "coerce_amount", "first_present", "parse_server_datetime"]
