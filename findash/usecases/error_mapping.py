"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Optional

from findash.adapters.api_errors import ApiError, TransportError, extract_error_hint
from findash.domain.ports import UseCaseError


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    Args:
        exc: Exception raised by a port call or by payload normalization.
        default_code: Code used when ``exc`` is not a known adapter error.
        default_message: Message used for unknown errors; falls back to
            ``str(exc)``.

    Returns:
        UseCaseError carrying the mapped code and message.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, TransportError):
        status = exc.status
        if status is None:
            return UseCaseError("API_UNREACHABLE", "Bank API unreachable. Check connection.")
        if 200 <= status < 300:
            return UseCaseError("INVALID_RESPONSE", "Bank API returned malformed JSON.")
        if 500 <= status < 600:
            return UseCaseError("SERVER_ERROR", "Bank API error, try again.")
        hint = exc.hint or extract_error_hint(exc.payload)
        return UseCaseError(
            "REQUEST_FAILED",
            _compose_error_message(f"Request failed (HTTP {status})", hint),
        )
    if isinstance(exc, ApiError):
        return UseCaseError("API_ERROR", str(exc))

    message = default_message or str(exc) or "Unexpected error."
    return UseCaseError(default_code, message)


def _compose_error_message(base: str, hint: Optional[str]) -> str:
    hint_text = (hint or "").strip()
    if hint_text:
        return f"{base}: {hint_text}"
    if base.endswith("."):
        return base
    return f"{base}."


__all__ = ["map_api_error"]
