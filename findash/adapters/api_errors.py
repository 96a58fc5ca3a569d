from __future__ import annotations

from typing import Any, Optional


class ApiError(RuntimeError):
    """Base class for REST adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.hint = hint
        self.payload = payload
        self.context = context


class TransportError(ApiError):
    """Network failure, non-2xx status, or malformed JSON from the bank API.

    ``status`` is set only when the server answered. The underlying exception,
    when there is one, is chained as ``__cause__``.
    """

    @property
    def is_http_status(self) -> bool:
        return self.status is not None

    @property
    def is_server_error(self) -> bool:
        return self.status is not None and 500 <= self.status < 600


_SNIPPET_LIMIT = 400


def parse_error_payload(resp: Any) -> Any:
    """Return the JSON body of an error reply, or a text snippet when it is not JSON."""
    try:
        return resp.json()
    except ValueError:
        return (getattr(resp, "text", "") or "")[:_SNIPPET_LIMIT] or None


def error_detail(payload: Any) -> Optional[str]:
    """Pick the human-readable part of a bank API error body.

    The API answers ``{"detail": "..."}`` or, for rejected input, a list of
    ``{"loc": [...], "msg": "..."}`` entries under ``detail``.
    """
    if isinstance(payload, str):
        return payload.strip() or None
    if not isinstance(payload, dict):
        return None
    detail = payload.get("detail", payload.get("message"))
    if isinstance(detail, str):
        return detail.strip() or None
    if isinstance(detail, list):
        messages = [
            str(item.get("msg")).strip()
            for item in detail
            if isinstance(item, dict) and item.get("msg")
        ]
        return "; ".join(messages) or None
    return None


def build_error_message(ctx: str, status: int, payload: Any) -> str:
    detail = error_detail(payload)
    if detail:
        return f"{ctx}: {detail} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


def extract_error_code(payload: Any) -> Optional[str]:
    if isinstance(payload, dict) and payload.get("code") is not None:
        return str(payload["code"])
    return None


def extract_error_hint(payload: Any) -> Optional[str]:
    """Explicit ``hint`` field, falling back to the error detail."""
    if isinstance(payload, dict):
        hint = payload.get("hint")
        if isinstance(hint, str) and hint.strip():
            return hint.strip()
    return error_detail(payload)
