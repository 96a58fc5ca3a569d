"""Shared async HTTP transport for the bank REST adapter.

This module provides a thin wrapper around ``httpx.AsyncClient`` that issues
JSON requests against one API base URL and collapses every transport, status,
and decode failure into :class:`findash.adapters.api_errors.TransportError`.

Dependencies:
    - ``httpx`` for async network I/O.
    - ``findash.adapters.api_errors`` for the typed failure and payload helpers.

Call context:
    - Constructed by ``findash.app.controller.build_controller`` and the web
      runtime, then handed to ``BankRestAdapter``.
    - Used only inside the adapter layer; use cases interact through ports.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import httpx

from findash.adapters.api_errors import (
    TransportError,
    build_error_message,
    extract_error_code,
    extract_error_hint,
    parse_error_payload,
)

LOGGER = logging.getLogger(__name__)

Query = Mapping[str, Any]


@dataclass
class HttpConfig:
    """Timeout configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Timeout in seconds applied to connect/read/write.
    """
    request_timeout_s: float = 10.0


class JsonClient:
    """Async JSON client bound to one API base URL.

    The client never retries; a failed request surfaces exactly one
    ``TransportError`` to the caller.
    """

    def __init__(
        self,
        base_url: str,
        cfg: Optional[HttpConfig] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Create the underlying ``httpx.AsyncClient``.

        Args:
            base_url: Absolute API root, e.g. ``http://localhost:8000``.
            cfg: Shared timeout settings.
            transport: Optional transport override (``httpx.MockTransport`` in
                tests).
        """
        cleaned = str(base_url or "").strip()
        if not cleaned:
            raise ValueError("JsonClient requires a base URL")
        self.base_url = cleaned.rstrip("/")
        self.cfg = cfg or HttpConfig()
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.cfg.request_timeout_s,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "JsonClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def get(self, path: str, query: Optional[Query] = None) -> Any:
        """Send a GET request and return the decoded JSON body.

        Args:
            path: Server-relative route such as ``/cards``.
            query: Mapping of primitive values; ``None`` entries are dropped.

        Raises:
            TransportError: On connectivity failure, non-2xx, or invalid JSON.
        """
        return await self._request("GET", path, params=self._clean_query(query))

    async def post(self, path: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        """Send a JSON POST request and return the decoded JSON body.

        Raises:
            TransportError: On connectivity failure, non-2xx, or invalid JSON.
        """
        payload = None if body is None else dict(body)
        return await self._request("POST", path, json=payload)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        context = f"{method} {self._normalize_path(path)}"
        LOGGER.debug("%s params=%s", context, kwargs.get("params"))
        try:
            resp = await self.client.request(method, self._normalize_path(path), **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(
                f"{context}: {type(exc).__name__}: {exc}",
                context=context,
            ) from exc
        self._ensure_ok(resp, context)
        return self._json_any(resp, context)

    @staticmethod
    def _normalize_path(path: str) -> str:
        cleaned = str(path or "").strip()
        if not cleaned.startswith("/"):
            cleaned = f"/{cleaned}"
        return cleaned

    @staticmethod
    def _clean_query(query: Optional[Query]) -> Optional[Dict[str, Any]]:
        if not query:
            return None
        return {str(key): value for key, value in query.items() if value is not None}

    @staticmethod
    def _ensure_ok(resp: httpx.Response, ctx: str) -> None:
        if 200 <= resp.status_code < 300:
            return
        status = resp.status_code
        payload = parse_error_payload(resp)
        raise TransportError(
            build_error_message(ctx, status, payload),
            status=status,
            code=extract_error_code(payload),
            hint=extract_error_hint(payload),
            payload=payload,
            context=ctx,
        )

    @staticmethod
    def _json_any(resp: httpx.Response, ctx: str) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            snippet = resp.text[:400]
            raise TransportError(
                f"{ctx}: invalid JSON response: {snippet}",
                status=resp.status_code,
                payload=snippet or None,
                context=ctx,
            ) from exc


__all__ = ["HttpConfig", "JsonClient"]
