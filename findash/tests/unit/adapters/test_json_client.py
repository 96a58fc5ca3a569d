from __future__ import annotations

import json
from typing import Callable, List

import httpx
import pytest

from findash.adapters.api_errors import TransportError
from findash.adapters.http_client import JsonClient

Handler = Callable[[httpx.Request], httpx.Response]


def _client(handler: Handler, base_url: str = "http://bank.local/api/") -> JsonClient:
    return JsonClient(base_url, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_get_joins_base_path_and_encodes_query() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"id": "c1"}])

    async with _client(handler) as client:
        data = await client.get("/cards", {"user_id": "u 1", "limit": 5, "skip": None})

    assert data == [{"id": "c1"}]
    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/api/cards"
    assert request.url.params["user_id"] == "u 1"
    assert request.url.params["limit"] == "5"
    assert "skip" not in request.url.params
    assert request.headers["accept"] == "application/json"


@pytest.mark.asyncio
async def test_post_sends_json_body() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"id": "u1", **json.loads(request.content)})

    async with _client(handler) as client:
        created = await client.post("/users", {"name": "Demo User", "email": "d@bank.dev"})

    assert created == {"id": "u1", "name": "Demo User", "email": "d@bank.dev"}
    assert seen[0].method == "POST"
    assert seen[0].url.path == "/api/users"
    assert seen[0].headers["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_non_2xx_status_becomes_transport_error_with_detail() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"detail": "database offline"})

    async with _client(handler) as client:
        with pytest.raises(TransportError) as excinfo:
            await client.get("/accounts", {"user_id": "u1"})

    err = excinfo.value
    assert err.status == 503
    assert err.is_server_error
    assert err.context == "GET /accounts"
    assert "database offline" in str(err)
    assert "HTTP 503" in str(err)


@pytest.mark.asyncio
async def test_client_error_keeps_code_and_hint() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            422, json={"detail": "bad input", "code": "INVALID", "hint": "email taken"}
        )

    async with _client(handler) as client:
        with pytest.raises(TransportError) as excinfo:
            await client.post("/users", {"name": "x", "email": "y"})

    assert excinfo.value.status == 422
    assert excinfo.value.code == "INVALID"
    assert excinfo.value.hint == "email taken"


@pytest.mark.asyncio
async def test_malformed_json_becomes_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>not json</html>")

    async with _client(handler) as client:
        with pytest.raises(TransportError) as excinfo:
            await client.get("/users")

    assert excinfo.value.status == 200
    assert "invalid JSON" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, ValueError)


@pytest.mark.asyncio
async def test_connection_failure_becomes_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(TransportError) as excinfo:
            await client.get("/users")

    assert excinfo.value.status is None
    assert not excinfo.value.is_http_status
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_client_requires_base_url() -> None:
    with pytest.raises(ValueError):
        JsonClient("  ")


@pytest.mark.asyncio
async def test_validation_error_list_becomes_hint() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            422,
            json={
                "detail": [
                    {"loc": ["body", "email"], "msg": "value is not a valid email"},
                    {"loc": ["body", "name"], "msg": "field required"},
                ]
            },
        )

    async with _client(handler) as client:
        with pytest.raises(TransportError) as excinfo:
            await client.post("/users", {"name": "", "email": "nope"})

    err = excinfo.value
    assert err.code is None
    assert err.hint == "value is not a valid email; field required"
    assert "value is not a valid email" in str(err)


@pytest.mark.asyncio
async def test_plain_text_error_body_is_kept_as_detail() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, content=b"Bad Gateway")

    async with _client(handler) as client:
        with pytest.raises(TransportError) as excinfo:
            await client.get("/cards", {"user_id": "u1"})

    assert excinfo.value.payload == "Bad Gateway"
    assert str(excinfo.value) == "GET /cards: Bad Gateway (HTTP 502)"
