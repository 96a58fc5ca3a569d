from __future__ import annotations

import json
from typing import Any, Dict, List, Tuple

import httpx
import pytest

from findash.adapters.bank_rest import BankRestAdapter
from findash.adapters.http_client import JsonClient


class _Recorder:
    def __init__(self, payload: Any) -> None:
        self.payload = payload
        self.calls: List[Tuple[str, str, Dict[str, str], Any]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.calls.append(
            (request.method, request.url.path, dict(request.url.params), body)
        )
        return httpx.Response(200, json=self.payload)


def _adapter(recorder: _Recorder) -> BankRestAdapter:
    client = JsonClient("http://bank.local", transport=httpx.MockTransport(recorder))
    return BankRestAdapter(client)


@pytest.mark.asyncio
async def test_adapter_routes_each_endpoint() -> None:
    recorder = _Recorder([])
    adapter = _adapter(recorder)

    await adapter.list_users()
    await adapter.create_user("Demo User", "demo1@bank.dev")
    await adapter.list_accounts("u1")
    await adapter.list_cards("u1")
    await adapter.list_transactions("u1")
    await adapter.client.aclose()

    assert recorder.calls == [
        ("GET", "/users", {}, None),
        ("POST", "/users", {}, {"name": "Demo User", "email": "demo1@bank.dev"}),
        ("GET", "/accounts", {"user_id": "u1"}, None),
        ("GET", "/cards", {"user_id": "u1"}, None),
        ("GET", "/transactions", {"user_id": "u1", "limit": "5"}, None),
    ]


@pytest.mark.asyncio
async def test_adapter_passes_payload_through_untouched() -> None:
    payload = {"unexpected": "shape"}
    adapter = _adapter(_Recorder(payload))

    result = await adapter.list_users()
    await adapter.client.aclose()

    assert result == payload
