from __future__ import annotations

from typing import Any

from findash.domain.ports import DEFAULT_TRANSACTIONS_LIMIT, BankPort, UserId

from .http_client import JsonClient


class BankRestAdapter(BankPort):
    """REST adapter for the users/accounts/cards/transactions endpoints."""

    def __init__(self, client: JsonClient) -> None:
        self.client = client

    async def list_users(self) -> Any:
        return await self.client.get("/users")

    async def create_user(self, name: str, email: str) -> Any:
        return await self.client.post("/users", {"name": name, "email": email})

    async def list_accounts(self, user_id: UserId) -> Any:
        return await self.client.get("/accounts", {"user_id": user_id})

    async def list_cards(self, user_id: UserId) -> Any:
        return await self.client.get("/cards", {"user_id": user_id})

    async def list_transactions(
        self, user_id: UserId, limit: int = DEFAULT_TRANSACTIONS_LIMIT
    ) -> Any:
        # Truncation is the server's contract; whatever comes back is passed on.
        return await self.client.get(
            "/transactions", {"user_id": user_id, "limit": int(limit)}
        )


__all__ = ["BankRestAdapter"]
