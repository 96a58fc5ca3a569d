from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from findash.domain.ports import DEFAULT_TRANSACTIONS_LIMIT, BankPort, UserId

from .api_errors import TransportError


@dataclass
class BankMock(BankPort):
    """Offline substitute for ``BankRestAdapter`` backed by in-memory lists.

    ``failures`` maps an endpoint name (``users``, ``create_user``,
    ``accounts``, ``cards``, ``transactions``) to a message; calls to that
    endpoint raise ``TransportError``. ``delays`` maps endpoint names to
    seconds slept before answering.
    """

    users: List[Dict[str, Any]] = field(default_factory=list)
    accounts: List[Dict[str, Any]] = field(default_factory=list)
    cards: List[Dict[str, Any]] = field(default_factory=list)
    transactions: List[Dict[str, Any]] = field(default_factory=list)
    users_payload: Any = None
    truncate_transactions: bool = True
    failures: Dict[str, str] = field(default_factory=dict)
    delays: Dict[str, float] = field(default_factory=dict)
    calls: List[Tuple[str, Tuple[Any, ...]]] = field(default_factory=list)

    # ---------- BankPort ----------

    async def list_users(self) -> Any:
        await self._enter("users")
        if self.users_payload is not None:
            return self.users_payload
        return [dict(user) for user in self.users]

    async def create_user(self, name: str, email: str) -> Any:
        await self._enter("create_user", name, email)
        user = {"id": f"u-{uuid4().hex[:8]}", "name": name, "email": email}
        self.users.append(user)
        return dict(user)

    async def list_accounts(self, user_id: UserId) -> Any:
        await self._enter("accounts", user_id)
        return self._owned(self.accounts, user_id)

    async def list_cards(self, user_id: UserId) -> Any:
        await self._enter("cards", user_id)
        return self._owned(self.cards, user_id)

    async def list_transactions(
        self, user_id: UserId, limit: int = DEFAULT_TRANSACTIONS_LIMIT
    ) -> Any:
        await self._enter("transactions", user_id, limit)
        owned = self._owned(self.transactions, user_id)
        owned.sort(key=lambda item: str(item.get("occurred_at") or ""), reverse=True)
        if self.truncate_transactions:
            return owned[: int(limit)]
        return owned

    # ---------- Helpers ----------

    def calls_to(self, endpoint: str) -> List[Tuple[Any, ...]]:
        return [args for name, args in self.calls if name == endpoint]

    async def _enter(self, endpoint: str, *args: Any) -> None:
        self.calls.append((endpoint, args))
        delay = self.delays.get(endpoint)
        if delay:
            await asyncio.sleep(delay)
        else:
            await asyncio.sleep(0)
        message: Optional[str] = self.failures.get(endpoint)
        if message is not None:
            raise TransportError(message, context=f"mock {endpoint}")

    @staticmethod
    def _owned(records: List[Dict[str, Any]], user_id: UserId) -> List[Dict[str, Any]]:
        # "*" marks records shared by every user (demo seeding).
        return [
            dict(record)
            for record in records
            if str(record.get("user_id", "")) in ("*", str(user_id))
        ]


def demo_bank() -> BankMock:
    """Return a mock seeded with one account set, two cards and some activity."""
    return BankMock(
        accounts=[
            {"id": "a1", "user_id": "*", "balance": 2450.75},
            {"id": "a2", "user_id": "*", "balance": 12890.10},
        ],
        cards=[
            {
                "id": "c1",
                "user_id": "*",
                "brand": "Visa",
                "last4": "4242",
                "cardholder": "Demo User",
                "status": "active",
                "color": "#7c3aed",
            },
            {
                "id": "c2",
                "user_id": "*",
                "brand": "Mastercard",
                "last4": "5454",
                "cardholder": "Demo User",
                "status": "frozen",
                "color": "#f97316",
            },
        ],
        transactions=[
            {
                "id": f"t{idx}",
                "user_id": "*",
                "description": description,
                "amount": amount,
                "direction": direction,
                "occurred_at": f"2026-10-{10 + idx:02d}T09:30:00Z",
            }
            for idx, (description, amount, direction) in enumerate(
                [
                    ("Coffee Roasters", -4.5, "debit"),
                    ("Salary", 3200.0, "credit"),
                    ("Grocery Market", -82.14, "debit"),
                    ("Streaming Plan", -15.99, "debit"),
                    ("Refund", 24.0, "credit"),
                    ("Bookstore", -31.2, "debit"),
                ]
            )
        ],
    )


__all__ = ["BankMock", "demo_bank"]
