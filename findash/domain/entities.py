from __future__ import annotations

"""Domain records shared across adapters, use-cases, and view models."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

from .util import as_text, coerce_amount, first_present, parse_server_datetime

# The bank API has served identities under both keys.
ID_KEYS = ("id", "_id")
USER_ID_KEYS = ("user_id", "userId")


def _record_id(payload: Mapping[str, Any]) -> str:
    return as_text(first_present(payload, ID_KEYS))


@dataclass(frozen=True)
class User:
    """Active identity for a dashboard session."""

    id: str
    name: str
    email: str

    @classmethod
    def from_payload(cls, payload: Any) -> "User":
        """Build a user from a raw API object.

        Raises:
            ValueError: When the payload is not an object or carries no id.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("User payload must be an object.")
        user_id = _record_id(payload)
        if not user_id:
            raise ValueError("User payload has no identifier.")
        return cls(
            id=user_id,
            name=as_text(payload.get("name")),
            email=as_text(payload.get("email")),
        )


@dataclass(frozen=True)
class Account:
    """Account record; ``balance`` is None when the server sent garbage."""

    id: str
    user_id: str
    balance: Optional[Decimal]

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Account":
        return cls(
            id=_record_id(payload),
            user_id=as_text(first_present(payload, USER_ID_KEYS)),
            balance=coerce_amount(payload.get("balance")),
        )


@dataclass(frozen=True)
class Card:
    """Payment card as shown in the cards section."""

    id: str
    user_id: str
    brand: str
    last4: str
    cardholder: str
    status: str
    color: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Card":
        color = as_text(payload.get("color")) or None
        return cls(
            id=_record_id(payload),
            user_id=as_text(first_present(payload, USER_ID_KEYS)),
            brand=as_text(payload.get("brand")),
            last4=as_text(payload.get("last4")),
            cardholder=as_text(payload.get("cardholder")),
            status=as_text(payload.get("status")),
            color=color,
        )


DEBIT = "debit"
CREDIT = "credit"


@dataclass(frozen=True)
class Transaction:
    """One entry of the recent-activity list."""

    id: str
    user_id: str
    description: str
    amount: Decimal
    direction: str
    occurred_at: Optional[datetime]

    @property
    def is_debit(self) -> bool:
        return self.direction == DEBIT

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Transaction":
        direction = as_text(payload.get("direction")).lower()
        if direction not in (DEBIT, CREDIT):
            direction = CREDIT
        return cls(
            id=_record_id(payload),
            user_id=as_text(first_present(payload, USER_ID_KEYS)),
            description=as_text(payload.get("description")),
            amount=coerce_amount(payload.get("amount")) or Decimal("0"),
            direction=direction,
            occurred_at=parse_server_datetime(
                first_present(payload, ("occurred_at", "occurredAt"))
            ),
        )


@dataclass(frozen=True)
class DashboardStats:
    """Derived summary: total balance plus account and card counts."""

    balance: Decimal = Decimal("0")
    accounts: int = 0
    cards: int = 0


__all__ = [
    "Account",
    "CREDIT",
    "Card",
    "DEBIT",
    "DashboardStats",
    "Transaction",
    "User",
]
