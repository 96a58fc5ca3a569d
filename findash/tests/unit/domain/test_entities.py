from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from findash.domain.entities import Account, Card, Transaction, User
from findash.domain.naming import make_demo_email


def test_user_accepts_id_or_underscore_id() -> None:
    assert User.from_payload({"id": "u1", "name": "A", "email": "a@x"}).id == "u1"
    assert User.from_payload({"_id": "abc123"}).id == "abc123"


@pytest.mark.parametrize("payload", [{}, {"id": ""}, {"name": "no id"}, [], "u1", None])
def test_user_without_identifier_is_rejected(payload) -> None:
    with pytest.raises(ValueError):
        User.from_payload(payload)


def test_account_keeps_unparseable_balance_as_none() -> None:
    account = Account.from_payload({"_id": "a1", "user_id": "u1", "balance": "n/a"})

    assert account.id == "a1"
    assert account.user_id == "u1"
    assert account.balance is None


def test_card_optional_color_defaults_to_none() -> None:
    card = Card.from_payload(
        {"id": "c1", "brand": "Visa", "last4": "4242", "cardholder": "Ada", "status": "active"}
    )

    assert card.color is None
    assert card.last4 == "4242"


def test_transaction_parses_direction_amount_and_timestamp() -> None:
    tx = Transaction.from_payload(
        {
            "id": "t1",
            "userId": "u1",
            "description": "Coffee",
            "amount": "-4.50",
            "direction": "DEBIT",
            "occurred_at": "2026-10-01T08:15:00Z",
        }
    )

    assert tx.user_id == "u1"
    assert tx.amount == Decimal("-4.50")
    assert tx.is_debit
    assert tx.occurred_at == datetime(2026, 10, 1, 8, 15, tzinfo=timezone.utc)


def test_transaction_tolerates_garbage_fields() -> None:
    tx = Transaction.from_payload({"amount": "oops", "direction": "sideways", "occurred_at": "x"})

    assert tx.amount == Decimal("0")
    assert tx.direction == "credit"
    assert tx.occurred_at is None


def test_demo_emails_are_unique_within_the_same_millisecond() -> None:
    emails = {make_demo_email(now_ms=1_700_000_000_000) for _ in range(500)}

    assert len(emails) == 500
    assert all(email.startswith("demo1700000000000") for email in emails)
    assert all(email.endswith("@bank.dev") for email in emails)
