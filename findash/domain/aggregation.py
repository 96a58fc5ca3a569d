"""Derive dashboard statistics from raw account and card collections."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Sequence

from .entities import Account, DashboardStats
from .util import coerce_amount


def _balance_of(record: Any) -> Decimal:
    if isinstance(record, Account):
        return record.balance or Decimal("0")
    if isinstance(record, Mapping):
        return coerce_amount(record.get("balance")) or Decimal("0")
    return Decimal("0")


def aggregate(accounts: Sequence[Any], cards: Sequence[Any]) -> DashboardStats:
    """Return total balance and counts for one joint accounts/cards snapshot.

    Accepts ``Account`` entities or raw mappings. Records whose balance is
    missing or not a finite number contribute 0; so does a record whose
    balance would push the running total outside the decimal exponent range.
    The function never raises for malformed entries.
    """
    accounts = list(accounts or ())
    cards = list(cards or ())
    total = Decimal("0")
    for record in accounts:
        try:
            total += _balance_of(record)
        except ArithmeticError:
            continue
    return DashboardStats(balance=total, accounts=len(accounts), cards=len(cards))


__all__ = ["aggregate"]
