"""Money and status text helpers for view models.

Call context:
    ``DashboardVM``, ``CardsVM`` and ``TransactionsVM`` call these helpers so
    every panel renders amounts and status tokens the same way.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

Number = Union[Decimal, int, float]

_CENT = Decimal("0.01")


def format_money(amount: Optional[Number], *, currency: str = "$") -> str:
    """Format an amount as ``$1,234.50``; negative values get a leading ``-``.

    Amounts too large to hold at cent precision render in exponent form.
    """
    raw = Decimal(str(amount if amount is not None else 0))
    sign = "-" if raw < 0 else ""
    try:
        value = raw.quantize(_CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return f"{sign}{currency}{abs(raw):.2E}"
    return f"{sign}{currency}{abs(value):,.2f}"


def format_signed(amount: Number, *, debit: bool, currency: str = "$") -> str:
    """Format a transaction amount with a sign derived from its direction."""
    magnitude = abs(Decimal(str(amount)))
    sign = "-" if debit else "+"
    return f"{sign}{format_money(magnitude, currency=currency)}"


def status_label(status: Optional[str]) -> str:
    """Convert a raw card status token into display text."""
    key = (status or "").strip().lower()
    if not key:
        return "Unknown"
    return key.replace("_", " ").replace("-", " ").title()


__all__ = ["format_money", "format_signed", "status_label"]
