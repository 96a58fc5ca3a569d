"""Domain package exports for bank records and derived statistics."""

from .aggregation import aggregate
from .entities import (
    CREDIT,
    DEBIT,
    Account,
    Card,
    DashboardStats,
    Transaction,
    User,
)
from .naming import make_demo_email
from .ports import BankPort, UseCaseError, UserId

__all__ = [
    "Account",
    "BankPort",
    "CREDIT",
    "Card",
    "DEBIT",
    "DashboardStats",
    "Transaction",
    "UseCaseError",
    "User",
    "UserId",
    "aggregate",
    "make_demo_email",
]
