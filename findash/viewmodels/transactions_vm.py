from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from findash.domain.entities import Transaction
from findash.usecases.load_section import SectionState

from .money_format import format_signed


@dataclass(frozen=True)
class TransactionRow:
    """Display row model consumed by the recent-activity list."""
    key: str
    description: str
    occurred_at: str
    amount: str
    tone: str


class TransactionsVM:
    """
    Lightweight view-model for the recent activity panel.

    Rows keep the order the server sent (most recent first) and are not
    truncated here.
    """

    title = "Recent Activity"

    def __init__(self) -> None:
        self.state: SectionState[Transaction] = SectionState()

    def apply(self, state: SectionState[Transaction]) -> None:
        self.state = state

    def placeholder(self) -> Optional[str]:
        if self.state.loading:
            return "Loading transactions..."
        if not self.state.items:
            return "No recent activity."
        return None

    def rows(self) -> List[TransactionRow]:
        return [self._to_row(index, tx) for index, tx in enumerate(self.state.items)]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _to_row(self, index: int, tx: Transaction) -> TransactionRow:
        return TransactionRow(
            key=tx.id or f"tx-{index}",
            description=tx.description or "(no description)",
            occurred_at=self._format_dt(tx.occurred_at),
            amount=format_signed(tx.amount, debit=tx.is_debit),
            tone="negative" if tx.is_debit else "positive",
        )

    @staticmethod
    def _format_dt(value: Optional[datetime]) -> str:
        """Render the timestamp in local time; empty when unknown."""
        if value is None:
            return ""
        return value.astimezone().strftime("%Y-%m-%d %H:%M")


__all__ = ["TransactionRow", "TransactionsVM"]
