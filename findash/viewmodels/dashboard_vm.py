"""Summary tiles projection for the dashboard stats row."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from findash.domain.entities import DashboardStats

from .money_format import format_money


@dataclass(frozen=True)
class StatTile:
    """Display tile consumed by the stats row widget."""
    label: str
    value: str


@dataclass
class DashboardVM:
    """Hold the last published stats and expose them as tiles."""

    stats: DashboardStats = field(default_factory=DashboardStats)
    stats_error: Optional[str] = None
    user_label: str = ""

    def apply(
        self,
        stats: DashboardStats,
        *,
        user_id: Optional[str] = None,
        stats_error: Optional[str] = None,
    ) -> None:
        self.stats = stats
        self.stats_error = stats_error
        self.user_label = f"User {user_id}" if user_id else "No active user"

    def tiles(self) -> List[StatTile]:
        return [
            StatTile("Total Balance", format_money(self.stats.balance)),
            StatTile("Accounts", str(self.stats.accounts)),
            StatTile("Cards", str(self.stats.cards)),
        ]


__all__ = ["DashboardVM", "StatTile"]
