"""Use case joining the accounts and cards fetches into DashboardStats."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, List

from findash.domain.aggregation import aggregate
from findash.domain.entities import DashboardStats
from findash.domain.ports import BankPort, UseCaseError, UserId
from findash.usecases.error_mapping import map_api_error


@dataclass
class FetchDashboardStats:
    """Fan out ``/accounts`` and ``/cards`` concurrently, then aggregate.

    Both requests are awaited to completion before anything is computed; if
    either fails the whole call raises and no partial stats exist.
    """

    bank_port: BankPort

    async def __call__(self, *, user_id: UserId) -> DashboardStats:
        if not str(user_id or "").strip():
            raise UseCaseError("STATS_NO_USER", "A resolved user is required.")

        results = await asyncio.gather(
            self.bank_port.list_accounts(user_id),
            self.bank_port.list_cards(user_id),
            return_exceptions=True,
        )
        for outcome in results:
            if isinstance(outcome, BaseException):
                raise map_api_error(
                    outcome,
                    default_code="STATS_FETCH_FAILED",
                    default_message="Failed to load account summary.",
                ) from outcome

        accounts_payload, cards_payload = results
        accounts = self._as_list(accounts_payload, "accounts")
        cards = self._as_list(cards_payload, "cards")
        return aggregate(accounts, cards)

    @staticmethod
    def _as_list(payload: Any, label: str) -> List[Any]:
        if not isinstance(payload, list):
            raise UseCaseError(
                "INVALID_RESPONSE",
                f"Expected a list of {label}, got {type(payload).__name__}.",
            )
        return payload


__all__ = ["FetchDashboardStats"]
