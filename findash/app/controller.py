"""Session orchestration for the dashboard.

``DashboardController`` composes the use cases for one dashboard session:

1. ``ResolveUserContext`` runs first and produces the session user id.
2. Once the id is known, three independent tasks are spawned:
   the stats fan-out/fan-in (``FetchDashboardStats``), the cards section and
   the transactions section.
3. ``close``/``aclose`` tear the session down; results arriving afterwards
   are dropped.

Call context:
    ``findash.web_ui.main`` builds one controller per browser client through
    :func:`build_controller`; tests construct it directly around a fake or
    mock ``BankPort``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, List, Mapping, Optional

from ..adapters.bank_rest import BankRestAdapter
from ..adapters.http_client import HttpConfig, JsonClient
from ..domain.entities import Card, DashboardStats, Transaction
from ..domain.ports import DEFAULT_TRANSACTIONS_LIMIT, BankPort, UseCaseError, UserId
from ..usecases.fetch_dashboard_stats import FetchDashboardStats
from ..usecases.load_section import LoadSection, SectionState
from ..usecases.resolve_user_context import ResolveUserContext
from .session import SessionScope
from .settings import DashboardSettings

LOGGER = logging.getLogger(__name__)

ChangeListener = Callable[["DashboardController"], None]


class DashboardController:
    """Own the per-session state: user id, stats, and section loaders."""

    def __init__(
        self,
        bank_port: BankPort,
        *,
        transactions_limit: int = DEFAULT_TRANSACTIONS_LIMIT,
        owned_client: Optional[JsonClient] = None,
    ) -> None:
        """Wire use cases around ``bank_port``.

        Args:
            bank_port: Port used for every request of the session.
            transactions_limit: ``limit`` query value for recent activity.
            owned_client: Transport closed together with the session, if any.
        """
        self.bank_port = bank_port
        self.transactions_limit = int(transactions_limit)
        self.scope = SessionScope()
        self._owned_client = owned_client
        self._user_id: Optional[UserId] = None
        self._session_task: Optional[asyncio.Task] = None
        self._listeners: List[ChangeListener] = []

        self.stats = DashboardStats()
        self.stats_error: Optional[str] = None
        self.resolve_failed = False
        self._stats_generation = 0

        self.uc_resolve = ResolveUserContext(bank_port)
        self.uc_stats = FetchDashboardStats(bank_port)
        self.cards: LoadSection[Card] = LoadSection(
            "cards",
            self._fetch_cards,
            Card.from_payload,
            guard=self.scope.is_active,
            on_change=self._section_changed,
        )
        self.transactions: LoadSection[Transaction] = LoadSection(
            "transactions",
            self._fetch_transactions,
            Transaction.from_payload,
            guard=self.scope.is_active,
            on_change=self._section_changed,
        )

    # ------------------------------------------------------------------
    # Public state
    # ------------------------------------------------------------------
    @property
    def user_id(self) -> Optional[UserId]:
        """Session user id; ``None`` until resolved, then fixed."""
        return self._user_id

    @property
    def cards_state(self) -> SectionState[Card]:
        return self.cards.state

    @property
    def transactions_state(self) -> SectionState[Transaction]:
        return self.transactions.state

    def on_change(self, listener: ChangeListener) -> None:
        """Register a callback invoked after each published state change."""
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> asyncio.Task:
        """Spawn the session task; calling again returns the same task."""
        if self._session_task is None:
            self._session_task = self.scope.spawn(
                self._run_session(), name="dashboard-session"
            )
        return self._session_task

    def refresh(self) -> Optional[asyncio.Task]:
        """Re-run the session trigger.

        With a resolved user, refetch stats and both sections for that same
        user. Without one, retry resolution. Returns None once closed.
        """
        if not self.scope.is_active():
            return None
        if self._user_id is None:
            return self.scope.spawn(self._run_session(), name="dashboard-session-retry")
        return self.scope.spawn(
            self._load_dependents(self._user_id, force=True), name="dashboard-refresh"
        )

    async def wait_idle(self) -> None:
        await self.scope.wait_idle()

    def close(self) -> None:
        """Tear the session down without awaiting task cancellation."""
        self.scope.close()

    async def aclose(self) -> None:
        await self.scope.aclose()
        if self._owned_client is not None:
            await self._owned_client.aclose()
            self._owned_client = None

    # ------------------------------------------------------------------
    # Orchestration
    # ------------------------------------------------------------------
    async def _run_session(self) -> None:
        user_id = await self.uc_resolve()
        if not self.scope.is_active():
            return
        if user_id is None:
            LOGGER.warning("No active user; dependent sections stay empty")
            self.resolve_failed = True
            self.cards.settle()
            self.transactions.settle()
            self._notify()
            return
        self.resolve_failed = False
        self._set_user_id(user_id)
        self._notify()
        await self._load_dependents(user_id, force=False)

    async def _load_dependents(self, user_id: UserId, *, force: bool) -> None:
        params = {"limit": self.transactions_limit}
        self.scope.spawn(self._refresh_stats(user_id), name="dashboard-stats")
        if force:
            self.scope.spawn(self.cards.load(user_id), name="dashboard-cards")
            self.scope.spawn(
                self.transactions.load(user_id, params), name="dashboard-transactions"
            )
        else:
            self.scope.spawn(self.cards.ensure_loaded(user_id), name="dashboard-cards")
            self.scope.spawn(
                self.transactions.ensure_loaded(user_id, params),
                name="dashboard-transactions",
            )

    async def _refresh_stats(self, user_id: UserId) -> None:
        self._stats_generation += 1
        generation = self._stats_generation
        try:
            stats = await self.uc_stats(user_id=user_id)
        except UseCaseError as exc:
            LOGGER.warning("Stats refresh failed [%s]: %s", exc.code, exc.message)
            if generation != self._stats_generation:
                return
            if self.scope.is_active():
                self.stats_error = exc.message
                self._notify()
            return
        if generation != self._stats_generation:
            LOGGER.debug("Dropping stats from a superseded refresh")
            return
        if not self.scope.is_active():
            LOGGER.debug("Dropping stats update after session teardown")
            return
        self.stats = stats
        self.stats_error = None
        self._notify()

    async def _fetch_cards(self, user_id: UserId, params: Mapping[str, Any]) -> Any:
        return await self.bank_port.list_cards(user_id)

    async def _fetch_transactions(self, user_id: UserId, params: Mapping[str, Any]) -> Any:
        limit = int(params.get("limit", self.transactions_limit))
        return await self.bank_port.list_transactions(user_id, limit)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _set_user_id(self, user_id: UserId) -> None:
        if self._user_id is not None and self._user_id != user_id:
            raise RuntimeError(
                f"Session user already resolved to {self._user_id!r}; refusing {user_id!r}"
            )
        self._user_id = user_id

    def _section_changed(self, name: str, state: SectionState[Any]) -> None:
        self._notify()

    def _notify(self) -> None:
        if not self.scope.is_active():
            return
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                LOGGER.exception("Dashboard change listener failed")


def build_controller(
    settings: DashboardSettings,
    *,
    transport: Optional[Any] = None,
) -> DashboardController:
    """Create a controller backed by the REST adapter for ``settings``.

    The JSON client is owned by the controller and closed in ``aclose``.
    """
    client = JsonClient(
        settings.api_base_url,
        HttpConfig(request_timeout_s=settings.request_timeout_s),
        transport=transport,
    )
    return DashboardController(
        BankRestAdapter(client),
        transactions_limit=settings.transactions_limit,
        owned_client=client,
    )


__all__ = ["DashboardController", "build_controller"]
