"""Loader pattern shared by the independently-loading dashboard sections.

Call context:
    ``DashboardController`` owns one ``LoadSection`` per section (cards,
    transactions) and triggers it once the session user id is resolved.

Lifecycle of ``SectionState``:
    created ``loading=True`` with no items, then always settles at
    ``loading=False``; a failed fetch keeps the previous items and records
    the mapped error message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import (
    Any,
    Awaitable,
    Callable,
    Generic,
    List,
    Mapping,
    Optional,
    Tuple,
    TypeVar,
)

from findash.domain.ports import UseCaseError, UserId
from findash.usecases.error_mapping import map_api_error

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

SectionFetch = Callable[[UserId, Mapping[str, Any]], Awaitable[Any]]
RecordParser = Callable[[Mapping[str, Any]], T]


@dataclass(frozen=True)
class SectionState(Generic[T]):
    """Immutable snapshot of one section's items and loading flag."""

    items: Tuple[T, ...] = ()
    loading: bool = True
    error: Optional[str] = None


class LoadSection(Generic[T]):
    """Fetch a user-scoped list resource and track its ``SectionState``.

    ``guard`` is consulted before every state write; once it returns False
    (session torn down) results are dropped instead of published.
    """

    def __init__(
        self,
        name: str,
        fetch: SectionFetch,
        parse: RecordParser[T],
        *,
        guard: Optional[Callable[[], bool]] = None,
        on_change: Optional[Callable[[str, SectionState[T]], None]] = None,
    ) -> None:
        self.name = name
        self._fetch = fetch
        self._parse = parse
        self._guard = guard
        self._on_change = on_change
        self.state: SectionState[T] = SectionState()
        self.loaded_for: Optional[UserId] = None
        self._generation = 0

    async def ensure_loaded(
        self, user_id: Optional[UserId], params: Optional[Mapping[str, Any]] = None
    ) -> SectionState[T]:
        """Load once per user id; repeated triggers for the same id are no-ops."""
        if not user_id or user_id == self.loaded_for:
            return self.state
        return await self.load(user_id, params)

    async def load(
        self, user_id: UserId, params: Optional[Mapping[str, Any]] = None
    ) -> SectionState[T]:
        """Fetch unconditionally and settle the state.

        A load superseded by a later call to ``load`` drops its outcome; only
        the latest request settles ``loading`` and replaces the items.
        """
        self._generation += 1
        generation = self._generation
        self.loaded_for = user_id
        self._publish(replace(self.state, loading=True))
        try:
            payload = await self._fetch(user_id, dict(params or {}))
            items = self._normalize(payload)
        except Exception as exc:
            if generation != self._generation:
                LOGGER.debug("Dropping superseded %s failure: %s", self.name, exc)
                return self.state
            mapped = map_api_error(
                exc,
                default_code="SECTION_LOAD_FAILED",
                default_message=f"Failed to load {self.name}.",
            )
            LOGGER.warning(
                "Loading %s for user %s failed [%s]: %s",
                self.name,
                user_id,
                mapped.code,
                mapped.message,
            )
            self._publish(replace(self.state, loading=False, error=mapped.message))
        else:
            if generation != self._generation:
                LOGGER.debug("Dropping superseded %s result for user %s", self.name, user_id)
                return self.state
            LOGGER.debug("Loaded %d %s for user %s", len(items), self.name, user_id)
            self._publish(SectionState(items=items, loading=False))
        return self.state

    def settle(self) -> SectionState[T]:
        """Clear the loading flag without fetching (no user to load for)."""
        if self.state.loading:
            self._publish(replace(self.state, loading=False))
        return self.state

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _normalize(self, payload: Any) -> Tuple[T, ...]:
        if not isinstance(payload, list):
            raise UseCaseError(
                "INVALID_RESPONSE",
                f"Expected a list of {self.name}, got {type(payload).__name__}.",
            )
        items: List[T] = []
        for entry in payload:
            if not isinstance(entry, Mapping):
                LOGGER.debug("Skipping non-object %s entry: %r", self.name, entry)
                continue
            items.append(self._parse(entry))
        return tuple(items)

    def _publish(self, state: SectionState[T]) -> None:
        if self._guard is not None and not self._guard():
            LOGGER.debug("Dropping %s update after session teardown", self.name)
            return
        self.state = state
        if self._on_change is not None:
            self._on_change(self.name, state)


__all__ = ["LoadSection", "SectionFetch", "SectionState"]
