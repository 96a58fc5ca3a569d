"""Use case establishing the one active user for a dashboard session."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from findash.domain.entities import User
from findash.domain.naming import DEMO_USER_NAME, make_demo_email
from findash.domain.ports import BankPort, UserId
from findash.usecases.error_mapping import map_api_error

LOGGER = logging.getLogger(__name__)


@dataclass
class ResolveUserContext:
    """Find the first existing user or create a placeholder one.

    The resolved user is cached on the instance: later calls return the same
    id without touching the API. Concurrent calls share one resolution, so at
    most one ``create_user`` request is ever issued per instance. A failed
    resolution caches nothing and returns ``None``.
    """

    bank_port: BankPort
    display_name: str = DEMO_USER_NAME
    email_factory: Callable[[], str] = make_demo_email
    _user: Optional[User] = field(default=None, init=False, repr=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    @property
    def user(self) -> Optional[User]:
        return self._user

    async def __call__(self) -> Optional[UserId]:
        if self._user is not None:
            return self._user.id
        async with self._lock:
            if self._user is not None:
                return self._user.id
            try:
                user = await self._find_or_create()
            except Exception as exc:
                mapped = map_api_error(
                    exc,
                    default_code="USER_RESOLVE_FAILED",
                    default_message="Could not establish a dashboard user.",
                )
                LOGGER.warning("User resolution failed [%s]: %s", mapped.code, mapped.message)
                LOGGER.debug("User resolution failure detail", exc_info=exc)
                return None
            self._user = user
            LOGGER.info("Active user resolved: %s", user.id)
            return user.id

    async def _find_or_create(self) -> User:
        payload = await self.bank_port.list_users()
        existing = self._first_user(payload)
        if existing is not None:
            return existing

        email = self.email_factory()
        LOGGER.info("No users found; creating placeholder user %s", email)
        created = await self.bank_port.create_user(self.display_name, email)
        return User.from_payload(created)

    @staticmethod
    def _first_user(payload: Any) -> Optional[User]:
        if not isinstance(payload, list):
            LOGGER.warning(
                "Expected list from /users, got %s; treating as empty",
                type(payload).__name__,
            )
            return None
        entries: List[Any] = payload
        for entry in entries:
            try:
                return User.from_payload(entry)
            except ValueError:
                LOGGER.debug("Skipping malformed user entry: %r", entry)
        return None


__all__ = ["ResolveUserContext"]
