"""Task ownership and cancellation token for one dashboard session.

The controller spawns every fetch through a ``SessionScope`` so that closing
the session cancels in-flight work in one place, and so that state writers can
ask ``is_active`` before publishing a result that arrived late.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Coroutine, Optional, Set

LOGGER = logging.getLogger(__name__)


class SessionScope:
    """Own the asyncio tasks spawned for a session."""

    def __init__(self) -> None:
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def is_active(self) -> bool:
        """Return False once the session has been torn down."""
        return not self._closed

    def spawn(
        self, coro: Coroutine[Any, Any, Any], *, name: Optional[str] = None
    ) -> asyncio.Task:
        """Schedule ``coro`` as a task owned by this scope.

        Raises:
            RuntimeError: If the scope is already closed.
        """
        if self._closed:
            coro.close()
            raise RuntimeError("Cannot spawn tasks on a closed session")
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def pending(self) -> int:
        return sum(1 for task in self._tasks if not task.done())

    async def wait_idle(self) -> None:
        """Wait until every spawned task, including ones spawned meanwhile, is done."""
        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    def close(self) -> None:
        """Mark the scope closed and cancel in-flight tasks."""
        if self._closed:
            return
        self._closed = True
        for task in list(self._tasks):
            task.cancel()

    async def aclose(self) -> None:
        """Close and wait for cancelled tasks to unwind."""
        tasks = list(self._tasks)
        self.close()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            LOGGER.error("Session task %s failed", task.get_name(), exc_info=exc)


class DisconnectGrace:
    """Run ``close`` only if the client stays disconnected for ``grace_s`` seconds.

    A browser tab that drops its websocket and reconnects within the grace
    period keeps its session; ``connected`` cancels the pending close.
    """

    def __init__(self, close: Callable[[], Awaitable[None]], *, grace_s: float) -> None:
        self._close = close
        self.grace_s = grace_s
        self._pending: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def disconnected(self) -> None:
        self.connected()
        self._pending = asyncio.create_task(self._close_later(), name="session-close")

    def connected(self) -> None:
        if self.pending:
            LOGGER.debug("Client reconnected; keeping session")
            self._pending.cancel()
        self._pending = None

    async def _close_later(self) -> None:
        await asyncio.sleep(self.grace_s)
        LOGGER.debug("Client gone for %.1fs; closing session", self.grace_s)
        await self._close()


__all__ = ["DisconnectGrace", "SessionScope"]
