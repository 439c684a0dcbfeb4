"""Tracked background tasks for cache revalidation."""

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class BackgroundRefresher:
    """Bounded set of fire-and-forget refresh tasks.

    Tasks are held by strong reference until they finish, failures are logged
    instead of surfacing to any caller, and shutdown can wait for or cancel
    whatever is still running. When `max_pending` refreshes are already in
    flight new submissions are dropped; refreshes are best effort.
    """

    def __init__(self, max_pending: int = 32) -> None:
        self._max_pending = max_pending
        self._tasks: set[asyncio.Task] = set()
        self.failures = 0

    def submit(self, start: Callable[[], asyncio.Task], label: str) -> bool:
        """Start and track a refresh task.

        Args:
            start: Callable that creates and returns the task
            label: Description used in log messages

        Returns:
            True if the task was started, False if the refresher is full
        """
        if len(self._tasks) >= self._max_pending:
            logger.warning("Skipping refresh for %r: %d refreshes pending", label, len(self._tasks))
            return False

        task = start()
        self._tasks.add(task)
        task.add_done_callback(lambda t: self._on_done(t, label))
        return True

    def _on_done(self, task: asyncio.Task, label: str) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.failures += 1
            logger.warning("Background refresh failed for %r: %s", label, exc)

    async def join(self) -> None:
        """Wait until every pending refresh has finished."""
        while self._tasks:
            await asyncio.wait(set(self._tasks))

    async def shutdown(self, timeout: float = 5.0) -> None:
        """Give pending refreshes `timeout` seconds, then cancel the rest."""
        if not self._tasks:
            return
        _, pending = await asyncio.wait(set(self._tasks), timeout=timeout)
        for task in pending:
            task.cancel()
        if pending:
            logger.info("Cancelled %d unfinished background refreshes", len(pending))
            await asyncio.gather(*pending, return_exceptions=True)

    @property
    def pending(self) -> int:
        """Number of refreshes currently running."""
        return len(self._tasks)
