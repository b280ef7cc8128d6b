"""Detached execution of best-effort coroutines (email sends)."""

import asyncio
from typing import Any, Coroutine, Optional, Set

from loguru import logger


class BackgroundDispatcher:
    """
    Run coroutines as detached asyncio tasks with a bounded pending set.

    Callers never await the work and never see its failure: exceptions are
    logged by a done-callback. When the pending set is full the new work is
    dropped with a warning.
    """

    def __init__(self, max_pending: int = 100):
        """
        Initialize dispatcher.

        Args:
            max_pending: Maximum number of tasks in flight
        """
        self._max_pending = max_pending
        self._tasks: Set[asyncio.Task] = set()
        self._dropped = 0
        self._failed = 0

    @property
    def pending(self) -> int:
        """Number of tasks still running."""
        return len(self._tasks)

    def get_stats(self) -> dict:
        """
        Get dispatcher statistics.

        Returns:
            Dictionary with pending, dropped and failed counts
        """
        return {
            "pending": self.pending,
            "max_pending": self._max_pending,
            "dropped": self._dropped,
            "failed": self._failed,
        }

    def dispatch(
        self, coro: Coroutine[Any, Any, Any], label: str = "task"
    ) -> Optional[asyncio.Task]:
        """
        Schedule a coroutine without waiting for it.

        Must be called from a running event loop.

        Args:
            coro: Coroutine to run
            label: Name used in log lines

        Returns:
            The scheduled task, or None if it was dropped
        """
        if len(self._tasks) >= self._max_pending:
            self._dropped += 1
            coro.close()
            logger.warning(
                f"Background queue full ({self._max_pending} pending), dropping '{label}'"
            )
            return None

        task = asyncio.get_running_loop().create_task(coro, name=label)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning(f"Background task '{task.get_name()}' was cancelled")
            return
        exc = task.exception()
        if exc is not None:
            self._failed += 1
            logger.error(f"Background task '{task.get_name()}' failed: {exc}")

    async def drain(self, timeout: float = 10.0) -> int:
        """
        Wait for pending tasks, cancelling whatever is left after timeout.

        Args:
            timeout: Seconds to wait

        Returns:
            Number of tasks cancelled
        """
        if not self._tasks:
            return 0
        pending = set(self._tasks)
        logger.info(f"Draining {len(pending)} background task(s)...")
        _done, still_running = await asyncio.wait(pending, timeout=timeout)
        for task in still_running:
            task.cancel()
        if still_running:
            await asyncio.gather(*still_running, return_exceptions=True)
            logger.warning(f"Cancelled {len(still_running)} background task(s) at shutdown")
        return len(still_running)
