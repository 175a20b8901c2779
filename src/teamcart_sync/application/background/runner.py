"""Application background – BackgroundTaskRunner.

A bulkhead for best-effort work: at most ``max_concurrent`` tasks run at
once, at most ``max_pending`` are tracked, and a task's failure is logged
and dropped. Callers never await the spawned work.
"""
from __future__ import annotations

import asyncio
from typing import Any, Coroutine

from teamcart_sync.kernel.errors import BackgroundCapacityError
from teamcart_sync.observability.logging import get_logger


class BackgroundTaskRunner:
    """Bounded fire-and-forget task runner with its own error boundary."""

    def __init__(self, max_concurrent: int = 4, max_pending: int = 100, logger: Any = None) -> None:
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._tasks: set[asyncio.Task[None]] = set()
        self.max_concurrent = max_concurrent
        self.max_pending = max_pending
        self._logger = logger or get_logger(__name__)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Coroutine[Any, Any, Any], *, name: str) -> asyncio.Task[None]:
        """Schedule *coro*; raises :class:`BackgroundCapacityError` when saturated."""
        if len(self._tasks) >= self.max_pending:
            coro.close()
            raise BackgroundCapacityError(
                f"Background runner saturated ({self.max_pending} pending); dropped '{name}'"
            )
        task = asyncio.get_running_loop().create_task(self._guarded(coro, name), name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _guarded(self, coro: Coroutine[Any, Any, Any], name: str) -> None:
        async with self._semaphore:
            try:
                await coro
            except Exception as exc:  # noqa: BLE001
                self._logger.error("background.task_failed", task=name, error=repr(exc))

    async def drain(self) -> None:
        """Wait for every tracked task, including ones spawned meanwhile."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        await asyncio.gather(*list(self._tasks), return_exceptions=True)


__all__ = ["BackgroundTaskRunner"]
