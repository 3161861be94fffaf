"""Application flags – SingleFlight: share one in-flight run between callers."""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Generic, TypeVar

T = TypeVar("T")


class SingleFlight(Generic[T]):
    """Run at most one execution of *fn* at a time.

    Callers arriving while a run is in progress await that same run and
    see its result or exception.  The shared task is shielded, so
    cancelling one waiter never cancels the run for the others.
    """

    def __init__(self, fn: Callable[[], Awaitable[T]]) -> None:
        self._fn = fn
        self._task: asyncio.Task[T] | None = None

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run(self) -> T:
        task = self._task
        if task is None or task.done():
            task = asyncio.ensure_future(self._fn())
            task.add_done_callback(self._clear)
            self._task = task
        return await asyncio.shield(task)

    def _clear(self, task: asyncio.Task[T]) -> None:
        if self._task is task:
            self._task = None
        # Waiters may all have been cancelled; mark the exception retrieved.
        if not task.cancelled():
            task.exception()


__all__ = ["SingleFlight"]
