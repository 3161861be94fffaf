"""Application scheduler – RefreshScheduler (APScheduler 4 ``AsyncScheduler``).

Fires a :class:`Job` every ``interval_ms`` once a readiness gate opens.
States::

    stopped ──start()──▶ idle ──gate opens──▶ armed
                                  ▲               │ reschedule()
                                  └─reconfiguring◀┘

The APScheduler job only spawns the tick as a task owned by this class,
so a slow or hung refresh never delays the next fire time and ``stop()``
never cancels a refresh already running.  Overlap protection is the
job's responsibility.
"""
from __future__ import annotations

import asyncio
import enum
from contextlib import AsyncExitStack
from datetime import UTC, datetime, timedelta
from typing import Callable

from apscheduler import AsyncScheduler, CoalescePolicy, ConflictPolicy, Schedule
from apscheduler.triggers.interval import IntervalTrigger

from fflags.application.scheduler.execution import JobExecutedEvent, JobExecutionContext
from fflags.application.scheduler.job import Job, validate_interval
from fflags.observability.logging import FlagEventKind, LoggerHook, emit, get_logger, noop_hook

__all__ = ["RefreshScheduler", "SchedulerState"]

_log = get_logger(__name__)


class SchedulerState(str, enum.Enum):
    STOPPED = "stopped"
    IDLE = "idle"
    ARMED = "armed"
    RECONFIGURING = "reconfiguring"


async def _fire(scheduler: RefreshScheduler) -> None:
    scheduler.spawn_tick()


class RefreshScheduler:
    def __init__(
        self,
        job: Job,
        *,
        gate: Callable[[], bool] = lambda: True,
        logger_hook: LoggerHook = noop_hook,
    ) -> None:
        self._job = job
        self._gate = gate
        self._logger_hook = logger_hook
        self._interval_ms = job.interval_ms
        self._trigger: IntervalTrigger | None = None
        self._scheduler: AsyncScheduler | None = None
        self._stack: AsyncExitStack | None = None
        self._ticks: set[asyncio.Task[JobExecutedEvent | None]] = set()
        self._reconfiguring = False
        self._context = JobExecutionContext(job=job)
        self.skipped_ticks = 0

    @property
    def interval_ms(self) -> float:
        return self._interval_ms

    @property
    def trigger(self) -> IntervalTrigger | None:
        """Trigger of the active schedule, ``None`` while stopped."""
        return self._trigger

    @property
    def is_running(self) -> bool:
        return self._scheduler is not None

    @property
    def state(self) -> SchedulerState:
        if self._reconfiguring:
            return SchedulerState.RECONFIGURING
        if not self.is_running:
            return SchedulerState.STOPPED
        return SchedulerState.ARMED if self._gate() else SchedulerState.IDLE

    @property
    def history(self) -> list[JobExecutedEvent]:
        """Executed ticks, oldest first."""
        return list(self._context.events)

    async def start(self) -> None:
        if self.is_running:
            return
        stack = AsyncExitStack()
        scheduler = await stack.enter_async_context(AsyncScheduler())
        try:
            await scheduler.configure_task(_fire, max_running_jobs=1)
            await self._add_schedule(scheduler)
            await scheduler.start_in_background()
        except BaseException:
            await stack.aclose()
            raise
        self._scheduler, self._stack = scheduler, stack
        _log.info("fflags.scheduler.started", job_id=self._job.id, interval_ms=self._interval_ms)

    async def stop(self) -> None:
        """Shut the timer down; ticks already spawned are left to finish."""
        stack, self._stack, self._scheduler, self._trigger = self._stack, None, None, None
        if stack is None:
            return
        await stack.aclose()
        _log.info("fflags.scheduler.stopped", job_id=self._job.id)

    async def drain(self) -> None:
        """Wait for ticks already spawned to finish."""
        if self._ticks:
            await asyncio.gather(*self._ticks, return_exceptions=True)

    async def reschedule(self, interval_ms: float) -> None:
        """Replace the schedule with one firing every *interval_ms*.

        The new interval starts counting now.  When the scheduler is not
        running only the stored interval changes.
        """
        validate_interval(interval_ms)
        self._reconfiguring = True
        try:
            self._interval_ms = interval_ms
            if self._scheduler is not None:
                await self._add_schedule(self._scheduler)
        finally:
            self._reconfiguring = False
        _log.info("fflags.scheduler.rescheduled", job_id=self._job.id, interval_ms=interval_ms)

    async def get_schedule(self) -> Schedule | None:
        if self._scheduler is None:
            return None
        return await self._scheduler.get_schedule(self._job.id)

    def spawn_tick(self) -> asyncio.Task[JobExecutedEvent | None]:
        task = asyncio.create_task(self.tick())
        self._ticks.add(task)
        task.add_done_callback(self._ticks.discard)
        return task

    async def tick(self) -> JobExecutedEvent | None:
        """Run the job once if the gate is open; failures are reported, not raised."""
        if not self._gate():
            self.skipped_ticks += 1
            return None
        event = await self._context.run()
        if not event.success:
            _log.warning(
                "fflags.scheduler.tick_failed",
                job_id=event.job_id,
                error=event.error,
                exc_info=event.exception,
            )
            emit(
                self._logger_hook,
                FlagEventKind.REFRESH_FAILED,
                "REFRESH FAILED",
                {"job_id": event.job_id, "error": event.error},
            )
        return event

    async def _add_schedule(self, scheduler: AsyncScheduler) -> None:
        interval = timedelta(milliseconds=self._interval_ms)
        trigger = IntervalTrigger(
            seconds=interval.total_seconds(),
            start_time=datetime.now(UTC) + interval,
        )
        await scheduler.add_schedule(
            _fire,
            trigger,
            id=self._job.id,
            args=(self,),
            coalesce=CoalescePolicy.latest,
            conflict_policy=ConflictPolicy.replace,
        )
        self._trigger = trigger
