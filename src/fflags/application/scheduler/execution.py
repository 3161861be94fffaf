"""Application scheduler – JobExecutionContext and JobExecutedEvent."""
from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field
from datetime import UTC, datetime

from fflags.application.scheduler.job import Job

__all__ = ["JobExecutedEvent", "JobExecutionContext"]


@dataclass(frozen=True)
class JobExecutedEvent:
    """Outcome of one job run (successful or not)."""

    job_id: str
    job_name: str
    started_at: datetime
    duration_ms: float
    error: str | None = None
    exception: BaseException | None = field(default=None, compare=False, repr=False)

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class JobExecutionContext:
    """Run a job handler, capturing failures instead of raising them."""

    job: Job
    history_limit: int = 100
    events: deque[JobExecutedEvent] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.events = deque(maxlen=self.history_limit)

    async def run(self) -> JobExecutedEvent:
        started_at = datetime.now(tz=UTC)
        t0 = time.monotonic()
        error: str | None = None
        exception: BaseException | None = None
        try:
            await self.job.handler()
        except Exception as exc:  # noqa: BLE001
            error = str(exc) or type(exc).__name__
            exception = exc
        duration_ms = (time.monotonic() - t0) * 1000
        event = JobExecutedEvent(
            job_id=self.job.id,
            job_name=self.job.name,
            started_at=started_at,
            duration_ms=duration_ms,
            error=error,
            exception=exception,
        )
        self.events.append(event)
        return event
