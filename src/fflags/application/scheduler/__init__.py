"""Application scheduler – periodic refresh timer and job execution."""
from fflags.application.scheduler.execution import JobExecutedEvent, JobExecutionContext
from fflags.application.scheduler.job import Job, validate_interval
from fflags.application.scheduler.refresh import RefreshScheduler, SchedulerState

__all__ = [
    "Job",
    "JobExecutedEvent",
    "JobExecutionContext",
    "RefreshScheduler",
    "SchedulerState",
    "validate_interval",
]
