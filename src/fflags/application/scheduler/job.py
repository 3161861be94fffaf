"""Application scheduler – Job dataclass."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Awaitable, Callable

__all__ = ["Job", "validate_interval"]


def validate_interval(interval_ms: object) -> float:
    """Return *interval_ms* if it is a finite positive number, else raise ``ValueError``."""
    if (
        isinstance(interval_ms, bool)
        or not isinstance(interval_ms, (int, float))
        or not math.isfinite(interval_ms)
        or interval_ms <= 0
    ):
        raise ValueError(f"interval_ms must be a finite positive number, got {interval_ms!r}")
    return interval_ms


@dataclass
class Job:
    """Describes a periodic job fired every ``interval_ms`` milliseconds."""

    id: str
    name: str
    handler: Callable[[], Awaitable[object]]
    interval_ms: float

    def __post_init__(self) -> None:
        validate_interval(self.interval_ms)

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000
