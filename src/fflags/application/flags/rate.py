"""Application flags – RefreshRateController, the self-reconfiguration loop.

The refresh interval is itself a dynamic flag.  A refresh cycle publishes
its change like any other flag; this controller, subscribed to the reserved
id, re-arms the scheduler and announces the new rate.  The new interval is
only seen after a cycle at the old interval has observed it.
"""
from __future__ import annotations

from typing import Any

from fflags.application.flags.notifications import (
    FlagChanged,
    NotificationBus,
    RefreshRateChanged,
    Unsubscribe,
)
from fflags.application.scheduler import RefreshScheduler, validate_interval
from fflags.observability.logging import FlagEventKind, LoggerHook, emit, get_logger, noop_hook

_log = get_logger(__name__)


class RefreshRateController:
    def __init__(
        self,
        flag_id: str,
        scheduler: RefreshScheduler,
        bus: NotificationBus,
        *,
        logger_hook: LoggerHook = noop_hook,
    ) -> None:
        self.flag_id = flag_id
        self._scheduler = scheduler
        self._bus = bus
        self._logger_hook = logger_hook
        self._unsubscribe: Unsubscribe | None = None

    @property
    def attached(self) -> bool:
        return self._unsubscribe is not None

    def attach(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._bus.on_change(self.flag_id, self.on_rate_flag_changed)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def on_rate_flag_changed(self, event: FlagChanged) -> None:
        current = _as_interval(event.new_value)
        if current is None:
            _log.warning("fflags.refresh_rate.ignored", flag_id=self.flag_id, value=event.new_value)
            return
        previous = self._scheduler.interval_ms
        if current == previous:
            return
        await self._scheduler.reschedule(current)
        emit(
            self._logger_hook,
            FlagEventKind.REFRESH_CHANGE,
            "CHANGE REFRESH RATE",
            {"current": current, "previous": previous},
        )
        _log.info("fflags.refresh_rate.changed", current=current, previous=previous)
        await self._bus.publish_refresh_rate_change(RefreshRateChanged(current=current, previous=previous))


def _as_interval(value: Any) -> float | None:
    try:
        return validate_interval(value)
    except ValueError:
        return None


__all__ = ["RefreshRateController"]
