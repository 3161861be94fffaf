"""Application flags – NotificationBus.

Two typed channels: per-flag-id change notifications and the internal
refresh-rate channel.  Keeping them apart means no flag id can ever
collide with an internal notification name.

Usage::

    bus = NotificationBus()
    unsubscribe = bus.on_change("checkout_v2", lambda e: print(e.new_value))
    await bus.publish_change(FlagChanged("checkout_v2", True, False))
    unsubscribe()
"""
from __future__ import annotations

import dataclasses
import inspect
from typing import Any, Awaitable, Callable, TypeVar, Union

from fflags.kernel.flags import FlagValue
from fflags.observability.logging import FlagEventKind, LoggerHook, emit, get_logger, noop_hook

_log = get_logger(__name__)

E = TypeVar("E")


@dataclasses.dataclass(frozen=True)
class FlagChanged:
    """A dynamic flag's value differs from its previously cached value."""

    flag_id: str
    new_value: FlagValue
    old_value: FlagValue


@dataclasses.dataclass(frozen=True)
class RefreshRateChanged:
    """The refresh scheduler now runs at ``current`` ms (was ``previous``)."""

    current: float
    previous: float


Handler = Callable[[E], Union[Awaitable[None], None]]
Unsubscribe = Callable[[], None]


class NotificationBus:
    """In-process notification channels; handlers may be sync or async."""

    def __init__(self, *, logger_hook: LoggerHook = noop_hook) -> None:
        self._change_handlers: dict[str, list[Handler[FlagChanged]]] = {}
        self._rate_handlers: list[Handler[RefreshRateChanged]] = []
        self._logger_hook = logger_hook

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def on_change(self, flag_id: str, handler: Handler[FlagChanged]) -> Unsubscribe:
        """Call *handler* whenever dynamic flag *flag_id* changes value."""
        handlers = self._change_handlers.setdefault(flag_id, [])
        handlers.append(handler)
        return _remover(handlers, handler)

    def on_refresh_rate_change(self, handler: Handler[RefreshRateChanged]) -> Unsubscribe:
        self._rate_handlers.append(handler)
        return _remover(self._rate_handlers, handler)

    def subscriber_count(self, flag_id: str) -> int:
        return len(self._change_handlers.get(flag_id, ()))

    # ------------------------------------------------------------------
    # Publication
    # ------------------------------------------------------------------

    async def publish_change(self, event: FlagChanged) -> None:
        for handler in list(self._change_handlers.get(event.flag_id, ())):
            await self._dispatch(handler, event, flag_id=event.flag_id)

    async def publish_refresh_rate_change(self, event: RefreshRateChanged) -> None:
        for handler in list(self._rate_handlers):
            await self._dispatch(handler, event, channel="refresh_rate")

    async def _dispatch(self, handler: Handler[Any], event: Any, **context: Any) -> None:
        try:
            result = handler(event)
            if inspect.isawaitable(result):
                await result
        except Exception as exc:  # noqa: BLE001
            name = getattr(handler, "__qualname__", repr(handler))
            _log.exception("fflags.handler.failed", handler=name, **context)
            emit(
                self._logger_hook,
                FlagEventKind.HANDLER_FAILED,
                "HANDLER FAILED",
                {**context, "handler": name, "error": str(exc)},
            )


def _remover(handlers: list[Any], handler: Any) -> Unsubscribe:
    def _unsubscribe() -> None:
        if handler in handlers:
            handlers.remove(handler)

    return _unsubscribe


__all__ = ["FlagChanged", "Handler", "NotificationBus", "RefreshRateChanged", "Unsubscribe"]
