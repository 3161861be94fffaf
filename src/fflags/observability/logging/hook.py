"""Observability – caller-facing logger hook.

Owners of a :class:`~fflags.application.flags.FlagsCollection` can receive
cache lifecycle events through a plain callable instead of (or in
addition to) structlog::

    def hook(kind: FlagEventKind, action: str, context: Mapping[str, Any]) -> None:
        if kind is FlagEventKind.REFRESH_CHANGE:
            metrics.gauge("fflags.refresh_rate_ms", context["current"])
"""
from __future__ import annotations

import enum
from typing import Any, Callable, Mapping

from fflags.observability.logging.processors import get_logger


class FlagEventKind(enum.IntEnum):
    REFRESH_CHANGE = 0
    REFRESH_FAILED = 1
    FAST_LOADED = 2
    DYNAMIC_REFRESHED = 3
    FLAG_EVICTED = 4
    HANDLER_FAILED = 5


LoggerHook = Callable[[FlagEventKind, str, Mapping[str, Any]], Any]

_WARNING_KINDS = frozenset({FlagEventKind.REFRESH_FAILED, FlagEventKind.HANDLER_FAILED})

_log = get_logger(__name__)


def noop_hook(kind: FlagEventKind, action: str, context: Mapping[str, Any]) -> None:  # noqa: ARG001
    return None


def structlog_hook(logger: Any = None) -> LoggerHook:
    """Return a hook that forwards every event to a structlog logger."""
    target = logger if logger is not None else get_logger("fflags.events")

    def _hook(kind: FlagEventKind, action: str, context: Mapping[str, Any]) -> None:
        method = target.warning if kind in _WARNING_KINDS else target.info
        method(action, event_kind=kind.name, **dict(context))

    return _hook


def emit(hook: LoggerHook, kind: FlagEventKind, action: str, context: Mapping[str, Any]) -> None:
    """Invoke *hook*; a hook that raises is logged and otherwise ignored."""
    try:
        hook(kind, action, context)
    except Exception:  # noqa: BLE001
        _log.exception("fflags.logger_hook.failed", event_kind=kind.name, action=action)


__all__ = ["FlagEventKind", "LoggerHook", "emit", "noop_hook", "structlog_hook"]
