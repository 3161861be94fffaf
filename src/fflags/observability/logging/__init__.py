"""Observability – structlog helpers and the logger hook."""
from fflags.observability.logging.factory import JsonLoggerFactory
from fflags.observability.logging.hook import (
    FlagEventKind,
    LoggerHook,
    emit,
    noop_hook,
    structlog_hook,
)
from fflags.observability.logging.processors import get_logger

__all__ = [
    "FlagEventKind",
    "JsonLoggerFactory",
    "LoggerHook",
    "emit",
    "get_logger",
    "noop_hook",
    "structlog_hook",
]
