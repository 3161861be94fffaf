"""Application flags – FastLoader, the one-shot fast partition load."""
from __future__ import annotations

import asyncio

from fflags.application.flags.cache import FlagCache
from fflags.application.flags.query import FilterHook, no_filter, resolve_filter
from fflags.application.flags.store import FlagStore
from fflags.kernel.flags import FlagKind
from fflags.observability.logging import FlagEventKind, LoggerHook, emit, get_logger, noop_hook

_log = get_logger(__name__)


class FastLoader:
    """Populate the fast partition once; later calls are no-ops.

    ``is_updated`` only flips after a successful query, so a failed load
    leaves the loader ready to retry from scratch.  Concurrent first calls
    are serialised and re-check ``is_updated`` after acquiring the lock,
    so they still issue a single query.
    """

    def __init__(
        self,
        store: FlagStore,
        cache: FlagCache,
        *,
        filter_hook: FilterHook = no_filter,
        logger_hook: LoggerHook = noop_hook,
    ) -> None:
        self._store = store
        self._cache = cache
        self._filter_hook = filter_hook
        self._logger_hook = logger_hook
        self._lock = asyncio.Lock()
        self.is_updated = False

    async def load_once(self) -> None:
        if self.is_updated:
            return
        async with self._lock:
            if self.is_updated:
                return
            predicate = resolve_filter(self._filter_hook)
            records = await self._store.query(FlagKind.FAST, predicate)
            for record in records:
                self._cache.put(FlagKind.FAST, record.id, record.value)
            self.is_updated = True
        _log.info("fflags.fast.loaded", count=len(records))
        emit(self._logger_hook, FlagEventKind.FAST_LOADED, "FAST CACHE LOADED", {"count": len(records)})


__all__ = ["FastLoader"]
