"""Application flags – DynamicRefresher: reload, diff and notify."""
from __future__ import annotations

from fflags.application.flags.cache import FlagCache
from fflags.application.flags.notifications import FlagChanged, NotificationBus
from fflags.application.flags.query import FilterHook, no_filter, resolve_filter
from fflags.application.flags.single_flight import SingleFlight
from fflags.application.flags.store import FlagStore
from fflags.kernel.flags import FlagKind, values_equal
from fflags.observability.logging import FlagEventKind, LoggerHook, emit, get_logger, noop_hook

_log = get_logger(__name__)

_MISSING = object()


class DynamicRefresher:
    """One refresh cycle: query dynamic flags, overwrite the cache, report changes.

    * The first sighting of an id populates the cache silently; only
      transitions produce a :class:`FlagChanged`.
    * Every returned record overwrites its entry, changed or not.
    * Records are processed, and notifications published, in the order
      the store returned them.
    * Notifications are held until every write of the cycle (and any
      eviction) has landed, rather than published right after each
      record's own overwrite; a handler reads the whole new state.
    * Ids missing from the result are kept unless ``evict_stale`` is set.
    * Overlapping calls join the cycle already in flight.
    """

    def __init__(
        self,
        store: FlagStore,
        cache: FlagCache,
        bus: NotificationBus,
        *,
        filter_hook: FilterHook = no_filter,
        logger_hook: LoggerHook = noop_hook,
        evict_stale: bool = False,
    ) -> None:
        self._store = store
        self._cache = cache
        self._bus = bus
        self._filter_hook = filter_hook
        self._logger_hook = logger_hook
        self._evict_stale = evict_stale
        self._flight: SingleFlight[int] = SingleFlight(self._refresh)
        self.cycles = 0

    @property
    def in_flight(self) -> bool:
        return self._flight.in_flight

    async def refresh_once(self) -> int:
        """Run (or join) a refresh cycle; return the number of changes published."""
        return await self._flight.run()

    async def _refresh(self) -> int:
        predicate = resolve_filter(self._filter_hook)
        records = await self._store.query(FlagKind.DYNAMIC, predicate)

        changes: list[FlagChanged] = []
        seen: set[str] = set()
        for record in records:
            seen.add(record.id)
            old = self._cache.get(FlagKind.DYNAMIC, record.id, _MISSING)
            self._cache.put(FlagKind.DYNAMIC, record.id, record.value)
            if old is not _MISSING and not values_equal(old, record.value):
                changes.append(FlagChanged(record.id, record.value, old))

        if self._evict_stale:
            for flag_id in self._cache.ids(FlagKind.DYNAMIC):
                if flag_id not in seen:
                    self._cache.discard(FlagKind.DYNAMIC, flag_id)
                    _log.info("fflags.dynamic.evicted", flag_id=flag_id)
                    emit(self._logger_hook, FlagEventKind.FLAG_EVICTED, "FLAG EVICTED", {"flag_id": flag_id})

        # Writes land before any handler runs, so handlers read the new state.
        for change in changes:
            _log.debug("fflags.dynamic.changed", flag_id=change.flag_id)
            await self._bus.publish_change(change)

        self.cycles += 1
        _log.debug("fflags.dynamic.refreshed", count=len(records), changes=len(changes))
        emit(
            self._logger_hook,
            FlagEventKind.DYNAMIC_REFRESHED,
            "DYNAMIC CACHE REFRESHED",
            {"count": len(records), "changes": len(changes)},
        )
        return len(changes)


__all__ = ["DynamicRefresher"]
