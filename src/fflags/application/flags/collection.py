"""Application flags – FlagsCollection, the cache's public surface."""
from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fflags.application.flags.cache import FlagCache
from fflags.application.flags.loader import FastLoader
from fflags.application.flags.notifications import (
    FlagChanged,
    Handler,
    NotificationBus,
    RefreshRateChanged,
    Unsubscribe,
)
from fflags.application.flags.query import FilterHook, no_filter
from fflags.application.flags.rate import RefreshRateController
from fflags.application.flags.refresher import DynamicRefresher
from fflags.application.flags.store import FlagStore, SeedableFlagStore
from fflags.application.scheduler import Job, RefreshScheduler, SchedulerState
from fflags.config.settings import DEFAULT_REFRESH_RATE_MS, REFRESH_RATE_FLAG_ID, FlagCacheSettings
from fflags.kernel.flags import FlagKind, FlagRecord
from fflags.observability.logging import LoggerHook, get_logger, noop_hook

_log = get_logger(__name__)


class FlagsCollection:
    """Fast and dynamic feature flags cached in front of a :class:`FlagStore`.

    Fast flags are loaded once by :meth:`load_fast_once` (callers trigger it;
    nothing loads implicitly).  Dynamic flags are refreshed by a timer that
    stays idle until the fast load has completed.

    Usage::

        flags = FlagsCollection(MongoFlagStore.from_settings(settings), self_reconfigure=True)
        async with flags:
            await flags.load_fast_once()
            flags.on_change("checkout_v2", on_checkout_toggle)
            if flags.read_fast("new_pricing", False):
                ...
    """

    def __init__(
        self,
        store: FlagStore,
        *,
        filter_hook: FilterHook = no_filter,
        refresh_rate_ms: float = DEFAULT_REFRESH_RATE_MS,
        self_reconfigure: bool = False,
        refresh_rate_flag_id: str = REFRESH_RATE_FLAG_ID,
        evict_stale: bool = False,
        logger: LoggerHook = noop_hook,
    ) -> None:
        self._store = store
        self.cache = FlagCache()
        self.bus = NotificationBus(logger_hook=logger)
        self._fast = FastLoader(store, self.cache, filter_hook=filter_hook, logger_hook=logger)
        self._dynamic = DynamicRefresher(
            store,
            self.cache,
            self.bus,
            filter_hook=filter_hook,
            logger_hook=logger,
            evict_stale=evict_stale,
        )
        job = Job(
            id="fflags.dynamic_refresh",
            name="Dynamic flag refresh",
            handler=self._dynamic.refresh_once,
            interval_ms=refresh_rate_ms,
        )
        self.scheduler = RefreshScheduler(job, gate=lambda: self._fast.is_updated, logger_hook=logger)
        self.rate_controller: RefreshRateController | None = None
        if self_reconfigure:
            self.rate_controller = RefreshRateController(
                refresh_rate_flag_id, self.scheduler, self.bus, logger_hook=logger
            )
            self.rate_controller.attach()

    @classmethod
    def from_settings(
        cls,
        store: FlagStore,
        settings: FlagCacheSettings,
        **kwargs: Any,
    ) -> "FlagsCollection":
        """Build a collection from :class:`FlagCacheSettings`; *kwargs* win."""
        options: dict[str, Any] = {
            "refresh_rate_ms": settings.refresh_rate_ms,
            "self_reconfigure": settings.self_reconfigure,
            "refresh_rate_flag_id": settings.refresh_rate_flag_id,
            "evict_stale": settings.evict_stale,
        }
        options.update(kwargs)
        return cls(store, **options)

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------

    def read_fast(self, flag_id: str, fallback: Any = None) -> Any:
        return self.cache.read_fast(flag_id, fallback)

    def read_dynamic(self, flag_id: str, fallback: Any = None) -> Any:
        return self.cache.read_dynamic(flag_id, fallback)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_updated(self) -> bool:
        """True once the fast partition has loaded successfully."""
        return self._fast.is_updated

    @property
    def refresh_rate_ms(self) -> float:
        return self.scheduler.interval_ms

    @property
    def state(self) -> SchedulerState:
        return self.scheduler.state

    async def load_fast_once(self) -> None:
        await self._fast.load_once()

    async def refresh_dynamic_once(self) -> int:
        return await self._dynamic.refresh_once()

    async def start(self) -> None:
        """Arm the refresh timer (and seed the rate flag when self-reconfiguring)."""
        if self.rate_controller is not None and isinstance(self._store, SeedableFlagStore):
            seed = FlagRecord(
                id=self.rate_controller.flag_id,
                kind=FlagKind.DYNAMIC,
                value=self.scheduler.interval_ms,
                created_at=datetime.now(UTC),
                description="Refresh rate of dynamic flags in milliseconds",
            )
            if await self._store.ensure_flag(seed):
                _log.info("fflags.refresh_rate.seeded", flag_id=seed.id, value=seed.value)
        await self.scheduler.start()

    async def stop(self) -> None:
        """Cancel the refresh timer; an in-flight refresh still completes."""
        await self.scheduler.stop()

    async def __aenter__(self) -> "FlagsCollection":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def on_change(self, flag_id: str, handler: Handler[FlagChanged]) -> Unsubscribe:
        return self.bus.on_change(flag_id, handler)

    def on_refresh_rate_change(self, handler: Handler[RefreshRateChanged]) -> Unsubscribe:
        return self.bus.on_refresh_rate_change(handler)


__all__ = ["FlagsCollection"]
