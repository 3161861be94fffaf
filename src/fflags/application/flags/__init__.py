"""Application flags – cache, loaders, notifications and the collection facade."""
from fflags.application.flags.cache import CacheKey, FlagCache
from fflags.application.flags.collection import FlagsCollection
from fflags.application.flags.loader import FastLoader
from fflags.application.flags.notifications import (
    FlagChanged,
    NotificationBus,
    RefreshRateChanged,
)
from fflags.application.flags.query import FilterHook, build_filter, matches, no_filter, resolve_filter
from fflags.application.flags.rate import RefreshRateController
from fflags.application.flags.refresher import DynamicRefresher
from fflags.application.flags.single_flight import SingleFlight
from fflags.application.flags.store import FlagStore, SeedableFlagStore

__all__ = [
    "CacheKey",
    "DynamicRefresher",
    "FastLoader",
    "FilterHook",
    "FlagCache",
    "FlagChanged",
    "FlagStore",
    "FlagsCollection",
    "NotificationBus",
    "RefreshRateChanged",
    "RefreshRateController",
    "SeedableFlagStore",
    "SingleFlight",
    "build_filter",
    "matches",
    "no_filter",
    "resolve_filter",
]
