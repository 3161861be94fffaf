"""Example: fast + dynamic flags served from MongoDB.

Run against a local MongoDB::

    FFLAGS_SELF_RECONFIGURE=true python docs/examples/mongo_flags.py
"""
from __future__ import annotations

import asyncio
import logging

from fflags.adapters.mongodb import MongoFlagStore
from fflags.application.flags import FlagChanged, FlagsCollection, RefreshRateChanged
from fflags.config.settings import EnvSettingsLoader, FlagCacheSettings
from fflags.observability.logging import JsonLoggerFactory, get_logger, structlog_hook

log = get_logger("example")


def tenant_scope() -> dict[str, str]:
    return {"tenant": "acme"}


async def main() -> None:
    JsonLoggerFactory.configure(logging.INFO)
    settings = EnvSettingsLoader().load(FlagCacheSettings)
    flags = FlagsCollection.from_settings(
        MongoFlagStore.from_settings(settings),
        settings,
        filter_hook=tenant_scope,
        logger=structlog_hook(),
    )

    def on_banner(event: FlagChanged) -> None:
        log.info("banner.changed", new=event.new_value, old=event.old_value)

    def on_rate(event: RefreshRateChanged) -> None:
        log.info("refresh_rate.changed", current=event.current, previous=event.previous)

    flags.on_change("banner", on_banner)
    flags.on_refresh_rate_change(on_rate)

    async with flags:
        await flags.load_fast_once()
        await flags.refresh_dynamic_once()
        log.info("flags.ready", new_pricing=flags.read_fast("new_pricing", False))
        await asyncio.sleep(120)


if __name__ == "__main__":
    asyncio.run(main())
