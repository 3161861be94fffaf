"""Config settings – Settings base and FlagCacheSettings."""
from __future__ import annotations

import dataclasses
import math
from typing import ClassVar

from fflags.config.validation import ENV_PREFIX, InvalidSettingValueError

DEFAULT_REFRESH_RATE_MS = 30000
REFRESH_RATE_FLAG_ID = "DynamicFFlagRefreshRate"


@dataclasses.dataclass
class Settings:
    """Env-driven settings dataclass; fields load from ``<_prefix>_<FIELD>``."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""

    def _invalid(self, setting_name: str, reason: str) -> InvalidSettingValueError:
        return InvalidSettingValueError(
            setting_name, getattr(self, setting_name), reason, prefix=self._prefix
        )


@dataclasses.dataclass
class FlagCacheSettings(Settings):
    """Runtime options of a flag cache, loadable from ``FFLAGS_*`` variables."""

    _prefix: ClassVar[str] = ENV_PREFIX

    refresh_rate_ms: int = DEFAULT_REFRESH_RATE_MS
    self_reconfigure: bool = False
    evict_stale: bool = False
    refresh_rate_flag_id: str = REFRESH_RATE_FLAG_ID
    mongo_uri: str = "mongodb://localhost:27017"
    collection: str = "fflags/flags"

    def _validate(self) -> None:
        rate = self.refresh_rate_ms
        if isinstance(rate, bool) or not math.isfinite(rate) or rate <= 0:
            raise self._invalid("refresh_rate_ms", "must be a positive integer")
        if not self.refresh_rate_flag_id:
            raise self._invalid("refresh_rate_flag_id", "must not be empty")
        database, _, collection = self.collection.partition("/")
        if not database or not collection:
            raise self._invalid("collection", "expected 'database/collection'")

    @property
    def namespace(self) -> tuple[str, str]:
        """``(database, collection)`` parsed from :attr:`collection`."""
        database, _, collection = self.collection.partition("/")
        return database, collection


__all__ = ["DEFAULT_REFRESH_RATE_MS", "FlagCacheSettings", "REFRESH_RATE_FLAG_ID", "Settings"]
