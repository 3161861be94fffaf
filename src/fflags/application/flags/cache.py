"""Application flags – FlagCache, the single source of truth for reads."""
from __future__ import annotations

from typing import Any

from fflags.kernel.flags import FlagKind, FlagValue

CacheKey = tuple[FlagKind, str]

_MISSING = object()


def _copy(value: FlagValue) -> FlagValue:
    return list(value) if isinstance(value, list) else value


class FlagCache:
    """In-memory map from ``(kind, id)`` to the flag's current value.

    Reads never block and never trigger a load.  A missing key and a flag
    that does not exist in the store are indistinguishable to readers.
    List values are copied in and out, so a caller mutating what it read
    cannot alter the baseline the next refresh diffs against.
    """

    def __init__(self) -> None:
        self._entries: dict[CacheKey, FlagValue] = {}

    def get(self, kind: FlagKind, flag_id: str, fallback: Any = None) -> Any:
        value = self._entries.get((kind, flag_id), _MISSING)
        if value is _MISSING:
            return fallback
        return _copy(value)

    def put(self, kind: FlagKind, flag_id: str, value: FlagValue) -> None:
        self._entries[(kind, flag_id)] = _copy(value)

    def discard(self, kind: FlagKind, flag_id: str) -> None:
        self._entries.pop((kind, flag_id), None)

    def ids(self, kind: FlagKind) -> list[str]:
        return [flag_id for k, flag_id in self._entries if k is kind]

    def snapshot(self, kind: FlagKind) -> dict[str, FlagValue]:
        """Copy of one partition, keyed by flag id."""
        return {flag_id: _copy(value) for (k, flag_id), value in self._entries.items() if k is kind}

    def read_fast(self, flag_id: str, fallback: Any = None) -> Any:
        return self.get(FlagKind.FAST, flag_id, fallback)

    def read_dynamic(self, flag_id: str, fallback: Any = None) -> Any:
        return self.get(FlagKind.DYNAMIC, flag_id, fallback)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["CacheKey", "FlagCache"]
