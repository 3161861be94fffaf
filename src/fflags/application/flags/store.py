"""Application flags – FlagStore port."""
from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from fflags.kernel.flags import FlagKind, FlagRecord


@runtime_checkable
class FlagStore(Protocol):
    """Port: fetch every flag record of *kind* matching *predicate*.

    Implementations apply :func:`~fflags.application.flags.query.build_filter`
    and must return the full result or raise; partial results are never
    surfaced.
    """

    async def query(
        self, kind: FlagKind, predicate: Mapping[str, Any] | None = None
    ) -> list[FlagRecord]: ...


@runtime_checkable
class SeedableFlagStore(FlagStore, Protocol):
    """A store that can create a flag when it does not exist yet."""

    async def ensure_flag(self, record: FlagRecord) -> bool: ...


__all__ = ["FlagStore", "SeedableFlagStore"]
