"""Testing fakes – InMemoryFlagStore."""
from __future__ import annotations

import asyncio
from typing import Any, Iterable, Mapping

from fflags.application.flags.query import build_filter, matches
from fflags.kernel.flags import FlagKind, FlagRecord


class InMemoryFlagStore:
    """:class:`~fflags.application.flags.FlagStore` backed by a list of documents.

    Queries apply the same equality filter as the MongoDB adapter and
    return freshly decoded records each time, so list values are new
    instances on every call.

    Usage::

        store = InMemoryFlagStore()
        store.put("beta_banner", FlagKind.DYNAMIC, True, tenant="acme")
        store.fail_next(RuntimeError("store down"))
    """

    def __init__(self, records: Iterable[FlagRecord] = ()) -> None:
        self._docs: dict[tuple[str, str], dict[str, Any]] = {}
        self._failures: list[BaseException] = []
        self.queries: list[dict[str, Any]] = []
        self.gate: asyncio.Event | None = None
        for record in records:
            self.add(record)

    # ------------------------------------------------------------------
    # FlagStore protocol
    # ------------------------------------------------------------------

    async def query(
        self, kind: FlagKind, predicate: Mapping[str, Any] | None = None
    ) -> list[FlagRecord]:
        query = build_filter(kind, predicate)
        self.queries.append(query)
        if self.gate is not None:
            await self.gate.wait()
        if self._failures:
            raise self._failures.pop(0)
        return [
            FlagRecord.from_document(_copy(doc))
            for doc in self._docs.values()
            if matches(doc, query)
        ]

    async def ensure_flag(self, record: FlagRecord) -> bool:
        if (record.kind.value, record.id) in self._docs:
            return False
        self.add(record)
        return True

    # ------------------------------------------------------------------
    # Test-setup helpers
    # ------------------------------------------------------------------

    def add(self, record: FlagRecord, **fields: Any) -> "InMemoryFlagStore":
        """Insert or replace *record*; extra *fields* are stored for filter hooks."""
        doc = record.to_document()
        doc.update(fields)
        self._docs[(record.kind.value, record.id)] = doc
        return self

    def put(self, flag_id: str, kind: FlagKind, value: Any, **fields: Any) -> "InMemoryFlagStore":
        return self.add(FlagRecord(id=flag_id, kind=kind, value=value), **fields)

    def remove(self, flag_id: str, kind: FlagKind) -> None:
        self._docs.pop((kind.value, flag_id), None)

    def fail_next(self, exc: BaseException) -> "InMemoryFlagStore":
        """Make the next query raise *exc*."""
        self._failures.append(exc)
        return self

    def hold(self) -> asyncio.Event:
        """Block queries until the returned event is set."""
        self.gate = asyncio.Event()
        return self.gate

    def query_count(self, kind: FlagKind | None = None) -> int:
        if kind is None:
            return len(self.queries)
        return sum(1 for q in self.queries if q["type"] == kind.value)


def _copy(doc: dict[str, Any]) -> dict[str, Any]:
    return {k: list(v) if isinstance(v, list) else v for k, v in doc.items()}


__all__ = ["InMemoryFlagStore"]
