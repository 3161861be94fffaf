"""MongoDB adapter — MongoFlagStore."""

from __future__ import annotations

from typing import Any, Mapping

from pymongo.errors import PyMongoError

from fflags.application.flags.query import build_filter
from fflags.config.settings import FlagCacheSettings
from fflags.config.validation import InvalidSettingValueError
from fflags.kernel.errors import StoreQueryError
from fflags.kernel.flags import FlagKind, FlagRecord
from fflags.observability.logging import get_logger

_log = get_logger(__name__)


class MongoFlagStore:
    """Flag store over a motor ``AsyncIOMotorCollection``.

    Documents follow the flag schema: ``_id`` is the flag id, ``type`` the
    kind tag (``"fast"``/``"dynamic"``) and ``value`` the payload.  Every
    query is a plain equality filter, so an index on ``type`` (plus any
    field the filter hook scopes by) covers it.

    Usage::

        client = AsyncIOMotorClient("mongodb://localhost:27017")
        store = MongoFlagStore.from_client(client, "service_name/fflags")
    """

    def __init__(self, collection: Any) -> None:
        self._col = collection

    @classmethod
    def from_client(cls, client: Any, namespace: str) -> "MongoFlagStore":
        """Resolve ``"database/collection"`` on a motor client."""
        database, _, collection = namespace.partition("/")
        if not database or not collection:
            raise InvalidSettingValueError("collection", namespace, "expected 'database/collection'")
        return cls(client[database][collection])

    @classmethod
    def from_settings(cls, settings: FlagCacheSettings) -> "MongoFlagStore":
        from motor.motor_asyncio import AsyncIOMotorClient  # noqa: PLC0415

        return cls.from_client(AsyncIOMotorClient(settings.mongo_uri), settings.collection)

    async def query(
        self, kind: FlagKind, predicate: Mapping[str, Any] | None = None
    ) -> list[FlagRecord]:
        query = build_filter(kind, predicate)
        try:
            docs = [doc async for doc in self._col.find(query)]
        except PyMongoError as exc:
            raise StoreQueryError(kind.value, filter=query, cause=exc) from exc
        _log.debug("fflags.mongo.queried", kind=kind.value, count=len(docs))
        return [FlagRecord.from_document(doc) for doc in docs]

    async def ensure_flag(self, record: FlagRecord) -> bool:
        """Insert *record* unless a flag with its id exists; True if inserted."""
        doc = record.to_document()
        doc.pop("_id")
        try:
            result = await self._col.update_one(
                {"_id": record.id}, {"$setOnInsert": doc}, upsert=True
            )
        except PyMongoError as exc:
            raise StoreQueryError(record.kind.value, f"Could not seed flag '{record.id}'", cause=exc) from exc
        return result.upserted_id is not None


__all__ = ["MongoFlagStore"]
