"""Kernel flags – FlagKind, FlagValue and the FlagRecord value object."""
from __future__ import annotations

import dataclasses
import enum
from datetime import datetime
from typing import Any, Mapping, Union

from fflags.kernel.errors import FlagDecodeError

FlagValue = Union[str, int, float, bool, list[str]]
"""A flag's payload: scalar or list of strings."""


class FlagKind(str, enum.Enum):
    """Partition of the cache; the value is the store's ``type`` tag."""

    FAST = "fast"
    DYNAMIC = "dynamic"


@dataclasses.dataclass(frozen=True)
class FlagRecord:
    """A flag as returned by the backing store.

    Identity is ``id`` scoped within ``kind``; the same id may exist for
    both kinds without colliding in the cache.
    """

    id: str
    kind: FlagKind
    value: FlagValue
    created_at: datetime | None = None
    env: Any = None
    tags: tuple[Any, ...] = ()
    description: str | None = None
    attributes: dict[str, Any] = dataclasses.field(default_factory=dict)

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "FlagRecord":
        """Decode a store document (``_id``/``type``/``value`` + metadata)."""
        doc_id = doc.get("_id")
        for required in ("_id", "type", "value"):
            if required not in doc:
                raise FlagDecodeError(f"Flag document is missing '{required}'", document_id=doc_id)
        try:
            kind = FlagKind(doc["type"])
        except ValueError as exc:
            raise FlagDecodeError(
                f"Unknown flag type {doc['type']!r}", document_id=doc_id, cause=exc
            ) from exc
        return cls(
            id=str(doc_id),
            kind=kind,
            value=doc["value"],
            created_at=doc.get("createdAt"),
            env=doc.get("env"),
            tags=tuple(doc.get("tags") or ()),
            description=doc.get("description"),
            attributes=dict(doc.get("attributes") or {}),
        )

    def to_document(self) -> dict[str, Any]:
        """Return the store document for this record, omitting unset metadata."""
        doc: dict[str, Any] = {
            "_id": self.id,
            "type": self.kind.value,
            "value": self.value,
            "attributes": dict(self.attributes),
        }
        if self.created_at is not None:
            doc["createdAt"] = self.created_at
        if self.env is not None:
            doc["env"] = self.env
        if self.tags:
            doc["tags"] = list(self.tags)
        if self.description is not None:
            doc["description"] = self.description
        return doc


__all__ = ["FlagKind", "FlagRecord", "FlagValue"]
