"""Infrastructure errors — backing store failures."""

from __future__ import annotations

from typing import Any

from fflags.kernel.errors.base import FlagsError


class InfrastructureError(FlagsError):
    """I/O failure talking to the backing store."""

    default_code = "infrastructure_error"


class StoreQueryError(InfrastructureError):
    """The store could not execute a flag query."""

    default_code = "store_query_error"

    def __init__(
        self,
        kind: str,
        message: str | None = None,
        *,
        filter: dict[str, Any] | None = None,  # noqa: A002
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message or f"Query for '{kind}' flags failed",
            detail={"kind": kind, "filter": filter or {}},
            **kwargs,
        )
        self.kind = kind


class FlagDecodeError(InfrastructureError):
    """A stored document could not be decoded into a flag record."""

    default_code = "flag_decode_error"

    def __init__(self, message: str, *, document_id: Any = None, **kwargs: Any) -> None:
        super().__init__(message, detail={"document_id": repr(document_id)}, **kwargs)
        self.document_id = document_id


__all__ = ["FlagDecodeError", "InfrastructureError", "StoreQueryError"]
