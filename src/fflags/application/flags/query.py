"""Application flags – query filter hook and filter construction."""
from __future__ import annotations

from typing import Any, Callable, Mapping

from fflags.kernel.errors import FilterHookError
from fflags.kernel.flags import FlagKind

FilterHook = Callable[[], "Mapping[str, Any] | bool"]
"""Zero-arg callable returning ``False`` or extra equality predicates."""


def no_filter() -> bool:
    return False


def resolve_filter(hook: FilterHook) -> dict[str, Any] | None:
    """Invoke *hook* once and validate its result.

    Returns ``None`` for the default query or a fresh copy of the hook's
    predicates.  Anything else raises :class:`FilterHookError`.
    """
    result = hook()
    if result is False:
        return None
    if not isinstance(result, Mapping) or not all(isinstance(k, str) for k in result):
        raise FilterHookError(result)
    return dict(result)


def build_filter(kind: FlagKind, predicate: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Merge *predicate* with the kind's type tag; the type tag always wins."""
    query: dict[str, Any] = dict(predicate or {})
    query["type"] = kind.value
    return query


def matches(document: Mapping[str, Any], query: Mapping[str, Any]) -> bool:
    """Evaluate an equality filter against a plain document."""
    return all(key in document and document[key] == value for key, value in query.items())


__all__ = ["FilterHook", "build_filter", "matches", "no_filter", "resolve_filter"]
