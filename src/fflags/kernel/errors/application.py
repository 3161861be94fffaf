"""Application-layer errors — misuse of the cache's configuration surface."""

from __future__ import annotations

from typing import Any

from fflags.kernel.errors.base import FlagsError


class ApplicationError(FlagsError):
    """Caller-supplied input or configuration is unusable."""

    default_code = "application_error"


class FilterHookError(ApplicationError):
    """The query filter hook returned something other than ``False`` or a mapping."""

    default_code = "invalid_filter_hook_result"

    def __init__(self, result: object, **kwargs: Any) -> None:
        super().__init__(
            f"Filter hook must return False or a mapping of str keys, got {type(result).__name__}",
            detail={"result": repr(result)},
            **kwargs,
        )
        self.result = result


__all__ = ["ApplicationError", "FilterHookError"]
