"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    FlagsError
    ├── ApplicationError     (application.py)
    │   ├── FilterHookError
    │   └── ConfigError      (fflags.config.validation)
    └── InfrastructureError  (infrastructure.py)
        ├── StoreQueryError
        └── FlagDecodeError
"""

from fflags.kernel.errors.application import ApplicationError, FilterHookError
from fflags.kernel.errors.base import FlagsError
from fflags.kernel.errors.infrastructure import (
    FlagDecodeError,
    InfrastructureError,
    StoreQueryError,
)

__all__ = [
    "ApplicationError",
    "FilterHookError",
    "FlagDecodeError",
    "FlagsError",
    "InfrastructureError",
    "StoreQueryError",
]
