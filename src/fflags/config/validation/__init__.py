"""Config validation errors."""
from fflags.config.validation.errors import (
    ENV_PREFIX,
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    env_key,
)

__all__ = [
    "ConfigError",
    "ENV_PREFIX",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "env_key",
]
