"""Config validation errors.

Both setting errors name the field and the ``FFLAGS_*`` variable that
feeds it, so a failed start-up log line points at what to fix.
"""
from __future__ import annotations

from fflags.kernel.errors import ApplicationError

ENV_PREFIX = "FFLAGS"


def env_key(setting_name: str, prefix: str = ENV_PREFIX) -> str:
    """Environment variable read for *setting_name*, e.g. ``FFLAGS_REFRESH_RATE_MS``."""
    return f"{prefix}_{setting_name}".upper().lstrip("_")


class ConfigError(ApplicationError):
    """Raised when the cache configuration is invalid or loading failed."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str, *, prefix: str = ENV_PREFIX) -> None:
        key = env_key(setting_name, prefix)
        super().__init__(
            f"Required setting '{setting_name}' is missing (set {key})",
            detail={"setting": setting_name, "env_key": key},
        )
        self.setting_name = setting_name
        self.env_key = key


class InvalidSettingValueError(ConfigError):
    """A setting is present but unusable for the flag cache."""
    default_code = "invalid_setting_value"

    def __init__(
        self,
        setting_name: str,
        value: object,
        reason: str,
        *,
        prefix: str = ENV_PREFIX,
    ) -> None:
        key = env_key(setting_name, prefix)
        super().__init__(
            f"Setting '{setting_name}' ({key}) has invalid value {value!r}: {reason}",
            detail={"setting": setting_name, "env_key": key, "value": repr(value), "reason": reason},
        )
        self.setting_name = setting_name
        self.env_key = key
        self.value = value
        self.reason = reason


__all__ = [
    "ConfigError",
    "ENV_PREFIX",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "env_key",
]
