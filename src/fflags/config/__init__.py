"""Config – settings, loaders and validation errors."""

from fflags.config.settings import EnvSettingsLoader, FlagCacheSettings, Settings, SettingsLoader
from fflags.config.validation import ConfigError, MissingRequiredSettingError

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "FlagCacheSettings",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
