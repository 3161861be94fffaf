"""Config settings – env-based configuration."""
from fflags.config.settings.flags import (
    DEFAULT_REFRESH_RATE_MS,
    REFRESH_RATE_FLAG_ID,
    FlagCacheSettings,
    Settings,
)
from fflags.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "DEFAULT_REFRESH_RATE_MS",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "FlagCacheSettings",
    "REFRESH_RATE_FLAG_ID",
    "Settings",
    "SettingsLoader",
]
