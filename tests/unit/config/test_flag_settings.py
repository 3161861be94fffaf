"""Unit tests for FlagCacheSettings and the env loaders."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import ClassVar

import pytest

from fflags.config.settings import (
    DEFAULT_REFRESH_RATE_MS,
    DotenvSettingsLoader,
    EnvSettingsLoader,
    FlagCacheSettings,
    Settings,
)
from fflags.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError


class TestFlagCacheSettings:
    def test_defaults(self) -> None:
        settings = FlagCacheSettings()
        assert settings.refresh_rate_ms == DEFAULT_REFRESH_RATE_MS == 30000
        assert settings.self_reconfigure is False
        assert settings.evict_stale is False
        assert settings.refresh_rate_flag_id == "DynamicFFlagRefreshRate"
        assert settings.namespace == ("fflags", "flags")

    @pytest.mark.parametrize("rate", [0, -5, float("nan"), float("inf")])
    def test_rejects_non_positive_rate(self, rate: int) -> None:
        with pytest.raises(InvalidSettingValueError, match="refresh_rate_ms"):
            FlagCacheSettings(refresh_rate_ms=rate)

    @pytest.mark.parametrize("collection", ["flags", "db/", "/flags"])
    def test_rejects_bad_collection(self, collection: str) -> None:
        with pytest.raises(InvalidSettingValueError, match="collection"):
            FlagCacheSettings(collection=collection)

    def test_rejects_empty_rate_flag_id(self) -> None:
        with pytest.raises(ConfigError):
            FlagCacheSettings(refresh_rate_flag_id="")

    def test_error_detail_names_env_variable(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            FlagCacheSettings(refresh_rate_ms=0)
        assert exc_info.value.to_dict()["detail"] == {
            "setting": "refresh_rate_ms",
            "env_key": "FFLAGS_REFRESH_RATE_MS",
            "value": "0",
            "reason": "must be a positive integer",
        }
        assert "FFLAGS_REFRESH_RATE_MS" in str(exc_info.value)


class TestEnvSettingsLoader:
    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FFLAGS_REFRESH_RATE_MS", "5000")
        monkeypatch.setenv("FFLAGS_SELF_RECONFIGURE", "yes")
        monkeypatch.setenv("FFLAGS_COLLECTION", "billing/flags")
        settings = EnvSettingsLoader().load(FlagCacheSettings)
        assert settings.refresh_rate_ms == 5000
        assert settings.self_reconfigure is True
        assert settings.namespace == ("billing", "flags")

    def test_bool_false_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for falsy in ("false", "0", "no", "off"):
            monkeypatch.setenv("FFLAGS_EVICT_STALE", falsy)
            assert EnvSettingsLoader().load(FlagCacheSettings).evict_stale is False

    def test_unparseable_int(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FFLAGS_REFRESH_RATE_MS", "fast")
        with pytest.raises(InvalidSettingValueError) as exc_info:
            EnvSettingsLoader().load(FlagCacheSettings)
        assert exc_info.value.setting_name == "refresh_rate_ms"
        assert exc_info.value.detail["env_key"] == "FFLAGS_REFRESH_RATE_MS"
        assert exc_info.value.detail["value"] == "'fast'"

    def test_validation_error_propagates(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FFLAGS_REFRESH_RATE_MS", "0")
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader().load(FlagCacheSettings)


class TestDotenvSettingsLoader:
    def test_loads_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("FFLAGS_REFRESH_RATE_MS", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("FFLAGS_REFRESH_RATE_MS=1200\n")
        try:
            settings = DotenvSettingsLoader(str(env_file)).load(FlagCacheSettings)
        finally:
            os.environ.pop("FFLAGS_REFRESH_RATE_MS", None)
        assert settings.refresh_rate_ms == 1200


class TestMissingRequiredSetting:
    def test_required_field_reports_env_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        @dataclasses.dataclass
        class _Required(Settings):
            _prefix: ClassVar[str] = "FFLAGS"

            namespace_owner: str

        monkeypatch.delenv("FFLAGS_NAMESPACE_OWNER", raising=False)
        with pytest.raises(MissingRequiredSettingError) as exc_info:
            EnvSettingsLoader().load(_Required)
        assert exc_info.value.to_dict()["detail"] == {
            "setting": "namespace_owner",
            "env_key": "FFLAGS_NAMESPACE_OWNER",
        }
