"""
Configuration model tests.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from logroute.config import LogEncoding, LogLevel, LogsSettings, MetricsLevel, TelemetrySettings
from logroute.rotate import RotationPolicy


class TestLogsSettings:
    def test_defaults(self) -> None:
        logs = LogsSettings()
        assert logs.level == LogLevel.INFO
        assert logs.encoding == LogEncoding.CONSOLE
        assert logs.output_paths == ["stderr"]
        assert logs.error_output_paths == ["stderr"]
        assert logs.sampling is None
        assert logs.rotation is None

    def test_level_is_case_insensitive(self) -> None:
        assert LogsSettings(level="debug").level == LogLevel.DEBUG
        assert LogsSettings(level="debug").level.numeric == 10

    def test_rotation_from_mapping(self) -> None:
        logs = LogsSettings.model_validate(
            {"rotation": {"enable": True, "max_megabytes": 100, "max_days": 30, "max_backups": 100, "localtime": False}}
        )
        assert logs.rotation == RotationPolicy(enabled=True, max_megabytes=100, max_days=30, max_backups=100)

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LogsSettings.model_validate({"outputs": ["stdout"]})


class TestTelemetrySettings:
    def test_metrics_address_required_unless_none(self) -> None:
        with pytest.raises(ValidationError, match="metric address should exist"):
            TelemetrySettings.model_validate({"metrics": {"level": "basic", "address": ""}})

    def test_metrics_none_without_address(self) -> None:
        settings = TelemetrySettings.model_validate({"metrics": {"level": "none", "address": ""}})
        assert settings.metrics.level == MetricsLevel.NONE

    def test_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("LOGROUTE_TELEMETRY_LOGS__LEVEL", "warning")
        monkeypatch.setenv("LOGROUTE_TELEMETRY_LOGS__ROTATION__ENABLE", "true")
        monkeypatch.setenv("LOGROUTE_TELEMETRY_LOGS__ROTATION__MAX_DAYS", "7")
        settings = TelemetrySettings(_env_file=None)
        assert settings.logs.level == LogLevel.WARNING
        assert settings.logs.rotation is not None
        assert settings.logs.rotation.enabled is True
        assert settings.logs.rotation.max_days == 7
