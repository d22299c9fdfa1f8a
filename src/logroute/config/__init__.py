"""
Configuration models.

Usage:
    from logroute.config import TelemetrySettings

    settings = TelemetrySettings()                     # environment / .env
    settings = TelemetrySettings.model_validate(data)  # parsed YAML/JSON mapping
"""

from .logging import LogEncoding, LogLevel, LogsSamplingSettings, LogsSettings
from .telemetry import MetricsLevel, MetricsSettings, TelemetrySettings

__all__ = [
    "LogEncoding",
    "LogLevel",
    "LogsSamplingSettings",
    "LogsSettings",
    "MetricsLevel",
    "MetricsSettings",
    "TelemetrySettings",
]
