"""
Telemetry Configuration.

Groups the settings for the service's own logs and metrics. Prefix: LOGROUTE_TELEMETRY_
Nested values use ``__``, e.g. ``LOGROUTE_TELEMETRY_LOGS__LEVEL=debug``.
"""

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging import LogsSettings


class MetricsLevel(str, Enum):
    NONE = "none"
    BASIC = "basic"
    NORMAL = "normal"
    DETAILED = "detailed"


class MetricsSettings(BaseModel):
    """Settings for the service's own metrics."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: MetricsLevel = Field(default=MetricsLevel.BASIC, description="Metrics verbosity")
    address: str = Field(default="localhost:8888", description="[address]:port metrics are exposed on")


class TelemetrySettings(BaseSettings):
    """Service telemetry settings."""

    model_config = SettingsConfigDict(
        env_prefix="LOGROUTE_TELEMETRY_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    logs: LogsSettings = Field(default_factory=LogsSettings)
    metrics: MetricsSettings = Field(default_factory=MetricsSettings)
    # A None value suppresses an attribute that would otherwise be added automatically.
    resource: Dict[str, Optional[str]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_metrics_address(self) -> "TelemetrySettings":
        if self.metrics.level != MetricsLevel.NONE and not self.metrics.address:
            raise ValueError("collector telemetry metric address should exist when metric level is not none")
        return self
