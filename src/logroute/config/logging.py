"""
Logging Configuration.
"""

from enum import Enum
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from logroute.rotate import RotationPolicy


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def numeric(self) -> int:
        return getattr(logging, self.value)


class LogEncoding(str, Enum):
    CONSOLE = "console"
    JSON = "json"


class LogsSamplingSettings(BaseModel):
    """Caps the CPU and I/O load of logging while keeping a representative subset.

    Per second and per message, the first ``initial`` entries are logged, then
    every ``thereafter``-th.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    initial: int = Field(default=10, ge=0)
    thereafter: int = Field(default=100, ge=0)


class LogsSettings(BaseModel):
    """Settings for the service's own logs."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: LogLevel = Field(default=LogLevel.INFO, description="Minimum enabled log level")
    development: bool = Field(
        default=False,
        description="Development mode: stack traces from WARNING instead of ERROR",
    )
    encoding: LogEncoding = Field(default=LogEncoding.CONSOLE, description="Output encoding")
    disable_caller: bool = Field(default=False, description="Don't annotate entries with file:line")
    disable_stacktrace: bool = Field(default=False, description="Never capture stack traces")
    sampling: Optional[LogsSamplingSettings] = Field(default=None, description="None disables sampling")
    output_paths: List[str] = Field(
        default_factory=lambda: ["stderr"],
        description=(
            "Paths or URLs to write logs to. Only the file scheme or no scheme; "
            "'stdout' and 'stderr' name the process streams"
        ),
    )
    error_output_paths: List[str] = Field(
        default_factory=lambda: ["stderr"],
        description="Where the logger reports its own internal errors",
    )
    initial_fields: Dict[str, Any] = Field(default_factory=dict, description="Fields added to every entry")
    rotation: Optional[RotationPolicy] = Field(default=None, description="How file outputs are rotated")

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.upper()
        return value
