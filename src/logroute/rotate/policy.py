"""
Rotation policy and the writer factory built on it.
"""

from __future__ import annotations

from typing import IO

from pydantic import BaseModel, ConfigDict, Field

from logroute.logging.sinks import open_append

from .engine import RotatingFileWriter


class RotationPolicy(BaseModel):
    """How a log file is rolled over and pruned.

    Example:

        rotation:
            enable: true
            max_megabytes: 100
            max_days: 30
            max_backups: 100
            localtime: false

    Zero values defer to the rotating writer's defaults: 100 MB per file,
    100 backups, no age limit. Backup timestamps are UTC unless ``localtime``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    enabled: bool = Field(default=False, alias="enable", description="Rotate log files")
    max_megabytes: int = Field(default=0, ge=0, description="Size in MB before rollover")
    max_days: int = Field(default=0, ge=0, description="Days to keep rolled over files")
    max_backups: int = Field(default=0, ge=0, description="Rolled over files to keep")
    local_time: bool = Field(default=False, alias="localtime", description="Use local time for backups")

    def new_writer(self, filename: str) -> IO[bytes] | RotatingFileWriter:
        """Return a writer for ``filename``.

        With rotation disabled this opens ``filename`` for appending right away
        and lets ``OSError`` propagate. With rotation enabled the rotating
        writer is returned without touching the filesystem.
        """
        if not self.enabled:
            return open_append(filename)
        return RotatingFileWriter(
            filename,
            max_size=self.max_megabytes,
            max_age=self.max_days,
            max_backups=self.max_backups,
            local_time=self.local_time,
        )
