"""
Size-bounded rotating file writer.

The rollover itself (renaming ``app.log`` -> ``app.log.1`` -> ... -> ``app.log.N``)
is the stdlib ``RotatingFileHandler`` engine. This module only exposes it as a
byte writer with ``write``/``close`` and adds age based pruning of backups.
"""

from __future__ import annotations

import os
import time
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler

from logroute.logging import get_logger

MEGABYTE = 1024 * 1024
DEFAULT_MAX_SIZE = 100  # megabytes
DEFAULT_MAX_BACKUPS = 100

logger = get_logger("logroute.rotate")


class RotatingFileWriter(RotatingFileHandler):
    """Byte writer that rolls ``filename`` over once it would exceed ``max_size`` MB.

    Args:
        filename: Path of the active log file. Nothing is opened until the first write.
        max_size: Megabytes before rollover; 0 uses ``DEFAULT_MAX_SIZE``.
        max_age: Days to keep backups; 0 keeps them regardless of age.
        max_backups: Number of backups to keep; 0 uses ``DEFAULT_MAX_BACKUPS``.
        local_time: Stamp rollovers with local time instead of UTC.
    """

    def __init__(
        self,
        filename: str,
        max_size: int = 0,
        max_age: int = 0,
        max_backups: int = 0,
        local_time: bool = False,
    ) -> None:
        self.filename = filename
        self.max_size = max_size
        self.max_age = max_age
        self.max_backups = max_backups
        self.local_time = local_time
        super().__init__(
            filename,
            maxBytes=(max_size or DEFAULT_MAX_SIZE) * MEGABYTE,
            backupCount=max_backups or DEFAULT_MAX_BACKUPS,
            delay=True,
        )
        # RotatingFileHandler forces text append mode; writes here are raw bytes.
        self.mode = "ab"
        self.encoding = None

    def write(self, data: bytes) -> int:
        if len(data) > self.maxBytes:
            raise OSError(f"write length {len(data)} exceeds maximum file size {self.maxBytes}")
        with self.lock:
            if self.stream is None:
                self.stream = self._open()
            if self.stream.tell() + len(data) > self.maxBytes:
                self.doRollover()
                self.stream = self._open()
            written = self.stream.write(data)
            self.stream.flush()
            return written

    def doRollover(self) -> None:
        super().doRollover()
        rotated_at = datetime.now() if self.local_time else datetime.now(timezone.utc)
        logger.debug("log_file_rotated", filename=self.filename, rotated_at=rotated_at.isoformat())
        if self.max_age > 0:
            self._prune_expired()

    def _prune_expired(self) -> None:
        cutoff = time.time() - self.max_age * 24 * 60 * 60
        for index in range(1, self.backupCount + 1):
            backup = self.rotation_filename(f"{self.baseFilename}.{index}")
            try:
                if os.path.getmtime(backup) < cutoff:
                    os.remove(backup)
            except FileNotFoundError:
                continue

    def __repr__(self) -> str:
        return (
            f"<RotatingFileWriter filename={self.filename!r} max_size={self.max_size} "
            f"max_age={self.max_age} max_backups={self.max_backups} local_time={self.local_time}>"
        )
