"""
Sink abstractions and concrete implementations.

A sink is anything a rendered log line can be written to: it must accept bytes,
be closable and offer a sync point. Sinks are produced by the factories held in
a ``SinkRegistry`` and combined into a ``MultiSink`` per logger.
"""

from __future__ import annotations

import os
import sys
from abc import ABC, abstractmethod
from typing import IO, Protocol, Sequence

from logroute.errors import SinkWriteError

# Readable by the owner and cooperating local users, writable by the owner only.
FILE_MODE = 0o644


def open_append(path: str) -> IO[bytes]:
    """Open ``path`` unbuffered for appending, creating it if needed."""
    return open(path, "ab", buffering=0, opener=lambda p, flags: os.open(p, flags, FILE_MODE))


class WriteCloser(Protocol):
    """What a sink needs from the object it wraps."""

    def write(self, data: bytes) -> int | None: ...

    def close(self) -> None: ...


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class Sink(ABC):
    """Abstract base class for log sinks."""

    @abstractmethod
    def write(self, data: bytes) -> int:
        """Write raw bytes, returning the number written."""
        ...

    @abstractmethod
    def sync(self) -> None:
        """Push buffered data towards durable storage."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        ...

    def flush(self) -> None:
        self.sync()


class StreamSink(Sink):
    """Writes to ``sys.stdout`` or ``sys.stderr``.

    The stream is looked up on every write so redirected streams are honoured.
    Closing is a no-op; the process owns its standard streams.
    """

    def __init__(self, name: str):
        self.name = name

    @property
    def stream(self) -> IO[str]:
        return getattr(sys, self.name)

    def write(self, data: bytes) -> int:
        stream = self.stream
        stream.write(data.decode("utf-8", errors="replace"))
        stream.flush()
        return len(data)

    def sync(self) -> None:
        self.stream.flush()

    def close(self) -> None:
        pass


class FileSink(Sink):
    """Plain append-only file; ``sync`` reaches the disk via fsync."""

    def __init__(self, file: IO[bytes]):
        self.file = file

    @property
    def name(self) -> str:
        return self.file.name

    def write(self, data: bytes) -> int:
        return self.file.write(data) or 0

    def sync(self) -> None:
        self.file.flush()
        os.fsync(self.file.fileno())

    def close(self) -> None:
        self.file.close()


class NopSyncSink(Sink):
    """Adds a no-op ``sync`` to a writer that only knows ``write`` and ``close``.

    Rotating writers give no durable flush primitive, so syncing through this
    adapter is best effort only.
    """

    def __init__(self, writer: WriteCloser):
        self.writer = writer

    def write(self, data: bytes) -> int:
        return self.writer.write(data) or 0

    def sync(self) -> None:
        pass

    def close(self) -> None:
        self.writer.close()


class MultiSink(Sink):
    """Fans every write out to a fixed list of sinks.

    A failing sink does not stop the others; the failures are collected and
    raised together as ``SinkWriteError`` once every sink was tried.
    """

    def __init__(self, sinks: Sequence[Sink]):
        self.sinks = list(sinks)

    def write(self, data: bytes) -> int:
        errors: list[BaseException] = []
        for sink in self.sinks:
            try:
                sink.write(data)
            except (OSError, ValueError) as exc:
                errors.append(exc)
        if errors:
            raise SinkWriteError(errors)
        return len(data)

    def sync(self) -> None:
        self._each("sync")

    def close(self) -> None:
        self._each("close")

    def _each(self, method: str) -> None:
        errors: list[BaseException] = []
        for sink in self.sinks:
            try:
                getattr(sink, method)()
            except (OSError, ValueError) as exc:
                errors.append(exc)
        if errors:
            raise SinkWriteError(errors)

    def __len__(self) -> int:
        return len(self.sinks)
