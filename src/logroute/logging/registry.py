"""
Scheme keyed sink registry.

Destinations are opened by URL scheme: ``stdout``/``stderr`` map to the process
streams, plain paths and ``file://`` URLs to the built-in file factory, and
any other scheme to whatever factory was registered for it. New kinds of
destination can therefore be plugged in without touching the logger builder.
"""

from __future__ import annotations

import re
import threading
from typing import Callable, Iterable
from urllib.parse import SplitResult

from logroute.errors import SinkRegistrationError, UnknownSinkError

from .core import get_logger
from .sinks import FileSink, MultiSink, Sink, StreamSink, open_append
from .urls import (
    STREAM_KEYWORDS,
    check_file_url,
    is_windows_abs,
    parse_destination,
    url_path,
)

SinkFactory = Callable[[SplitResult], Sink]

FILE_SCHEME = "file"

_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*$")

logger = get_logger("logroute.registry")


def _open_file(path: str) -> Sink:
    if path in STREAM_KEYWORDS:
        return StreamSink(path)
    return FileSink(open_append(path))


def file_sink_factory(url: SplitResult) -> Sink:
    """Open the local file named by ``url`` for appending."""
    check_file_url(url, url.geturl())
    return _open_file(url_path(url))


class SinkRegistry:
    """Mapping from URL scheme to sink factory.

    Registration, removal and lookup share one lock so a scheme registered on
    one thread is visible to every later ``open_sink`` on any thread. Factories
    themselves run outside the lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._factories: dict[str, SinkFactory] = {FILE_SCHEME: file_sink_factory}

    def register(self, scheme: str, factory: SinkFactory) -> None:
        """Add ``factory`` under ``scheme``; schemes are case-insensitive."""
        if not scheme:
            raise SinkRegistrationError(scheme, "can't register a sink factory for empty string")
        if not _SCHEME.match(scheme):
            raise SinkRegistrationError(scheme, f"{scheme!r} is not a valid scheme")
        normalized = scheme.lower()
        with self._lock:
            if normalized in self._factories:
                raise SinkRegistrationError(scheme, f"sink factory already registered for scheme {normalized!r}")
            self._factories[normalized] = factory
        logger.debug("sink_registered", scheme=normalized)

    def unregister(self, scheme: str) -> bool:
        """Drop the factory for ``scheme``. Returns False if none was registered."""
        with self._lock:
            removed = self._factories.pop(scheme.lower(), None) is not None
        if removed:
            logger.debug("sink_unregistered", scheme=scheme.lower())
        return removed

    def lookup(self, scheme: str) -> SinkFactory | None:
        with self._lock:
            return self._factories.get(scheme.lower())

    def __contains__(self, scheme: object) -> bool:
        if not isinstance(scheme, str):
            return False
        return self.lookup(scheme) is not None

    def open_sink(self, destination: str) -> Sink:
        """Resolve one destination identifier into an open sink."""
        if destination in STREAM_KEYWORDS:
            return StreamSink(destination)
        if is_windows_abs(destination):
            return _open_file(destination)
        url = parse_destination(destination)
        scheme = url.scheme or FILE_SCHEME
        factory = self.lookup(scheme)
        if factory is None:
            raise UnknownSinkError(scheme, destination)
        return factory(url)

    def open_sinks(self, destinations: Iterable[str]) -> MultiSink:
        """Open every destination; if one fails, the ones already open are closed."""
        opened: list[Sink] = []
        try:
            for destination in destinations:
                opened.append(self.open_sink(destination))
        except BaseException:
            for sink in opened:
                sink.close()
            raise
        return MultiSink(opened)


# Process-wide registry used when callers don't supply their own.
default_registry = SinkRegistry()


def register_sink(scheme: str, factory: SinkFactory) -> None:
    """Register ``factory`` on the process-wide registry."""
    default_registry.register(scheme, factory)
