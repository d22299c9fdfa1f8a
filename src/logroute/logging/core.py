"""
Shared structlog helpers: the internal logger accessor and the processors used
by ``build_logger``.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

import orjson
import structlog
from structlog.typing import EventDict, WrappedLogger

_INTERNAL_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.processors.KeyValueRenderer(key_order=["event"]),
]


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for internal diagnostics.

    Events are handed to the stdlib logger of the same name, so they follow the
    host application's logging configuration and stay silent until it enables
    them. They never reach the sinks of loggers made by ``build_logger``.
    """
    return structlog.wrap_logger(
        logging.getLogger(name or "root"),
        processors=_INTERNAL_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def orjson_dumps(v: object, *, default: Callable[[object], object] | None = None) -> bytes:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC)


LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "exception": logging.ERROR,
    "critical": logging.CRITICAL,
    "fatal": logging.CRITICAL,
}


# =============================================================================
# Structlog Processors
# =============================================================================


class Sampler:
    """Caps repeated messages per second.

    Within each ``tick`` the first ``initial`` events sharing a level and message
    pass, after that only every ``thereafter``-th one does (none if 0).

    Counters live in a fixed table of ``size`` slots indexed by a hash of the
    level and message, so memory stays constant however many distinct messages
    are logged. Messages that collide share a counter.
    """

    DEFAULT_SIZE = 4096

    def __init__(
        self,
        initial: int,
        thereafter: int,
        *,
        tick: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        size: int = DEFAULT_SIZE,
    ):
        self.initial = initial
        self.thereafter = thereafter
        self.tick = tick
        self._clock = clock
        self._lock = threading.Lock()
        self._windows = [0.0] * size
        self._counts = [0] * size

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        key = (method_name, str(event_dict.get("event", "")))
        now = self._clock()
        with self._lock:
            slot = hash(key) % len(self._counts)
            if self._counts[slot] == 0 or now - self._windows[slot] >= self.tick:
                self._windows[slot] = now
                self._counts[slot] = 0
            self._counts[slot] += 1
            count = self._counts[slot]

        if count <= self.initial:
            return event_dict
        if self.thereafter > 0 and (count - self.initial) % self.thereafter == 0:
            return event_dict
        raise structlog.DropEvent


def format_caller(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Collapse the callsite filename and line number into ``caller``."""
    filename = event_dict.pop("filename", None)
    lineno = event_dict.pop("lineno", None)
    if filename is not None:
        event_dict["caller"] = f"{filename}:{lineno}"
    return event_dict


class StacktraceAdder:
    """Request a stack trace for events at or above ``min_level``."""

    def __init__(self, min_level: int):
        self.min_level = min_level

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        if LEVELS.get(method_name, logging.NOTSET) >= self.min_level:
            event_dict.setdefault("stack_info", True)
        return event_dict


def rename_stack_key(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    if "stack" in event_dict:
        event_dict["stacktrace"] = event_dict.pop("stack")
    return event_dict
