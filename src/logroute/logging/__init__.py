"""
Structured logging with pluggable, URL addressed sinks.

Destinations are identified by strings: ``stdout``, ``stderr``, plain paths,
``file://`` URLs, or URLs whose scheme has a factory registered on a
``SinkRegistry``. ``build_logger`` opens them and returns a structlog logger.

Design Pattern: Strategy Pattern for sink abstraction, Registry for sink lookup.
Library: structlog + orjson for high-performance JSON serialization.
"""

from .core import get_logger
from .builder import LoggerConfig, SamplingConfig, build_logger, close_logger, sync_logger
from .registry import SinkRegistry, default_registry, register_sink
from .sinks import FileSink, MultiSink, NopSyncSink, Sink, StreamSink

__all__ = [
    "get_logger",
    "LoggerConfig",
    "SamplingConfig",
    "build_logger",
    "close_logger",
    "sync_logger",
    "SinkRegistry",
    "default_registry",
    "register_sink",
    "Sink",
    "StreamSink",
    "FileSink",
    "NopSyncSink",
    "MultiSink",
]
