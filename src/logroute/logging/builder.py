"""
Logger construction from a declarative config.

``build_logger`` resolves every output and error-output destination through a
``SinkRegistry``, assembles the structlog processor chain and returns a bound
logger whose rendered lines land in all output sinks. Internal write failures
are reported to the error-output sinks rather than raised into the caller.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

import structlog
from structlog.typing import FilteringBoundLogger, Processor

from logroute.errors import LogRouteError, SinkWriteError

from .core import Sampler, StacktraceAdder, format_caller, orjson_dumps, rename_stack_key
from .formatters import ConsoleRenderer
from .registry import SinkRegistry, default_registry
from .sinks import MultiSink

ENCODINGS = ("json", "console")


@dataclass(frozen=True)
class SamplingConfig:
    initial: int
    thereafter: int


@dataclass(frozen=True)
class LoggerConfig:
    """Everything ``build_logger`` needs to know about one logger."""

    level: int = logging.INFO
    development: bool = False
    encoding: str = "json"
    output_paths: tuple[str, ...] = ("stderr",)
    error_output_paths: tuple[str, ...] = ("stderr",)
    disable_caller: bool = False
    disable_stacktrace: bool = False
    sampling: Optional[SamplingConfig] = None
    initial_fields: dict[str, Any] = field(default_factory=dict)


class SinkLogger:
    """structlog logger that writes each rendered line, newline terminated, to a MultiSink."""

    def __init__(self, out: MultiSink, error_out: MultiSink):
        self.out = out
        self.error_out = error_out
        self._lock = threading.Lock()

    def msg(self, message: str | bytes) -> None:
        if isinstance(message, str):
            message = message.encode("utf-8")
        with self._lock:
            try:
                self.out.write(message + b"\n")
            except SinkWriteError as exc:
                self._report(exc)

    log = debug = info = warn = warning = msg
    fatal = failure = err = error = critical = exception = msg

    def _report(self, exc: SinkWriteError) -> None:
        line = f"{datetime.now(timezone.utc).isoformat()} write error: {exc}\n"
        try:
            self.error_out.write(line.encode("utf-8"))
        except SinkWriteError:
            pass  # Nowhere left to report to

    def sync(self) -> None:
        with self._lock:
            self.out.sync()
            self.error_out.sync()

    def close(self) -> None:
        with self._lock:
            self.out.close()
            self.error_out.close()


def _processors(config: LoggerConfig, extra: Iterable[Processor]) -> list[Processor]:
    chain: list[Processor] = []
    if config.sampling is not None:
        chain.append(Sampler(config.sampling.initial, config.sampling.thereafter))
    chain.append(structlog.stdlib.add_log_level)
    chain.extend(extra)

    if config.encoding == "console":
        # Human-readable timestamps for console format of logs.
        chain.append(structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"))
    else:
        chain.append(structlog.processors.TimeStamper(fmt=None, key="ts"))

    if not config.disable_caller:
        chain.append(
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ],
                additional_ignores=["logroute.logging"],
            )
        )
        chain.append(format_caller)
    if not config.disable_stacktrace:
        chain.append(StacktraceAdder(logging.WARNING if config.development else logging.ERROR))

    chain.extend(
        [
            structlog.processors.StackInfoRenderer(additional_ignores=["logroute.logging"]),
            rename_stack_key,
            structlog.processors.format_exc_info,
            structlog.processors.EventRenamer("msg"),
        ]
    )

    if config.encoding == "console":
        chain.append(ConsoleRenderer())
    else:
        chain.append(structlog.processors.JSONRenderer(serializer=orjson_dumps))
    return chain


def build_logger(
    config: LoggerConfig,
    registry: SinkRegistry | None = None,
    processors: Iterable[Processor] = (),
    name: str | None = None,
) -> FilteringBoundLogger:
    """Open the configured sinks and return a logger writing to them.

    Raises whatever opening a destination raises; in that case every sink
    opened so far is closed again and no logger is produced.
    """
    if config.encoding not in ENCODINGS:
        raise LogRouteError(
            f"no encoder registered for name {config.encoding!r}",
            code="ENCODING_UNKNOWN",
            details={"encoding": config.encoding},
        )
    registry = registry or default_registry
    out = registry.open_sinks(config.output_paths)
    try:
        error_out = registry.open_sinks(config.error_output_paths)
    except BaseException:
        out.close()
        raise

    context: dict[str, Any] = dict(config.initial_fields)
    if name:
        context["logger"] = name
    wrapper_class = structlog.make_filtering_bound_logger(config.level)
    return wrapper_class(SinkLogger(out, error_out), _processors(config, processors), context)


def _sink_logger(logger: Any) -> SinkLogger | None:
    wrapped = getattr(logger, "_logger", None)
    return wrapped if isinstance(wrapped, SinkLogger) else None


def sync_logger(logger: Any) -> None:
    """Flush every sink behind a logger returned by ``build_logger``."""
    sink_logger = _sink_logger(logger)
    if sink_logger is not None:
        sink_logger.sync()


def close_logger(logger: Any) -> None:
    """Close every sink behind a logger returned by ``build_logger``."""
    sink_logger = _sink_logger(logger)
    if sink_logger is not None:
        sink_logger.close()
