"""
Service telemetry: the service's own logger and tracer provider.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from opentelemetry.sdk.trace import TracerProvider
from structlog.typing import FilteringBoundLogger, Processor

from logroute.config import LogsSettings, TelemetrySettings
from logroute.logging import (
    LoggerConfig,
    SamplingConfig,
    SinkRegistry,
    build_logger,
    default_registry,
    get_logger,
    sync_logger,
)

from .destinations import rewrite_destinations
from .rotation import register_rotation_sink
from .tracing import new_tracer_provider

logger = get_logger("logroute.telemetry")


@dataclass
class TelemetryOptions:
    """Construction options that don't come from configuration."""

    processors: Sequence[Processor] = ()
    registry: SinkRegistry = field(default_factory=lambda: default_registry)
    name: str | None = None


def _logger_config(logs: LogsSettings, output_paths: list[str], error_output_paths: list[str]) -> LoggerConfig:
    sampling = None
    if logs.sampling is not None:
        sampling = SamplingConfig(initial=logs.sampling.initial, thereafter=logs.sampling.thereafter)
    return LoggerConfig(
        level=logs.level.numeric,
        development=logs.development,
        encoding=logs.encoding.value,
        output_paths=tuple(output_paths),
        error_output_paths=tuple(error_output_paths),
        disable_caller=logs.disable_caller,
        disable_stacktrace=logs.disable_stacktrace,
        sampling=sampling,
        initial_fields=dict(logs.initial_fields),
    )


def _build_logger(logs: LogsSettings, options: TelemetryOptions) -> tuple[FilteringBoundLogger, str | None]:
    output_paths = list(logs.output_paths)
    error_output_paths = list(logs.error_output_paths)

    scheme = None
    if logs.rotation is not None and logs.rotation.enabled:
        scheme = register_rotation_sink(logs.rotation, options.registry)

    try:
        if scheme is not None:
            output_paths = rewrite_destinations(output_paths, scheme)
            error_output_paths = rewrite_destinations(error_output_paths, scheme)
        built = build_logger(
            _logger_config(logs, output_paths, error_output_paths),
            registry=options.registry,
            processors=options.processors,
            name=options.name,
        )
    except BaseException:
        if scheme is not None:
            options.registry.unregister(scheme)
        raise
    return built, scheme


def new_logger(logs: LogsSettings, options: TelemetryOptions | None = None) -> FilteringBoundLogger:
    """Build the service logger, routing file outputs through rotation when enabled.

    When rotation is enabled a sink scheme is registered first; if rewriting
    the destinations or building the logger fails, that registration is
    removed again. A successful registration lives as long as the registry
    unless released through ``Telemetry.shutdown``.
    """
    built, _ = _build_logger(logs, options or TelemetryOptions())
    return built


class Telemetry:
    """Owns the service logger and tracer provider for one service instance."""

    def __init__(
        self,
        logger: FilteringBoundLogger,
        tracer_provider: TracerProvider,
        *,
        registry: SinkRegistry | None = None,
        rotation_scheme: str | None = None,
    ):
        self._logger = logger
        self._tracer_provider = tracer_provider
        self._registry = registry or default_registry
        self._rotation_scheme = rotation_scheme

    @property
    def logger(self) -> FilteringBoundLogger:
        return self._logger

    @property
    def tracer_provider(self) -> TracerProvider:
        return self._tracer_provider

    @property
    def rotation_scheme(self) -> str | None:
        return self._rotation_scheme

    def shutdown(self) -> None:
        """Flush the logger, shut the tracer provider down and release the rotation scheme.

        Sinks that were already opened stay usable; only new resolutions of
        the scheme stop working.
        """
        sync_logger(self._logger)
        self._tracer_provider.shutdown()
        if self._rotation_scheme is not None:
            self._registry.unregister(self._rotation_scheme)
            self._rotation_scheme = None
        logger.debug("telemetry_shutdown")


def new_telemetry(config: TelemetrySettings, options: TelemetryOptions | None = None) -> Telemetry:
    """Create the service telemetry from configuration."""
    options = options or TelemetryOptions()
    built, scheme = _build_logger(config.logs, options)
    return Telemetry(
        built,
        new_tracer_provider(config.resource),
        registry=options.registry,
        rotation_scheme=scheme,
    )
