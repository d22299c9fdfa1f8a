"""
Service telemetry construction.

``new_telemetry`` builds the service logger (with optional log rotation) and
tracer provider from ``TelemetrySettings``. File outputs are redirected to a
rotation sink by rewriting them onto a per-instance scheme registered on the
sink registry.
"""

from .destinations import rewrite_destinations, rotation_url
from .rotation import ROTATION_SCHEME_PREFIX, register_rotation_sink, rotation_sink_factory
from .service import Telemetry, TelemetryOptions, new_logger, new_telemetry
from .tracing import AlwaysRecordSampler, new_tracer_provider

__all__ = [
    "rewrite_destinations",
    "rotation_url",
    "ROTATION_SCHEME_PREFIX",
    "register_rotation_sink",
    "rotation_sink_factory",
    "Telemetry",
    "TelemetryOptions",
    "new_logger",
    "new_telemetry",
    "AlwaysRecordSampler",
    "new_tracer_provider",
]
