"""
Registration of rotating file sinks.
"""

from __future__ import annotations

import uuid
from urllib.parse import SplitResult, parse_qs

from logroute.logging.registry import SinkFactory, SinkRegistry, default_registry
from logroute.logging.sinks import NopSyncSink, Sink
from logroute.rotate import RotationPolicy

ROTATION_SCHEME_PREFIX = "rotation-"


def rotation_sink_factory(policy: RotationPolicy) -> SinkFactory:
    """Sink factory opening the ``path`` query parameter with ``policy``'s writer."""

    def factory(url: SplitResult) -> Sink:
        path = parse_qs(url.query).get("path", [""])[0]
        writer = policy.new_writer(path)
        return NopSyncSink(writer)

    return factory


def register_rotation_sink(policy: RotationPolicy, registry: SinkRegistry | None = None) -> str:
    """Register a sink factory for ``policy`` under a fresh scheme and return the scheme.

    The scheme embeds a random UUID so loggers built concurrently in one
    process never share a factory.
    """
    scheme = ROTATION_SCHEME_PREFIX + str(uuid.uuid4())
    (registry or default_registry).register(scheme, rotation_sink_factory(policy))
    return scheme
