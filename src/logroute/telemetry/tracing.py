"""
Tracer provider construction.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.sampling import Decision, Sampler, SamplingResult
from opentelemetry.trace import Link, SpanKind
from opentelemetry.trace.span import TraceState
from opentelemetry.util.types import Attributes


class AlwaysRecordSampler(Sampler):
    """Records every span without marking it sampled.

    Spans stay available to in-process consumers (debug pages, span processors)
    while export decisions are left to the sampled flag of the parent.
    """

    def should_sample(
        self,
        parent_context: Optional[Context],
        trace_id: int,
        name: str,
        kind: Optional[SpanKind] = None,
        attributes: Attributes = None,
        links: Optional[Sequence[Link]] = None,
        trace_state: Optional[TraceState] = None,
    ) -> SamplingResult:
        parent = trace.get_current_span(parent_context).get_span_context()
        return SamplingResult(
            Decision.RECORD_ONLY,
            attributes=None,
            trace_state=parent.trace_state if parent.is_valid else trace_state,
        )

    def get_description(self) -> str:
        return "AlwaysRecordSampler"


def new_tracer_provider(resource: Mapping[str, Optional[str]]) -> TracerProvider:
    """Tracer provider with the always-record sampler; ``None`` values are dropped from the resource."""
    attributes = {key: value for key, value in resource.items() if value is not None}
    return TracerProvider(
        sampler=AlwaysRecordSampler(),
        resource=Resource.create(attributes),
    )
