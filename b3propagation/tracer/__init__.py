"""Trace context value types."""

from b3propagation.tracer.span_context import MAX_ID, SpanContext

__all__ = [
    "MAX_ID",
    "SpanContext",
]
