"""OpenTelemetry TextMapPropagator backed by the B3 codec.

Lets the codec be installed globally::

    from opentelemetry.propagate import set_global_textmap
    set_global_textmap(B3MultiHeaderPropagator())
"""

from __future__ import annotations

import logging
from typing import Optional, Set

from opentelemetry.context import Context
from opentelemetry.propagators.textmap import (
    CarrierT,
    Getter,
    Setter,
    TextMapPropagator,
    default_getter,
    default_setter,
)
from opentelemetry.trace import NonRecordingSpan, TraceFlags, get_current_span, set_span_in_context
from opentelemetry.trace import SpanContext as OTelSpanContext

from b3propagation.context.carriers import Visitor
from b3propagation.context.propagators import B3Propagator, new_http_header_propagator
from b3propagation.errors import ParseError, SpanContextNotFound
from b3propagation.tracer.span_context import MAX_ID, SpanContext

logger = logging.getLogger(__name__)


def to_otel_span_context(span_context: SpanContext) -> OTelSpanContext:
    """Convert a SpanContext to a remote OTel SpanContext (the parent id is dropped)."""
    trace_flags = TraceFlags(TraceFlags.SAMPLED if span_context.sampled else TraceFlags.DEFAULT)
    return OTelSpanContext(
        trace_id=span_context.trace_id,
        span_id=span_context.span_id,
        is_remote=True,
        trace_flags=trace_flags,
    )


def from_otel_span_context(otel_context: OTelSpanContext) -> SpanContext:
    """
    Convert an OTel SpanContext.

    OTel does not expose the parent span id, so the result is always a root
    context; 128-bit trace ids keep only their low 64 bits.
    """
    return SpanContext(
        trace_id=otel_context.trace_id & MAX_ID,
        span_id=otel_context.span_id & MAX_ID,
        sampled=otel_context.trace_flags.sampled,
    )


class _SetterWriter:
    """Exposes an OTel Setter over a carrier as a TextMapWriter."""

    def __init__(self, carrier: CarrierT, setter: Setter) -> None:
        self._carrier = carrier
        self._setter = setter

    def set(self, key: str, value: str) -> None:
        self._setter.set(self._carrier, key, value)


class _GetterReader:
    """Exposes an OTel Getter over a carrier as a TextMapReader."""

    def __init__(self, carrier: CarrierT, getter: Getter) -> None:
        self._carrier = carrier
        self._getter = getter

    def for_each_key(self, visitor: Visitor) -> None:
        for key in self._getter.keys(self._carrier):
            values = self._getter.get(self._carrier, key)
            if values:
                visitor(key, values[0])


class B3MultiHeaderPropagator(TextMapPropagator):
    """
    B3 multi-header propagator for the OpenTelemetry propagation API.

    Extraction never raises: a missing or malformed context leaves the
    incoming context untouched.
    """

    def __init__(self, propagator: Optional[B3Propagator] = None) -> None:
        self._propagator = propagator or new_http_header_propagator()

    def extract(
        self,
        carrier: CarrierT,
        context: Optional[Context] = None,
        getter: Getter = default_getter,
    ) -> Context:
        if context is None:
            context = Context()
        try:
            span_context = self._propagator.extract(_GetterReader(carrier, getter))
        except SpanContextNotFound:
            return context
        except ParseError as e:
            logger.debug("ignoring malformed B3 headers: %s", e)
            return context
        otel_span_context = to_otel_span_context(span_context)
        if not otel_span_context.is_valid:
            logger.debug("ignoring B3 headers without a usable span id")
            return context
        return set_span_in_context(NonRecordingSpan(otel_span_context), context)

    def inject(
        self,
        carrier: CarrierT,
        context: Optional[Context] = None,
        setter: Setter = default_setter,
    ) -> None:
        otel_context = get_current_span(context).get_span_context()
        if not otel_context.is_valid:
            return
        self._propagator.inject(from_otel_span_context(otel_context), _SetterWriter(carrier, setter))

    @property
    def fields(self) -> Set[str]:
        return set(self._propagator.fields)
