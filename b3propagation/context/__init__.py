"""Carriers and propagators for B3 trace context."""

from b3propagation.context.carriers import (
    Format,
    HTTPHeadersCarrier,
    TextMapCarrier,
    TextMapReader,
    TextMapWriter,
)
from b3propagation.context.propagators import (
    FIELDS,
    IDENTITY,
    PARENT_SPAN_ID_HEADER,
    SAMPLED_HEADER,
    SPAN_ID_HEADER,
    TRACE_ID_HEADER,
    URL_ESCAPING,
    B3Propagator,
    ValueTransform,
    extract,
    get_propagator,
    inject,
    new_http_header_propagator,
    new_text_map_propagator,
    url_query_escape,
    url_query_unescape,
)
from b3propagation.context.otel_propagator import (
    B3MultiHeaderPropagator,
    from_otel_span_context,
    to_otel_span_context,
)

__all__ = [
    "Format",
    "TextMapReader",
    "TextMapWriter",
    "TextMapCarrier",
    "HTTPHeadersCarrier",
    "TRACE_ID_HEADER",
    "SPAN_ID_HEADER",
    "PARENT_SPAN_ID_HEADER",
    "SAMPLED_HEADER",
    "FIELDS",
    "ValueTransform",
    "IDENTITY",
    "URL_ESCAPING",
    "url_query_escape",
    "url_query_unescape",
    "B3Propagator",
    "new_text_map_propagator",
    "new_http_header_propagator",
    "get_propagator",
    "inject",
    "extract",
    "B3MultiHeaderPropagator",
    "to_otel_span_context",
    "from_otel_span_context",
]
