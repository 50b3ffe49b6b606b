"""HTTP client helpers for context propagation."""

from __future__ import annotations

from typing import Dict

from b3propagation.context import FIELDS, HTTPHeadersCarrier, get_propagator, Format
from b3propagation.tracer.span_context import SpanContext


def inject_headers(headers: Dict[str, str], span_context: SpanContext) -> Dict[str, str]:
    """
    Inject B3 headers for span_context into the provided headers dict.

    B3 headers left over from an earlier injection are removed first, in any
    case, so a stale x-b3-sampled cannot outlive an unsampled context.

    Returns the same headers mapping for convenience.
    """
    for key in [k for k in headers if k.lower() in FIELDS]:
        del headers[key]
    carrier = HTTPHeadersCarrier()
    get_propagator(Format.HTTP_HEADERS).inject(span_context, carrier)
    headers.update(carrier)
    return headers
