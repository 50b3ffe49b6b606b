"""HTTP server helpers for extracting the caller's trace context."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from b3propagation.context import HTTPHeadersCarrier, get_propagator, Format
from b3propagation.errors import ParseError, SpanContextNotFound
from b3propagation.tracer.span_context import SpanContext

logger = logging.getLogger(__name__)


def extract_parent_context(headers: Mapping[str, str]) -> Optional[SpanContext]:
    """
    Parse B3 headers and return the caller's SpanContext.

    Returns None when the request should start a new root trace, either
    because no context was sent or because the one sent is malformed.
    """
    try:
        return get_propagator(Format.HTTP_HEADERS).extract(HTTPHeadersCarrier(headers))
    except SpanContextNotFound:
        return None
    except ParseError as e:
        logger.warning("Discarding malformed B3 headers: %s", e)
        return None
