"""B3 multi-header trace context propagation.

Four headers carry a 64-bit trace context between processes::

    x-b3-traceid       lower-case hex trace id
    x-b3-spanid        lower-case hex span id
    x-b3-parentspanid  lower-case hex parent span id (0 = root)
    x-b3-sampled       "1", only present when sampled
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
from urllib.parse import quote_plus, unquote_plus

from b3propagation import runtime_config
from b3propagation.context.carriers import Format, TextMapReader, TextMapWriter
from b3propagation.errors import (
    CarrierTypeError,
    ParseError,
    SpanContextNotFound,
    UnsupportedFormatError,
)
from b3propagation.tracer.span_context import SpanContext
from b3propagation.utils.helpers import format_id, parse_id

logger = logging.getLogger(__name__)

TRACE_ID_HEADER = "x-b3-traceid"
SPAN_ID_HEADER = "x-b3-spanid"
PARENT_SPAN_ID_HEADER = "x-b3-parentspanid"
SAMPLED_HEADER = "x-b3-sampled"

FIELDS = frozenset([TRACE_ID_HEADER, SPAN_ID_HEADER, PARENT_SPAN_ID_HEADER, SAMPLED_HEADER])

# header name -> SpanContext field holding its parsed id
_ID_HEADERS = {
    TRACE_ID_HEADER: "trace_id",
    SPAN_ID_HEADER: "span_id",
    PARENT_SPAN_ID_HEADER: "parent_id",
}

_BAD_ESCAPE_RE = re.compile(r"%(?![0-9a-fA-F]{2})")


def url_query_escape(value: str) -> str:
    """Percent-encode a value for use in a URL query or HTTP header (space becomes '+')."""
    return quote_plus(value, safe="")


def url_query_unescape(value: str) -> str:
    """
    Reverse url_query_escape.

    Malformed input is returned unchanged: the hex parse that follows is
    what rejects an unusable value.
    """
    if _BAD_ESCAPE_RE.search(value):
        logger.debug("malformed percent-encoding, using raw value: %r", value)
        return value
    try:
        return unquote_plus(value, errors="strict")
    except UnicodeDecodeError:
        logger.debug("percent-encoded value is not UTF-8, using raw value: %r", value)
        return value


def _identity(value: str) -> str:
    return value


@dataclass(frozen=True)
class ValueTransform:
    """Pair of string transforms applied to header values on write and read."""

    encode: Callable[[str], str]
    decode: Callable[[str], str]


IDENTITY = ValueTransform(encode=_identity, decode=_identity)
URL_ESCAPING = ValueTransform(encode=url_query_escape, decode=url_query_unescape)


class B3Propagator:
    """
    Injects and extracts SpanContext instances as B3 headers.

    Stateless; one instance may be shared between threads.
    """

    def __init__(self, transform: ValueTransform = IDENTITY) -> None:
        self.transform = transform

    @property
    def fields(self) -> frozenset:
        return FIELDS

    def inject(self, span_context: SpanContext, carrier: Any) -> None:
        """
        Write span_context into carrier.

        Raises:
            CarrierTypeError: If carrier has no ``set`` method; nothing is written
        """
        if not isinstance(carrier, TextMapWriter):
            raise CarrierTypeError(
                "carrier does not support writing", {"carrier_type": type(carrier).__name__}
            )

        encode = self.transform.encode
        carrier.set(TRACE_ID_HEADER, encode(format_id(span_context.trace_id)))
        carrier.set(PARENT_SPAN_ID_HEADER, encode(format_id(span_context.parent_id)))
        carrier.set(SPAN_ID_HEADER, encode(format_id(span_context.span_id)))
        if span_context.sampled:
            carrier.set(SAMPLED_HEADER, encode("1"))

    def extract(self, carrier: Any) -> SpanContext:
        """
        Read a SpanContext out of carrier.

        Header names match case-insensitively and unknown headers are ignored.

        Raises:
            CarrierTypeError: If carrier has no ``for_each_key`` method
            ParseError: On the first id header whose value is not 64-bit hex
            SpanContextNotFound: If no non-zero trace id is present
        """
        if not isinstance(carrier, TextMapReader):
            raise CarrierTypeError(
                "carrier does not support reading", {"carrier_type": type(carrier).__name__}
            )

        found: Dict[str, Any] = {"trace_id": 0, "span_id": 0, "parent_id": 0, "sampled": False}
        decode = self.transform.decode
        seen = []

        def visit(raw_key: str, value: str) -> None:
            key = raw_key.lower()
            seen.append(raw_key)
            field = _ID_HEADERS.get(key)
            if field is not None:
                try:
                    found[field] = parse_id(decode(value))
                except ValueError as e:
                    logger.debug("invalid %s header: %r", key, value)
                    raise ParseError(f"Invalid {key} header", {"key": raw_key, "value": value}) from e
            elif key == SAMPLED_HEADER:
                found["sampled"] = True

        carrier.for_each_key(visit)

        if found["trace_id"] == 0:
            if runtime_config.get_debug():
                logger.debug("no B3 trace id in carrier, keys seen: %s", seen)
            raise SpanContextNotFound("No B3 trace context in carrier")
        return SpanContext(**found)


def new_text_map_propagator() -> B3Propagator:
    """Propagator for generic key/value carriers; values are written verbatim."""
    return B3Propagator(IDENTITY)


def new_http_header_propagator() -> B3Propagator:
    """Propagator for HTTP headers; values are percent-encoded."""
    return B3Propagator(URL_ESCAPING)


_propagators = {
    Format.TEXT_MAP: new_text_map_propagator(),
    Format.HTTP_HEADERS: new_http_header_propagator(),
}


def get_propagator(format: Optional[str] = None) -> B3Propagator:
    """
    Return the shared propagator for a carrier format.

    Uses the configured default format when none is given.
    """
    if format is None:
        format = runtime_config.get_default_format()
    try:
        return _propagators[format]
    except KeyError:
        raise UnsupportedFormatError(
            f"Unsupported carrier format: {format}", {"supported": sorted(_propagators)}
        ) from None


def inject(span_context: SpanContext, carrier: Any, format: Optional[str] = None) -> None:
    """Inject span_context into carrier using the propagator for format."""
    get_propagator(format).inject(span_context, carrier)


def extract(carrier: Any, format: Optional[str] = None) -> SpanContext:
    """Extract a SpanContext from carrier using the propagator for format."""
    return get_propagator(format).extract(carrier)
