"""B3 multi-header trace context propagation."""

from __future__ import annotations

import logging
from typing import Optional

from b3propagation import runtime_config
from b3propagation.config import B3Config, load_config
from b3propagation.context import (
    B3MultiHeaderPropagator,
    B3Propagator,
    Format,
    HTTPHeadersCarrier,
    TextMapCarrier,
    extract,
    get_propagator,
    inject,
    new_http_header_propagator,
    new_text_map_propagator,
)
from b3propagation.errors import (
    B3PropagationError,
    CarrierTypeError,
    ConfigError,
    ParseError,
    SpanContextNotFound,
    UnsupportedFormatError,
)
from b3propagation.tracer.span_context import SpanContext

logger = logging.getLogger(__name__)

__version__ = "0.1.0"


def configure(
    config_file: Optional[str] = None,
    default_format: Optional[str] = None,
    debug: Optional[bool] = None,
) -> B3Config:
    """
    Load configuration from file, environment and arguments, and apply it.

    Explicit arguments override environment variables, which override the
    config file.
    """
    config = load_config(
        config_file=config_file,
        overrides={"default_format": default_format, "debug": debug},
    )
    runtime_config.set_default_format(config.default_format)
    runtime_config.set_debug(config.debug)
    if config.debug:
        logger.setLevel(logging.DEBUG)
    logger.debug("b3propagation configured: %s", config.model_dump())
    return config


__all__ = [
    "__version__",
    "configure",
    "B3Config",
    "SpanContext",
    "Format",
    "TextMapCarrier",
    "HTTPHeadersCarrier",
    "B3Propagator",
    "B3MultiHeaderPropagator",
    "new_text_map_propagator",
    "new_http_header_propagator",
    "get_propagator",
    "inject",
    "extract",
    "B3PropagationError",
    "CarrierTypeError",
    "SpanContextNotFound",
    "ParseError",
    "ConfigError",
    "UnsupportedFormatError",
]
