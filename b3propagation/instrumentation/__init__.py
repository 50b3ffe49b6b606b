"""HTTP edge helpers."""

from b3propagation.instrumentation.http_client import inject_headers as inject_http_headers
from b3propagation.instrumentation.http_server import extract_parent_context

__all__ = [
    "inject_http_headers",
    "extract_parent_context",
]
