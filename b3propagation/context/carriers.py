"""Carrier capabilities consumed by the propagators, plus dict-backed carriers."""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

Visitor = Callable[[str, str], None]


class Format:
    """Carrier formats a propagator can be registered for."""

    TEXT_MAP = "text_map"
    HTTP_HEADERS = "http_headers"


@runtime_checkable
class TextMapWriter(Protocol):
    """Write capability: store a string value under a string key."""

    def set(self, key: str, value: str) -> None:
        ...


@runtime_checkable
class TextMapReader(Protocol):
    """
    Read capability: visit every key/value pair once.

    An exception raised by the visitor stops iteration and propagates.
    """

    def for_each_key(self, visitor: Visitor) -> None:
        ...


class TextMapCarrier(dict):
    """Plain key/value carrier; duplicate keys overwrite."""

    def set(self, key: str, value: str) -> None:
        self[key] = value

    def for_each_key(self, visitor: Visitor) -> None:
        for key, value in list(self.items()):
            visitor(key, value)


class HTTPHeadersCarrier(TextMapCarrier):
    """Carrier for HTTP request headers; pair it with the URL-escaping propagator."""
    pass
