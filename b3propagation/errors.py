"""B3 propagation error hierarchy and exceptions."""

from __future__ import annotations


class B3PropagationError(Exception):
    """Base exception for all b3propagation errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class CarrierTypeError(B3PropagationError, TypeError):
    """Raised when a carrier lacks the read or write capability an operation needs."""
    pass


class SpanContextNotFound(B3PropagationError):
    """Raised when a carrier holds no usable trace context (start a new root trace)."""
    pass


class ParseError(B3PropagationError, ValueError):
    """Raised when a recognized header holds a value that is not a 64-bit hex id."""

    @property
    def key(self) -> str:
        return self.details.get("key")

    @property
    def value(self) -> str:
        return self.details.get("value")


class UnsupportedFormatError(B3PropagationError, ValueError):
    """Raised when no propagator is registered for a carrier format."""
    pass


class ConfigError(B3PropagationError):
    """Raised when configuration is invalid or conflicting."""
    pass


class ValidationError(B3PropagationError, ValueError):
    """Raised when validation fails."""
    pass
