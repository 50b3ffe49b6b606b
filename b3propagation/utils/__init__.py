"""Utility functions for b3propagation."""

from b3propagation.utils.helpers import format_id, parse_id

__all__ = [
    "format_id",
    "parse_id",
]
