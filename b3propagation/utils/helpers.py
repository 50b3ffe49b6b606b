"""Helper functions for B3 id formatting."""

from __future__ import annotations

import re

from b3propagation.tracer.span_context import MAX_ID

_HEX_RE = re.compile(r"[0-9a-fA-F]+")


def format_id(value: int) -> str:
    """
    Format a 64-bit id as a B3 header value.

    Args:
        value: Unsigned 64-bit integer id

    Returns:
        Lower-case hex string without zero padding
    """
    return format(value, "x")


def parse_id(hex_string: str) -> int:
    """
    Parse a B3 header value into a 64-bit id.

    Only plain hex digits are accepted; ``int(x, 16)`` alone would also take
    signs, ``0x`` prefixes, underscores and surrounding whitespace.

    Args:
        hex_string: Hex digits, either case

    Returns:
        Unsigned 64-bit integer id

    Raises:
        ValueError: If the string is not hex or overflows 64 bits
    """
    if not isinstance(hex_string, str) or not _HEX_RE.fullmatch(hex_string):
        raise ValueError(f"invalid hex id: {hex_string!r}")
    value = int(hex_string, 16)
    if value > MAX_ID:
        raise ValueError(f"hex id out of 64-bit range: {hex_string!r}")
    return value
