# token_view/vector/numeric.py

"""
numeric.py.

Does: Tolerant integer parsing over a bounded range of a string, read in place.
      Never raises on malformed input: leading whitespace and one sign are
      accepted, digits are read left to right, the first non-digit ends the
      number, and the magnitude saturates at `limit`.
Returns: parse_int_prefix() → int in [-limit, limit].
Used by: StringVector.get_uint32 / get_uint64.
"""

from __future__ import annotations

__all__ = ["INT32_MAX", "INT64_MAX", "parse_int_prefix"]

INT32_MAX = 2**31 - 1
INT64_MAX = 2**63 - 1

_DIGITS = "0123456789"
_WHITESPACE = " \t\n\v\f\r"


def parse_int_prefix(
    buffer: str,
    offset: int = 0,
    length: int | None = None,
    *,
    limit: int = INT32_MAX,
) -> int:
    """
    Does: Parse `buffer[offset:offset + length]` as a base-10 integer without slicing.
          - empty range, whitespace-only range, or a lone sign → 0
          - reading stops at the first non-digit (trailing garbage ignored)
          - once the magnitude would reach `limit`, returns ±limit
    Returns: Parsed integer, signed.
    """
    end = len(buffer) if length is None else min(len(buffer), offset + length)
    pos = offset
    if pos >= end:
        return 0

    while buffer[pos] in _WHITESPACE:
        pos += 1
        if pos >= end:
            return 0

    sign = 1
    if buffer[pos] == "-":
        sign = -1
        pos += 1
    elif buffer[pos] == "+":
        pos += 1

    value = 0
    while pos < end:
        ch = buffer[pos]
        # ASCII digits only
        if ch not in _DIGITS:
            break
        value = value * 10 + (ord(ch) - 48)
        if value >= limit:
            return sign * limit
        pos += 1

    return sign * value
