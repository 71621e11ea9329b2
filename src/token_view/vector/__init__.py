# token_view/vector/__init__.py
"""
vector.
======

Does: Provide the tokenized-string view and its tolerant integer parser.
Exports: StringVector, Token, parse_int_prefix, INT32_MAX, INT64_MAX
Used by: params and callers holding pre-tokenized messages.
"""

from __future__ import annotations

from .numeric import INT32_MAX, INT64_MAX, parse_int_prefix
from .string_vector import KEY_VALUE_SEPARATOR, StringVector
from .types import Token

__all__ = [
    "StringVector",
    "Token",
    "KEY_VALUE_SEPARATOR",
    "parse_int_prefix",
    "INT32_MAX",
    "INT64_MAX",
]
