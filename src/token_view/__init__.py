"""
token_view
==========

Does: Root package initializer for the tokenized-string view.
Returns: Re-exports StringVector, Token and the keyed-parameter helpers.
Used by: All imports starting from `token_view.*`.
"""

from token_view.params import extract_uint_params, first_uint_param
from token_view.vector import StringVector, Token, parse_int_prefix

__all__: list[str] = [
    "StringVector",
    "Token",
    "parse_int_prefix",
    "extract_uint_params",
    "first_uint_param",
]
__docformat__ = "google"
