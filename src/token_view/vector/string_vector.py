# token_view/vector/string_vector.py

"""
string_vector.py.

Does: Hold one backing string plus an immutable sequence of (offset, length)
      tokens into it, and answer read-only questions about those tokens:
      token-vs-token equality, keyed `key=<uint>` extraction, and plain
      text accessors.
Returns: StringVector.
Used by: params and any caller holding an already-tokenized message.

All lookups are total: an out-of-range index yields False / None / "",
never an exception (plain `vector[i]` is the one sequence-style exception).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from token_view.vector.numeric import INT32_MAX, INT64_MAX, parse_int_prefix
from token_view.vector.types import Token

__all__ = ["StringVector", "KEY_VALUE_SEPARATOR"]

log = logging.getLogger(__name__)

KEY_VALUE_SEPARATOR = "="


class StringVector:
    """
    Tokenized view over a single backing string.

    Tokens are given at construction, either as `Token` or as `(offset, length)`
    pairs, and never change afterwards. Each must satisfy
    `offset + length <= len(text)`; that is the tokenizer's contract and is
    only asserted here.
    """

    __slots__ = ("_text", "_tokens")

    def __init__(self, text: str = "", tokens: Iterable[Token | tuple[int, int]] = ()):
        self._text = text
        self._tokens: tuple[Token, ...] = tuple(Token(*t) for t in tokens)
        for tok in self._tokens:
            assert 0 <= tok.offset and 0 <= tok.length and tok.end <= len(text), (
                f"token {tok} out of bounds for text of length {len(text)}"
            )

    # ── Sequence surface ─────────────────────────────────────────────────────

    @property
    def text(self) -> str:
        return self._text

    @property
    def tokens(self) -> tuple[Token, ...]:
        return self._tokens

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[str]:
        for tok in self._tokens:
            yield self.get_param(tok)

    def __getitem__(self, index: int) -> str:
        return self.get_param(self._tokens[index])

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._text!r}, {list(self._tokens)!r})"

    def _token_at(self, index: int) -> Token | None:
        if 0 <= index < len(self._tokens):
            return self._tokens[index]
        return None

    # ── Text accessors ───────────────────────────────────────────────────────

    def get_param(self, token: Token) -> str:
        """Does: Materialize the text designated by `token`."""
        return self._text[token.offset : token.end]

    def token_text(self, index: int, default: str = "") -> str:
        """Does: Text of token `index`, or `default` when out of range."""
        tok = self._token_at(index)
        return default if tok is None else self.get_param(tok)

    def substr_from_token(self, index: int) -> str:
        """Does: Backing text from token `index` to the end of the buffer ("" if out of range)."""
        tok = self._token_at(index)
        return "" if tok is None else self._text[tok.offset :]

    def cat(self, separator: str, offset: int = 0) -> str:
        """Does: Join token texts from `offset` onwards with `separator` ("" if out of range)."""
        if not 0 <= offset < len(self._tokens):
            return ""
        return separator.join(self.get_param(t) for t in self._tokens[offset:])

    # ── Comparisons ──────────────────────────────────────────────────────────

    def equals(self, index: int, other: StringVector, other_index: int) -> bool:
        """
        Does: Ordinal comparison of token `index` here against token `other_index`
              in `other` (which may be `self`). No case folding or trimming.
        Returns: True iff both indices are valid and the two substrings are identical.
        """
        tok = self._token_at(index)
        if tok is None:
            return False
        other_tok = other._token_at(other_index)
        if other_tok is None:
            return False
        if tok.length != other_tok.length:
            return False
        return self.get_param(tok) == other.get_param(other_tok)

    def equals_text(self, index: int, value: str) -> bool:
        """Does: True iff token `index` exists and its text is exactly `value`."""
        tok = self._token_at(index)
        if tok is None or tok.length != len(value):
            return False
        return self._text.startswith(value, tok.offset, tok.end)

    def starts_with(self, index: int, prefix: str) -> bool:
        """Does: True iff token `index` exists and begins with `prefix`."""
        tok = self._token_at(index)
        if tok is None or tok.length < len(prefix):
            return False
        return self._text.startswith(prefix, tok.offset, tok.end)

    # ── Keyed integers ───────────────────────────────────────────────────────

    def _value_span(self, index: int, key: str) -> tuple[int, int] | None:
        """
        Does: Locate the value part of a `<key>=<value>` token.
              The token must be strictly longer than `key` plus the separator,
              start with `key`, and have '=' right after it.
        Returns: (offset, length) of the value, or None.
        """
        tok = self._token_at(index)
        if tok is None:
            return None
        prefix_len = len(key) + 1
        if tok.length <= prefix_len:
            return None
        if not self._text.startswith(key, tok.offset, tok.offset + len(key)):
            return None
        if self._text[tok.offset + len(key)] != KEY_VALUE_SEPARATOR:
            return None
        return tok.offset + prefix_len, tok.length - prefix_len

    def _get_uint(self, index: int, key: str, bound: int) -> int | None:
        span = self._value_span(index, key)
        if span is None:
            return None
        value = parse_int_prefix(self._text, span[0], span[1], limit=bound)
        # the bound itself doubles as the parser's saturation sentinel
        if 0 <= value < bound:
            return value
        log.debug("Rejected %s=%d at token %d (bound %d)", key, value, index, bound)
        return None

    def get_uint32(self, index: int, key: str) -> int | None:
        """
        Does: Read `<key>=<digits>` from token `index` with the tolerant parser.
              Accepted range is [0, 2**31 - 2]: the upper bound is the signed
              32-bit maximum, exclusive, not the unsigned one.
        Returns: The value, or None for a bad index, a different key,
                 a missing '=', a negative number, or a value at/over the bound.
        """
        return self._get_uint(index, key, INT32_MAX)

    def get_uint64(self, index: int, key: str) -> int | None:
        """Does: Like get_uint32, bounded by the signed 64-bit maximum (exclusive)."""
        return self._get_uint(index, key, INT64_MAX)
