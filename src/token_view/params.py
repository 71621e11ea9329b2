# src/token_view/params.py
# ──────────────────────────────────────────────────────────────
# Bulk key=value extraction over a whole StringVector
# ──────────────────────────────────────────────────────────────
"""
params.

Does: Collect `<key>=<uint>` parameters from every token of a StringVector,
      using either caller-supplied keys or the `uint_keys` config list.
Returns: extract_uint_params() → dict[str, int]; first_uint_param() → int | None.
Used by: Message handlers that read numeric fields off a tokenized line.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from token_view.utils import debug, load_key_set
from token_view.vector import StringVector

__all__ = ["DEFAULT_KEYS_CONFIG", "default_keys", "extract_uint_params", "first_uint_param"]

log = logging.getLogger(__name__)

DEFAULT_KEYS_CONFIG = "uint_keys"


def default_keys() -> frozenset[str]:
    """Does: Load the default key vocabulary from <data>/uint_keys.json (cached)."""
    return load_key_set(DEFAULT_KEYS_CONFIG)


def extract_uint_params(
    vector: StringVector,
    keys: Iterable[str] | None = None,
    *,
    start: int = 0,
) -> dict[str, int]:
    """
    Does: For each token from `start`, try each key in a stable order
          (longest first, then alphabetical) and keep the first that yields a value.
          A later token overwrites an earlier value for the same key.
    Returns: Dict[key → value]; tokens matching no key are skipped.
    """
    if keys is None:
        keys = default_keys()
    # a key may itself contain "=": on "a=b=5", key "a=b" must beat key "a"
    ordered = sorted({k for k in keys if k}, key=lambda k: (-len(k), k))

    found: dict[str, int] = {}
    for index in range(max(start, 0), len(vector)):
        for key in ordered:
            value = vector.get_uint32(index, key)
            if value is not None:
                found[key] = value
                break
        else:
            debug(f"no uint param in token {index}: {vector.token_text(index)!r}", topic="params")

    log.debug("Extracted %d uint params from %d tokens", len(found), len(vector))
    return found


def first_uint_param(vector: StringVector, key: str, *, start: int = 0) -> int | None:
    """Does: Value of the first token from `start` that yields a uint for `key`."""
    for index in range(max(start, 0), len(vector)):
        value = vector.get_uint32(index, key)
        if value is not None:
            return value
    return None
