# token_view/vector/types.py
from __future__ import annotations

from typing import NamedTuple

"""
types.py.

Does: Define the Token reference used by StringVector: an (offset, length)
pair into a backing string, never a copy of its characters.
"""


class Token(NamedTuple):
    offset: int
    length: int

    @property
    def end(self) -> int:
        """Does: Exclusive end position in the backing string."""
        return self.offset + self.length


__all__ = ["Token"]

__docformat__ = "google"
