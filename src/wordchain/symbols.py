"""
Field Strings

A word is carried through the protocol as a fixed-capacity sequence of
atomic symbols. Each symbol is one Unicode code point; the string is padded
with zero symbols up to MAX_LENGTH when it is hashed, so every word occupies
the same number of field elements.

Symbol comparisons (first character, last character) and hashing operate on
the same representation: a list of integers from to_fields().
"""

from dataclasses import dataclass
from typing import List, Tuple

from .hashing import commit
from .tags import ChainTag

MAX_LENGTH = 128
"""Maximum number of symbols in a field string."""

PAD = 0
"""Padding symbol. Never part of a word."""


@dataclass(frozen=True)
class FieldString:
    """
    Immutable string of at most MAX_LENGTH symbols.

    Build with FieldString.from_str(); the raw constructor accepts a tuple of
    code points and enforces the same limits.
    """

    symbols: Tuple[int, ...] = ()

    def __post_init__(self):
        if len(self.symbols) > MAX_LENGTH:
            raise ValueError(
                f"String exceeds {MAX_LENGTH} symbols, got {len(self.symbols)}"
            )
        for s in self.symbols:
            if s == PAD:
                raise ValueError("Padding symbol cannot appear in a string")
            if not 0 < s <= 0x10FFFF:
                raise ValueError(f"Invalid code point: {s}")

    @classmethod
    def from_str(cls, text: str) -> 'FieldString':
        return cls(tuple(ord(c) for c in text))

    def to_str(self) -> str:
        return ''.join(chr(s) for s in self.symbols)

    def length(self) -> int:
        """Number of symbols (padding excluded)."""
        return len(self.symbols)

    def append(self, other: 'FieldString') -> 'FieldString':
        """Concatenate. Raises ValueError if the result overflows."""
        return FieldString(self.symbols + other.symbols)

    def to_fields(self) -> List[int]:
        """Exactly MAX_LENGTH field elements: symbols then zero padding."""
        return list(self.symbols) + [PAD] * (MAX_LENGTH - len(self.symbols))

    def first(self) -> int:
        """First symbol, or PAD for the empty string."""
        return self.to_fields()[0]

    def hash(self) -> bytes:
        return commit(self.to_fields(), ChainTag.STRING)

    def __str__(self) -> str:
        return self.to_str()

    def __repr__(self) -> str:
        return f"FieldString({self.to_str()!r})"
