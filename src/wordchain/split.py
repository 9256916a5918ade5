"""
Word Splits

A WordSplit decomposes a committed word into a prefix and a single trailing
symbol. The trailing symbol is what the next word in a chain must start with.

Invariant for a well-formed split:
    length(last_char) == 1
    H(prefix ‖ last_char) == H(word)

validate() reports a malformed split as False instead of raising, so that a
bad split can degrade chain validity without aborting the protocol.
"""

from dataclasses import dataclass
from typing import List, Union

from .symbols import FieldString


@dataclass(frozen=True)
class WordSplit:
    """A word together with its claimed prefix / last-symbol decomposition."""

    word: FieldString
    prefix: FieldString
    last_char: FieldString

    def validate(self) -> bool:
        """True iff the split is well formed. Never raises."""
        if self.last_char.length() != 1:
            return False
        try:
            joined = self.prefix.append(self.last_char)
        except ValueError:
            # prefix ‖ last_char overflows MAX_LENGTH, cannot equal any word
            return False
        return joined.hash() == self.word.hash()

    def to_fields(self) -> List[int]:
        """Canonical field encoding: word ‖ prefix ‖ last_char."""
        return (
            self.word.to_fields()
            + self.prefix.to_fields()
            + self.last_char.to_fields()
        )

    @classmethod
    def from_strings(cls, word: str, prefix: str, last_char: str) -> 'WordSplit':
        return cls(
            word=FieldString.from_str(word),
            prefix=FieldString.from_str(prefix),
            last_char=FieldString.from_str(last_char),
        )

    def __repr__(self) -> str:
        return (
            f"WordSplit(word={self.word.to_str()!r}, "
            f"prefix={self.prefix.to_str()!r}, "
            f"last_char={self.last_char.to_str()!r})"
        )


def validate(split: WordSplit) -> bool:
    """Module-level form of WordSplit.validate()."""
    return split.validate()


def split_word(word: Union[str, FieldString]) -> WordSplit:
    """
    Canonical split of a word: everything but the last symbol, then the last.

    No validation is performed. Splitting the empty word yields a split with
    an empty last_char, which validate() rejects.
    """
    if isinstance(word, str):
        word = FieldString.from_str(word)
    return WordSplit(
        word=word,
        prefix=FieldString(word.symbols[:-1]),
        last_char=FieldString(word.symbols[-1:]),
    )
