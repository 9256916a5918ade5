"""
Chain State

The aggregate record of a chain segment:

    S = (current_word, length, valid)

Where:
- current_word: the most recently appended WordSplit
- length: number of words composed into the segment (>= 1)
- valid: True iff every adjacency and split check along the history held

The commitment C = H(COMMITMENT ‖ fields(S)) is the single public value a proof
is bound to.
"""

from dataclasses import dataclass
from typing import List

from .hashing import commit
from .split import WordSplit
from .symbols import FieldString, MAX_LENGTH

_SYMBOL_BYTES = 4
_STRING_BYTES = MAX_LENGTH * _SYMBOL_BYTES
_STATE_BYTES = 3 * _STRING_BYTES + 8 + 1


def _string_bytes(s: FieldString) -> bytes:
    return b''.join(f.to_bytes(_SYMBOL_BYTES, 'big') for f in s.to_fields())


def _string_from_bytes(data: bytes) -> FieldString:
    symbols = []
    for i in range(0, len(data), _SYMBOL_BYTES):
        symbol = int.from_bytes(data[i:i + _SYMBOL_BYTES], 'big')
        if symbol == 0:
            break
        symbols.append(symbol)
    return FieldString(tuple(symbols))


@dataclass(frozen=True)
class ChainState:
    """
    State of a chain segment.

    Immutable: every Init/Extend/Merge builds a fresh ChainState.
    """

    current_word: WordSplit
    length: int
    valid: bool

    def __post_init__(self):
        if self.length < 1:
            raise ValueError(f"Chain length must be at least 1, got {self.length}")

    @classmethod
    def initial(cls, word: WordSplit) -> 'ChainState':
        """One-word segment, valid by construction."""
        return cls(current_word=word, length=1, valid=True)

    def to_fields(self) -> List[int]:
        return self.current_word.to_fields() + [self.length, int(self.valid)]

    def commitment(self) -> bytes:
        """
        Public commitment to this state.

        Pure function of (current_word, length, valid).
        """
        return commit(self.to_fields())

    def serialize(self) -> bytes:
        """
        Canonical serialization for disclosure.

        Format:
            word (512) || prefix (512) || last_char (512) ||
            length (8 bytes, big-endian) || valid (1 byte)
        """
        return b''.join([
            _string_bytes(self.current_word.word),
            _string_bytes(self.current_word.prefix),
            _string_bytes(self.current_word.last_char),
            self.length.to_bytes(8, 'big'),
            bytes([self.valid]),
        ])

    @classmethod
    def deserialize(cls, data: bytes) -> 'ChainState':
        """Deserialize from bytes."""
        if len(data) != _STATE_BYTES:
            raise ValueError(
                f"Chain state must be {_STATE_BYTES} bytes, got {len(data)}"
            )

        offset = 0
        strings = []
        for _ in range(3):
            strings.append(_string_from_bytes(data[offset:offset + _STRING_BYTES]))
            offset += _STRING_BYTES

        length = int.from_bytes(data[offset:offset + 8], 'big')
        offset += 8

        flag = data[offset]
        if flag not in (0, 1):
            raise ValueError(f"Invalid validity byte: {flag}")

        return cls(
            current_word=WordSplit(
                word=strings[0],
                prefix=strings[1],
                last_char=strings[2],
            ),
            length=length,
            valid=bool(flag),
        )

    def __repr__(self) -> str:
        return (
            f"ChainState(word={self.current_word.word.to_str()!r}, "
            f"length={self.length}, valid={self.valid})"
        )
