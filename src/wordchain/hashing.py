"""
Commitment Hash Primitive

All commitments are SHAKE256 over a domain tag followed by a sequence of
field elements. Fields are non-negative integers encoded as fixed 32-byte
big-endian words, so equal field sequences always produce equal bytes and
sequences of different length can never collide.
"""

from typing import Iterable
import hashlib

from .tags import ChainTag, tag_bytes

FIELD_BYTES = 32
DIGEST_BYTES = 32


def tagged_hash(tag: ChainTag, *parts: bytes) -> bytes:
    """Domain-separated hash."""
    h = hashlib.shake_256()
    h.update(tag_bytes(tag))
    for part in parts:
        h.update(len(part).to_bytes(8, 'big'))
        h.update(part)
    return h.digest(DIGEST_BYTES)


def field_bytes(value: int) -> bytes:
    """Encode a single field element."""
    if value < 0:
        raise ValueError(f"Field elements must be non-negative, got {value}")
    return value.to_bytes(FIELD_BYTES, 'big')


def commit(fields: Iterable[int], tag: ChainTag = ChainTag.COMMITMENT) -> bytes:
    """
    Commit to a sequence of field elements.

    H(tag ‖ n ‖ f_0 ‖ ... ‖ f_{n-1})
    """
    encoded = [field_bytes(f) for f in fields]
    return tagged_hash(tag, len(encoded).to_bytes(8, 'big'), b''.join(encoded))
