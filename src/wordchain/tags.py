"""
Domain Tags for Word-Chain Commitments

Every hash in the protocol is domain-separated so a commitment to one kind
of object can never be replayed as a commitment to another.
"""

from enum import IntEnum


class ChainTag(IntEnum):
    """Domain separation tags for word-chain hashing."""

    # Atomic values
    STRING = 0x10      # Field string commitment

    # Chain state
    COMMITMENT = 0x20  # Public commitment to a field sequence

    # Program / backend
    PARAMS = 0x30      # ChainParams binding
    PROGRAM = 0x31     # Compiled program (verification key digest)
    PROOF = 0x32       # Proof receipt


def tag_bytes(tag: ChainTag) -> bytes:
    """Convert tag to canonical bytes."""
    return tag.to_bytes(2, 'big')
