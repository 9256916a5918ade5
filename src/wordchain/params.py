"""
Protocol Parameters

ChainParams configures a TransitionProgram. The serialized parameters are
bound into the verification key, so proofs produced under one configuration
never verify under another.
"""

from dataclasses import dataclass

from .hashing import tagged_hash
from .tags import ChainTag


@dataclass(frozen=True)
class ChainParams:
    """
    Public parameters for the word-chain program.

    All parameters are immutable and hashable.
    """

    program_name: str = 'word-chain-verifier'
    """Program identifier for domain separation."""

    version: int = 1
    """Protocol version."""

    strict_merge: bool = True
    """Merge aborts when an input proof fails verification.

    When False, the failure is logged and the merge continues. That mode only
    exists to reproduce older provers and is unsound."""

    strict_extend_split: bool = False
    """Extend aborts on a malformed next word instead of clearing the
    validity flag."""

    def serialize(self) -> bytes:
        """
        Canonical serialization for binding in the verification key.

        Format:
            name_len(2) || name || version(2) || flags(1)
        """
        name = self.program_name.encode('utf-8')
        flags = (int(self.strict_merge) << 0) | (int(self.strict_extend_split) << 1)
        return b''.join([
            len(name).to_bytes(2, 'big'),
            name,
            self.version.to_bytes(2, 'big'),
            bytes([flags]),
        ])

    def hash(self) -> bytes:
        """Hash of the parameters."""
        return tagged_hash(ChainTag.PARAMS, self.serialize())


DEFAULT_PARAMS = ChainParams()
