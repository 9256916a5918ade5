"""
Error Classes

Protocol violations are fatal to the operation that raised them: no proof is
produced. Adjacency failures are never errors; they clear the validity flag
of the resulting state instead.
"""

from typing import Optional


class WordChainError(Exception):
    """Base class for all word-chain errors."""


class ProgramNotCompiledError(WordChainError):
    """An operation was attempted before the program was compiled."""


class ProtocolViolation(WordChainError):
    """A `require` of a transition operation did not hold."""


class MalformedSplitError(ProtocolViolation):
    """A WordSplit was required to be well formed and is not."""


class UnknownMethodError(ProtocolViolation):
    """The compiled program has no method with the requested name."""


class ProofVerificationError(ProtocolViolation):
    """An input proof failed backend verification."""


class CommitmentMismatchError(ProtocolViolation):
    """A state does not hash to the commitment it is claimed to match."""

    def __init__(self, message: str, expected: Optional[bytes] = None,
                 actual: Optional[bytes] = None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual

    def __str__(self) -> str:
        base = super().__str__()
        if self.expected is None or self.actual is None:
            return base
        return f"{base} (expected {self.expected[:8].hex()}..., got {self.actual[:8].hex()}...)"
