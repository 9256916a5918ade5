"""
wordchain: Recursive Proofs for Word Chains

Proves that a sequence of words forms a chain (each word's last symbol is the
next word's first symbol) with a single proof bound to a commitment of the
final chain state.

    Init:   one word                 -> proof of Segment(1, true)
    Extend: proof + next word        -> proof of Segment(n+1, ...)
    Merge:  two proofs               -> proof of the concatenation

Usage:
    from wordchain import ReceiptBackend, TransitionProgram, prove_chain

    program = TransitionProgram(ReceiptBackend())
    program.compile()

    segment = prove_chain(program, ["cat", "tree", "elephant"])
    assert program.verify(segment.proof)
    assert segment.state.length == 3 and segment.state.valid

A verified proof certifies that the protocol was followed. Whether the words
actually chain is the `valid` flag of the disclosed final state.
"""

from .tags import ChainTag, tag_bytes
from .hashing import commit, tagged_hash
from .symbols import FieldString, MAX_LENGTH
from .split import WordSplit, split_word, validate
from .state import ChainState
from .rule import can_chain, words_can_chain
from .params import ChainParams, DEFAULT_PARAMS
from .errors import (
    WordChainError,
    ProgramNotCompiledError,
    ProtocolViolation,
    MalformedSplitError,
    UnknownMethodError,
    ProofVerificationError,
    CommitmentMismatchError,
)
from .backend import (
    ProgramMethod,
    VerificationKey,
    Proof,
    ProofBackend,
    ReceiptBackend,
)
from .program import TransitionProgram, extend_state, merge_states
from .chain import (
    Segment,
    start,
    extend,
    merge,
    prove_chain,
    prove_segments,
    merge_all,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Hashing
    "ChainTag",
    "tag_bytes",
    "commit",
    "tagged_hash",
    # Data model
    "FieldString",
    "MAX_LENGTH",
    "WordSplit",
    "split_word",
    "validate",
    "ChainState",
    # Rule
    "can_chain",
    "words_can_chain",
    # Configuration
    "ChainParams",
    "DEFAULT_PARAMS",
    # Errors
    "WordChainError",
    "ProgramNotCompiledError",
    "ProtocolViolation",
    "MalformedSplitError",
    "UnknownMethodError",
    "ProofVerificationError",
    "CommitmentMismatchError",
    # Backend
    "ProgramMethod",
    "VerificationKey",
    "Proof",
    "ProofBackend",
    "ReceiptBackend",
    # Program
    "TransitionProgram",
    "extend_state",
    "merge_states",
    # Segments
    "Segment",
    "start",
    "extend",
    "merge",
    "prove_chain",
    "prove_segments",
    "merge_all",
]
