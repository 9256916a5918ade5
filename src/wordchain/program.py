"""
Word-Chain Transition Program

Three provable methods over the chain state commitment:

    init:   Unstarted                     -> Segment(1, true, C)
    extend: Segment(n, v, C)              -> Segment(n+1, v ∧ ok, C')
    merge:  Segment(n1, v1) × Segment(n2, v2)
                                          -> Segment(n1+n2, v1 ∧ v2 ∧ connects, C_m)

Each method's check runs inside the backend before a proof is minted. A
check raises a ProtocolViolation for any failed requirement; adjacency
failures only clear the validity flag of the resulting state.

The verification key is obtained once from compile() and then passed to
every backend call from this program instance.
"""

from typing import Dict, Optional
import logging

from .backend.base import ProgramMethod, Proof, ProofBackend, VerificationKey
from .errors import (
    CommitmentMismatchError,
    MalformedSplitError,
    ProgramNotCompiledError,
    ProofVerificationError,
)
from .params import ChainParams, DEFAULT_PARAMS
from .rule import can_chain
from .split import WordSplit
from .state import ChainState

logger = logging.getLogger(__name__)


# =============================================================================
# State transitions
# =============================================================================

def extend_state(previous: ChainState, word: WordSplit) -> ChainState:
    """State after appending word to a segment ending in previous."""
    ok = can_chain(previous.current_word, word)
    return ChainState(
        current_word=word,
        length=previous.length + 1,
        valid=previous.valid and ok,
    )


def merge_states(left: ChainState, right: ChainState) -> ChainState:
    """
    State of the concatenation left ‖ right.

    Adjacency is checked between the current words of the two segments.
    """
    connects = can_chain(left.current_word, right.current_word)
    return ChainState(
        current_word=right.current_word,
        length=left.length + right.length,
        valid=left.valid and right.valid and connects,
    )


# =============================================================================
# Program
# =============================================================================

class TransitionProgram:
    """
    The word-chain verifier program.

    Usage:
        program = TransitionProgram(ReceiptBackend())
        program.compile()
        proof = program.init(state.commitment(), split)
    """

    def __init__(self, backend: ProofBackend, params: ChainParams = DEFAULT_PARAMS):
        self.backend = backend
        self.params = params
        self._vk: Optional[VerificationKey] = None

    @property
    def name(self) -> str:
        return self.params.program_name

    def methods(self) -> Dict[str, ProgramMethod]:
        """Method table handed to the backend at compile time."""
        return {
            'init': ProgramMethod('init', 0, self._check_init),
            'extend': ProgramMethod('extend', 1, self._check_extend),
            'merge': ProgramMethod('merge', 2, self._check_merge),
        }

    def compile(self) -> VerificationKey:
        """Compile once; later calls return the same key."""
        if self._vk is None:
            self._vk = self.backend.compile(self)
        return self._vk

    @property
    def verification_key(self) -> VerificationKey:
        if self._vk is None:
            raise ProgramNotCompiledError(f"{self.name} has not been compiled")
        return self._vk

    def commitment(self, state: ChainState) -> bytes:
        """Commitment to state under the backend's hash."""
        return self.backend.hash(state.to_fields())

    def verify(self, proof: Proof) -> bool:
        """Verify any proof produced by this program."""
        return self.backend.verify_proof(proof, self.verification_key)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def init(self, commitment: bytes, word: WordSplit) -> Proof:
        """Start a one-word chain bound to commitment."""
        return self.backend.generate_proof(
            self.verification_key, 'init', commitment, (word,)
        )

    def extend(
        self,
        commitment: bytes,
        earlier_proof: Proof,
        word: WordSplit,
        previous: ChainState
    ) -> Proof:
        """Append word to the chain proven by earlier_proof."""
        return self.backend.generate_proof(
            self.verification_key, 'extend', commitment,
            (earlier_proof, word, previous)
        )

    def merge(
        self,
        commitment: bytes,
        proof1: Proof,
        proof2: Proof,
        chain1: ChainState,
        chain2: ChainState
    ) -> Proof:
        """Concatenate two independently proven chains."""
        return self.backend.generate_proof(
            self.verification_key, 'merge', commitment,
            (proof1, proof2, chain1, chain2)
        )

    # -------------------------------------------------------------------------
    # Checks (run by the backend)
    # -------------------------------------------------------------------------

    def _require_commitment(self, state: ChainState, expected: bytes, what: str):
        actual = self.commitment(state)
        if actual != expected:
            raise CommitmentMismatchError(
                f"{what} does not match its commitment",
                expected=expected,
                actual=actual,
            )

    def _verify_input(self, proof: Proof, what: str):
        if not self.verify(proof):
            raise ProofVerificationError(f"{what} failed verification")

    def _check_init(self, public_input: bytes, word: WordSplit):
        if not word.validate():
            raise MalformedSplitError(f"Malformed split: {word!r}")

        chain = ChainState.initial(word)
        self._require_commitment(chain, public_input, 'initial chain')

    def _check_extend(
        self,
        public_input: bytes,
        earlier_proof: Proof,
        word: WordSplit,
        previous: ChainState
    ):
        self._verify_input(earlier_proof, 'earlier proof')
        self._require_commitment(
            previous, earlier_proof.public_input, 'previous chain'
        )

        if self.params.strict_extend_split and not word.validate():
            raise MalformedSplitError(f"Malformed split: {word!r}")

        chain = extend_state(previous, word)
        self._require_commitment(chain, public_input, 'extended chain')

    def _check_merge(
        self,
        public_input: bytes,
        proof1: Proof,
        proof2: Proof,
        chain1: ChainState,
        chain2: ChainState
    ):
        for proof, what in ((proof1, 'first proof'), (proof2, 'second proof')):
            try:
                self._verify_input(proof, what)
            except ProofVerificationError as e:
                if self.params.strict_merge:
                    raise
                logger.warning("proof verification failed: %s", e)

        self._require_commitment(chain1, proof1.public_input, 'first chain')
        self._require_commitment(chain2, proof2.public_input, 'second chain')

        chain = merge_states(chain1, chain2)
        self._require_commitment(chain, public_input, 'merged chain')
