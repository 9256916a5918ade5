"""
Chain Segments

A segment is a chain state together with the proof bound to its commitment.
These helpers compute each next state exactly as the program's checks do,
then ask the program to prove it.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from .backend.base import Proof
from .program import TransitionProgram, extend_state, merge_states
from .split import WordSplit, split_word
from .state import ChainState

Word = Union[str, WordSplit]


@dataclass(frozen=True)
class Segment:
    """A proven chain segment."""
    state: ChainState
    proof: Proof

    @property
    def commitment(self) -> bytes:
        return self.proof.public_input

    @property
    def length(self) -> int:
        return self.state.length

    @property
    def valid(self) -> bool:
        return self.state.valid


def _as_split(word: Word) -> WordSplit:
    if isinstance(word, WordSplit):
        return word
    return split_word(word)


def start(program: TransitionProgram, word: Word) -> Segment:
    """Init: prove a one-word segment."""
    split = _as_split(word)
    state = ChainState.initial(split)
    proof = program.init(program.commitment(state), split)
    return Segment(state, proof)


def extend(program: TransitionProgram, segment: Segment, word: Word) -> Segment:
    """Extend: append one word to a proven segment."""
    split = _as_split(word)
    state = extend_state(segment.state, split)
    proof = program.extend(
        program.commitment(state), segment.proof, split, segment.state
    )
    return Segment(state, proof)


def merge(program: TransitionProgram, left: Segment, right: Segment) -> Segment:
    """Merge: prove the concatenation of two segments."""
    state = merge_states(left.state, right.state)
    proof = program.merge(
        program.commitment(state), left.proof, right.proof,
        left.state, right.state
    )
    return Segment(state, proof)


def prove_chain(program: TransitionProgram, words: Sequence[Word]) -> Segment:
    """Init on the first word, then Extend with each following word."""
    if not words:
        raise ValueError("Cannot prove an empty chain")

    segment = start(program, words[0])
    for word in words[1:]:
        segment = extend(program, segment, word)
    return segment


def prove_segments(
    program: TransitionProgram,
    word_lists: Sequence[Sequence[Word]],
    max_workers: Optional[int] = None
) -> List[Segment]:
    """
    Prove independent segments concurrently.

    Segments share no state, so no coordination is needed between them.
    Results are returned in input order.
    """
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(lambda ws: prove_chain(program, ws), word_lists))


def merge_all(program: TransitionProgram, segments: Sequence[Segment]) -> Segment:
    """Left fold of merge over segments."""
    if not segments:
        raise ValueError("Cannot merge zero segments")

    result = segments[0]
    for segment in segments[1:]:
        result = merge(program, result, segment)
    return result
