"""
End-to-End Chain Scenarios

Builds complete chains through the segment helpers and checks the final
length, validity flag and proof.
"""

import dataclasses

import pytest

from wordchain import (
    ChainState,
    ProofVerificationError,
    ReceiptBackend,
    Segment,
    TransitionProgram,
    extend,
    merge,
    merge_all,
    prove_chain,
    prove_segments,
    split_word,
    start,
)


@pytest.fixture
def program():
    program = TransitionProgram(ReceiptBackend())
    program.compile()
    return program


class TestScenarios:
    """The reference scenarios."""

    def test_scenario_a_valid_chain(self, program):
        """cat -> tree -> elephant"""
        segment = start(program, "cat")
        segment = extend(program, segment, "tree")
        segment = extend(program, segment, "elephant")

        assert segment.length == 3
        assert segment.valid is True
        assert program.verify(segment.proof)

    def test_scenario_b_broken_chain(self, program):
        """cat -> dog"""
        segment = prove_chain(program, ["cat", "dog"])

        assert segment.length == 2
        assert segment.valid is False
        # The proof is still sound: it proves the check was applied.
        assert program.verify(segment.proof)

    def test_scenario_c_merge(self, program):
        """(cat -> tree -> elephant) ++ (trunt -> tking)"""
        first = prove_chain(program, ["cat", "tree", "elephant"])
        second = prove_chain(program, ["trunt", "tking"])
        assert second.length == 2 and second.valid

        merged = merge(program, first, second)

        assert merged.length == 5
        assert merged.valid is True
        assert merged.state.current_word == split_word("tking")
        assert program.verify(merged.proof)

    def test_scenario_d_unverified_lineage(self, program):
        """Extending from a proof that fails verification raises."""
        segment = prove_chain(program, ["cat", "tree"])
        bad = Segment(
            segment.state,
            dataclasses.replace(segment.proof, receipt=b'\x00' * 32),
        )

        with pytest.raises(ProofVerificationError):
            extend(program, bad, "elephant")


class TestSegments:
    """Tests for segment helpers."""

    def test_commitment_matches_state(self, program):
        segment = prove_chain(program, ["cat", "tree"])
        assert segment.commitment == segment.state.commitment()

    def test_empty_chain(self, program):
        with pytest.raises(ValueError):
            prove_chain(program, [])

    def test_accepts_splits(self, program):
        segment = prove_chain(program, [split_word("cat"), "tree"])
        assert segment.length == 2 and segment.valid

    def test_invalid_stays_invalid(self, program):
        """Once the flag is cleared, later valid links do not restore it."""
        segment = prove_chain(program, ["cat", "dog", "goat", "tiger"])
        assert segment.length == 4
        assert segment.valid is False

    def test_long_chain(self, program):
        words = ["ab", "bc", "cd", "de", "ef", "fg", "gh", "hi"]
        segment = prove_chain(program, words)
        assert segment.length == 8
        assert segment.valid
        assert program.verify(segment.proof)

    def test_extend_after_merge(self, program):
        merged = merge(
            program,
            prove_chain(program, ["cat", "tree"]),
            prove_chain(program, ["elephant"]),
        )
        segment = extend(program, merged, "tiger")
        assert segment.length == 4
        assert segment.valid

    def test_prove_segments_parallel(self, program):
        word_lists = [["cat", "tree"], ["eagle", "ear"], ["rose"]]
        segments = prove_segments(program, word_lists, max_workers=3)

        assert [s.length for s in segments] == [2, 2, 1]
        assert all(program.verify(s.proof) for s in segments)
        assert segments[0].state.current_word == split_word("tree")

        merged = merge_all(program, segments)
        assert merged.length == 5
        assert merged.valid
        assert program.verify(merged.proof)

    def test_merge_all_empty(self, program):
        with pytest.raises(ValueError):
            merge_all(program, [])

    def test_disclosed_state_roundtrip(self, program):
        """A verifier can rebuild the final state from its disclosed bytes."""
        segment = prove_chain(program, ["cat", "tree", "elephant"])
        disclosed = ChainState.deserialize(segment.state.serialize())
        assert disclosed.commitment() == segment.proof.public_input
        assert disclosed.valid and disclosed.length == 3
