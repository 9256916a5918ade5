"""
Property-Based Testing with Hypothesis

Random words and splits exercise the validator, the chain rule, the state
commitment and the composition rules of extend and merge.
"""

from functools import reduce

from hypothesis import given, strategies as st, settings, assume
from hypothesis.strategies import composite

from wordchain import (
    ChainState,
    ReceiptBackend,
    TransitionProgram,
    WordSplit,
    can_chain,
    extend_state,
    merge_states,
    prove_chain,
    split_word,
    words_can_chain,
)

PROGRAM = TransitionProgram(ReceiptBackend())
PROGRAM.compile()

# Small alphabet so adjacent words connect often enough to matter
words = st.text(alphabet='abct', min_size=1, max_size=6)
fragments = st.text(alphabet='abct', max_size=6)


@composite
def splits(draw):
    """Either a canonical split or an arbitrary (usually malformed) one."""
    if draw(st.booleans()):
        return split_word(draw(words))
    return WordSplit.from_strings(draw(fragments), draw(fragments), draw(fragments))


def sequential(word_list):
    state = ChainState.initial(split_word(word_list[0]))
    for w in word_list[1:]:
        state = extend_state(state, split_word(w))
    return state


# =============================================================================
# VALIDATOR AND RULE
# =============================================================================

class TestValidator:

    @given(word=fragments, prefix=fragments, last=fragments)
    @settings(max_examples=300)
    def test_validate_iff(self, word, prefix, last):
        """validate() holds iff last is one symbol and prefix ‖ last == word."""
        split = WordSplit.from_strings(word, prefix, last)
        expected = len(last) == 1 and prefix + last == word
        assert split.validate() == expected

    @given(word=words)
    def test_canonical_split_valid(self, word):
        assert split_word(word).validate()

    @given(left=splits(), right=splits())
    @settings(max_examples=300)
    def test_can_chain_iff(self, left, right):
        expected = (
            left.validate()
            and right.validate()
            and left.last_char.to_str() == right.word.to_str()[:1]
        )
        assert can_chain(left, right) == expected

    @given(left=words, right=words)
    def test_plain_rule_agrees(self, left, right):
        assert words_can_chain(left, right) == can_chain(
            split_word(left), split_word(right)
        )


# =============================================================================
# COMMITMENT
# =============================================================================

class TestCommitment:

    @given(word=words, length=st.integers(min_value=1, max_value=10**6),
           valid=st.booleans())
    def test_deterministic(self, word, length, valid):
        s1 = ChainState(split_word(word), length, valid)
        s2 = ChainState(split_word(word), length, valid)
        assert s1.commitment() == s2.commitment()

    @given(w1=words, w2=words,
           n1=st.integers(min_value=1, max_value=1000),
           n2=st.integers(min_value=1, max_value=1000),
           v1=st.booleans(), v2=st.booleans())
    def test_distinct_states_distinct_commitments(self, w1, w2, n1, n2, v1, v2):
        assume((w1, n1, v1) != (w2, n2, v2))
        s1 = ChainState(split_word(w1), n1, v1)
        s2 = ChainState(split_word(w2), n2, v2)
        assert s1.commitment() != s2.commitment()


# =============================================================================
# COMPOSITION
# =============================================================================

class TestComposition:

    @given(word_list=st.lists(words, min_size=1, max_size=8))
    def test_length_counts_words(self, word_list):
        assert sequential(word_list).length == len(word_list)

    @given(word_list=st.lists(words, min_size=2, max_size=8))
    def test_valid_iff_every_link_connects(self, word_list):
        links = all(
            words_can_chain(a, b) for a, b in zip(word_list, word_list[1:])
        )
        assert sequential(word_list).valid == links

    @given(word_list=st.lists(words, min_size=1, max_size=8), extra=words)
    def test_merge_with_single_word_matches_extend(self, word_list, extra):
        left = sequential(word_list)
        by_extend = extend_state(left, split_word(extra))
        by_merge = merge_states(left, ChainState.initial(split_word(extra)))
        assert (by_merge.length, by_merge.valid) == (by_extend.length, by_extend.valid)
        assert by_merge.commitment() == by_extend.commitment()

    @given(word_list=st.lists(words, min_size=2, max_size=8), data=st.data())
    def test_merge_lengths_add(self, word_list, data):
        cut = data.draw(st.integers(min_value=1, max_value=len(word_list) - 1))
        merged = merge_states(sequential(word_list[:cut]), sequential(word_list[cut:]))
        assert merged.length == len(word_list)
        assert merged.current_word == split_word(word_list[-1])

    @given(word_list=st.lists(words, min_size=2, max_size=10))
    def test_valid_is_monotonic(self, word_list):
        """Once cleared by an extend, the flag never comes back."""
        state = ChainState.initial(split_word(word_list[0]))
        seen_invalid = False
        for w in word_list[1:]:
            state = extend_state(state, split_word(w))
            if seen_invalid:
                assert state.valid is False
            seen_invalid = not state.valid

    @given(states=st.lists(
        st.tuples(words, st.integers(min_value=1, max_value=50), st.booleans()),
        min_size=2, max_size=6))
    def test_merge_fold_monotonic(self, states):
        chain_states = [ChainState(split_word(w), n, v) for w, n, v in states]
        merged = reduce(merge_states, chain_states)
        if not all(s.valid for s in chain_states):
            assert merged.valid is False
        assert merged.length == sum(s.length for s in chain_states)


# =============================================================================
# PROOFS
# =============================================================================

class TestProofs:

    @given(word_list=st.lists(words, min_size=1, max_size=5))
    @settings(max_examples=50, deadline=None)
    def test_proved_chain_matches_plain_evaluation(self, word_list):
        segment = prove_chain(PROGRAM, word_list)
        expected = sequential(word_list)
        assert segment.state == expected
        assert segment.proof.public_input == expected.commitment()
        assert PROGRAM.verify(segment.proof)
