"""
Chain Rule

Two adjacent words connect when the last symbol of the left word equals the
first symbol of the right word. Both sides are read from the same field
representation, so the comparison is always symbol against symbol.
"""

from .split import WordSplit


def can_chain(left: WordSplit, right: WordSplit) -> bool:
    """
    Adjacency check between two splits.

    validate(left) ∧ validate(right) ∧ left.last_char == first(right.word)
    """
    if not (left.validate() and right.validate()):
        return False
    return left.last_char.first() == right.word.first()


def words_can_chain(left: str, right: str) -> bool:
    """Plain-string adjacency check. Empty words never chain."""
    if not left or not right:
        return False
    return left[-1] == right[0]
