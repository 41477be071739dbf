"""Unit tests for syllable counting."""

from __future__ import annotations

import pytest

from haikubot.counting import SyllableCountError, count_line, count_word


@pytest.mark.unit
@pytest.mark.parametrize(
    ("word", "expected"),
    [
        ("pond", 1),
        ("the", 1),
        ("table", 2),
        ("silent", 2),
        ("make", 1),
        ("makes", 1),
        ("boxes", 2),
        ("free", 1),
        ("don't", 1),
    ],
)
def test_count_word(word: str, expected: int) -> None:
    """Heuristic handles vowel groups and silent endings."""
    assert count_word(word) == expected


@pytest.mark.unit
def test_count_line_sums_words_and_ignores_punctuation() -> None:
    """Punctuation-only tokens do not count."""
    assert count_line("An old silent pond...") == 5
    assert count_line("a frog jumps into the pond, -") == 7


@pytest.mark.unit
@pytest.mark.parametrize("phrase", ["", "   ", "!!!", "route 66"])
def test_count_line_rejects_uncountable_input(phrase: str) -> None:
    """Empty phrases and numerals cannot be counted."""
    with pytest.raises(SyllableCountError):
        count_line(phrase)
