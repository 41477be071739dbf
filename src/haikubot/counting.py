"""Heuristic English syllable counting."""

from __future__ import annotations

import re

_WORD_RE = re.compile(r"[A-Za-z']+|\S+")
_VOWEL_GROUP_RE = re.compile(r"[aeiouy]+")


class SyllableCountError(ValueError):
    """Raised when a phrase contains a token that cannot be counted."""


def count_word(word: str) -> int:
    """Count syllables in one alphabetic word.

    Args:
        word: Word made of letters and apostrophes.

    Returns:
        Syllable count, at least one.

    Raises:
        SyllableCountError: If the word has no letters or contains other symbols.
    """
    cleaned = word.lower().replace("'", "")
    if not cleaned.isalpha():
        raise SyllableCountError(f"Cannot count syllables in '{word}'")
    count = len(_VOWEL_GROUP_RE.findall(cleaned))
    # silent trailing e, but keep "-le" as in "table"
    if cleaned.endswith("e") and not cleaned.endswith(("le", "ee", "ye")):
        count -= 1
    if cleaned.endswith("es") and len(cleaned) > 3 and cleaned[-3] not in "cgsxz":
        count -= 1
    return max(count, 1)


def count_line(phrase: str) -> int:
    """Count syllables across a whole phrase.

    Args:
        phrase: Free text.

    Returns:
        Total syllable count.

    Raises:
        SyllableCountError: If the phrase is empty or has an uncountable token.
    """
    tokens = [
        token.strip(".,;:!?\"()[]-")
        for token in _WORD_RE.findall(phrase)
    ]
    words = [token for token in tokens if token]
    if not words:
        raise SyllableCountError("Phrase has no words to count")
    return sum(count_word(word) for word in words)
