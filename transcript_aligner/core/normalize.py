"""Word normalization shared by the aligner and its callers.

WHY: ASR output and human corrections disagree on case and trailing
punctuation far more often than on the words themselves. "recording."
and "recording" must count as the same word or every sentence end would
become a substitution.

HOW: Lowercase, then strip one trailing run of characters from
PUNCTUATION_CHARS. Leading and inner punctuation are kept, so "don't"
and "e.g" stay distinct from "dont" and "eg".

RULES:
- normalize_word is idempotent: normalize(normalize(w)) == normalize(w)
- The input string is never modified; a new string is returned
- A word made only of punctuation normalizes to ""
"""

from __future__ import annotations

import re
from typing import Iterable

from transcript_aligner.config import PUNCTUATION_CHARS

_TRAILING_PUNCTUATION_RE = re.compile("[{}]+$".format(re.escape(PUNCTUATION_CHARS)))


def normalize_word(word: str) -> str:
    """Return the comparison form of a word."""
    return _TRAILING_PUNCTUATION_RE.sub("", word.lower())


def normalize_words(words: Iterable[str]) -> list[str]:
    return [normalize_word(w) for w in words]


def words_equal(a: str, b: str) -> bool:
    """True if two words compare equal after normalization."""
    return normalize_word(a) == normalize_word(b)
