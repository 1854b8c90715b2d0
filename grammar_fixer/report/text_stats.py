"""Word counts and Flesch reading-ease scores for the report header."""

from __future__ import annotations

import re
from typing import Iterable

_SILENT_ENDING = re.compile(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$")
_VOWEL_GROUP = re.compile(r"[aeiouy]{1,2}")
_SENTENCE_END = re.compile(r"[.!?]+")

# (minimum score, label), checked from the top
READABILITY_LEVELS = (
    (90, "Very Easy"),
    (80, "Easy"),
    (70, "Fairly Easy"),
    (60, "Standard"),
    (50, "Fairly Difficult"),
    (30, "Difficult"),
)


def word_count(text: str) -> int:
    return len(text.split())


def count_syllables(word: str) -> int:
    """Estimate syllables by counting vowel groups, ignoring silent endings."""

    word = _SILENT_ENDING.sub("", word.lower())
    if word.startswith("y"):
        word = word[1:]
    return len(_VOWEL_GROUP.findall(word)) or 1


def readability_score(text: str) -> float:
    """Return the Flesch reading-ease score rounded to one decimal place."""

    if not text.strip():
        return 0.0
    sentences = [chunk for chunk in _SENTENCE_END.split(text) if chunk]
    words = text.split()
    syllables = sum(count_syllables(word) for word in words)
    words_per_sentence = len(words) / max(len(sentences), 1)
    syllables_per_word = syllables / len(words)
    score = 206.835 - (1.015 * words_per_sentence) - (84.6 * syllables_per_word)
    return round(score, 1)


def readability_level(score: float) -> str:
    for minimum, label in READABILITY_LEVELS:
        if score >= minimum:
            return label
    return "Very Difficult"


def sentence_slices(text: str, ranges: Iterable[tuple[int, int]]) -> list[str]:
    """Return the sentences LanguageTool reported as ``[start, end)`` ranges."""

    return [text[start:end] for start, end in ranges]
