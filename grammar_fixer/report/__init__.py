"""Report builders and text statistics for correction sessions."""

from __future__ import annotations

from .report_utils import build_session_csv, build_session_markdown, format_suggestions
from .text_stats import (
    count_syllables,
    readability_level,
    readability_score,
    sentence_slices,
    word_count,
)

__all__ = [
    "build_session_csv",
    "build_session_markdown",
    "count_syllables",
    "format_suggestions",
    "readability_level",
    "readability_score",
    "sentence_slices",
    "word_count",
]
