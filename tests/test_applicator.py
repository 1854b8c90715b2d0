from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from grammar_fixer.corrections import apply_replacement
from grammar_fixer.errors import OffsetOutOfRange
from grammar_fixer.models import Finding


def _finding(offset: int, length: int, message: str = "Issue") -> Finding:
    return Finding(message=message, offset=offset, length=length, replacements=["x"])


def test_replaces_the_flagged_word() -> None:
    content = "The quick brown fox"

    result = apply_replacement(content, _finding(4, 5), "slow")

    assert result == "The slow brown fox"
    assert content == "The quick brown fox"


def test_replacement_at_start_and_end_of_content() -> None:
    assert apply_replacement("teh cat", _finding(0, 3), "the") == "the cat"
    assert apply_replacement("the catt", _finding(4, 4), "cat") == "the cat"


def test_zero_length_span_inserts_text() -> None:
    assert apply_replacement("Hello world", _finding(5, 0), ",") == "Hello, world"


def test_empty_replacement_deletes_span() -> None:
    assert apply_replacement("the the cat", _finding(4, 4), "") == "the cat"


def test_span_ending_exactly_at_content_end_is_accepted() -> None:
    content = "0123456789"
    assert apply_replacement(content, _finding(5, 5), "!") == "01234!"


def test_out_of_range_span_is_rejected() -> None:
    content = "0123456789"

    with pytest.raises(OffsetOutOfRange) as excinfo:
        apply_replacement(content, _finding(8, 5), "abc")

    assert excinfo.value.offset == 8
    assert excinfo.value.length == 5
    assert excinfo.value.content_length == 10
    assert content == "0123456789"


def test_remaining_offsets_are_not_reindexed_after_a_fix() -> None:
    """A second fix from the same analysis uses the original offsets."""
    original = "I has a apple."
    has = _finding(2, 3)  # "has"
    a = _finding(6, 1)  # "a"

    first = apply_replacement(original, has, "have")
    assert first == "I have a apple."

    # "a" has moved one character to the right, but its offset has not
    second = apply_replacement(first, a, "an")
    assert second == "I haveana apple."


def test_stale_offset_beyond_shrunk_content_is_rejected() -> None:
    original = "Their are many reasons"
    their = _finding(0, 5)
    reasons = _finding(15, 7)

    shrunk = apply_replacement(original, their, "")
    assert shrunk == " are many reasons"

    with pytest.raises(OffsetOutOfRange):
        apply_replacement(shrunk, reasons, "causes")
