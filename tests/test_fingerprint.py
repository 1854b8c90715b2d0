from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from grammar_fixer.corrections import MESSAGE_PREFIX_LENGTH, fingerprint
from grammar_fixer.models import Finding


def test_fingerprint_is_stable_for_the_same_finding() -> None:
    finding = Finding(message="Possible spelling mistake found.", offset=3, length=4)

    assert fingerprint(finding) == fingerprint(finding)
    assert fingerprint(finding) == "3-4-Possible spelling mi"


def test_short_messages_are_used_whole() -> None:
    finding = Finding(message="Typo", offset=0, length=2)
    assert fingerprint(finding) == "0-2-Typo"


def test_findings_sharing_offset_length_and_prefix_collide() -> None:
    prefix = "x" * MESSAGE_PREFIX_LENGTH
    first = Finding(message=prefix + " first", offset=10, length=3, replacements=["a"])
    second = Finding(message=prefix + " second", offset=10, length=3, replacements=["a", "b"])

    assert fingerprint(first) == fingerprint(second)


def test_different_spans_do_not_collide() -> None:
    message = "Possible agreement error"
    assert fingerprint(Finding(message=message, offset=1, length=4)) != fingerprint(
        Finding(message=message, offset=1, length=5)
    )
    assert fingerprint(Finding(message=message, offset=1, length=4)) != fingerprint(
        Finding(message=message, offset=2, length=4)
    )
