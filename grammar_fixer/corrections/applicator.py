"""Apply a chosen replacement to the span a finding covers."""

from __future__ import annotations

from grammar_fixer.errors import OffsetOutOfRange
from grammar_fixer.models import Finding


def check_span(content: str, finding: Finding) -> None:
    """Raise :class:`OffsetOutOfRange` unless ``finding`` fits inside ``content``."""

    if finding.offset < 0 or finding.length < 0 or finding.end > len(content):
        raise OffsetOutOfRange(finding.offset, finding.length, len(content))


def apply_replacement(content: str, finding: Finding, replacement: str) -> str:
    """Return ``content`` with the finding's span replaced by ``replacement``.

    The input string is never modified; callers decide whether to adopt the
    returned value as the new buffer.

    Offsets of the other findings from the same analysis are not adjusted.
    Once a fix changes the buffer length, any finding located after the edited
    span points at the wrong characters until the content is analysed again.

    Raises:
        OffsetOutOfRange: If ``finding.offset + finding.length`` exceeds
            ``len(content)``.
    """

    check_span(content, finding)
    return content[: finding.offset] + replacement + content[finding.end :]
