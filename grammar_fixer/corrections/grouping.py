"""Group findings by the sentence they were reported in."""

from __future__ import annotations

from typing import Iterable

from grammar_fixer.models import Finding


def group_by_sentence(findings: Iterable[Finding]) -> dict[str, list[Finding]]:
    """Return ``{context text: findings}`` in first-seen order.

    The key is the context string exactly as the checker returned it. Two
    findings from different parts of the document share a group when their
    context text is identical.
    """

    groups: dict[str, list[Finding]] = {}
    for finding in findings:
        groups.setdefault(finding.context.text, []).append(finding)
    return groups
