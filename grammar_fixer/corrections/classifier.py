"""Split findings into single-fix corrections and everything else."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from grammar_fixer.models import Finding

from .fingerprint import fingerprint
from .tracker import ResolutionTracker


@dataclass
class Classification:
    """Result of one classification pass.

    ``corrections`` holds findings with exactly one replacement that have not
    been resolved yet. ``suggestions`` holds the rest, including corrections
    that were already applied, so their "Done" marker survives the next pass.
    Both lists keep the input order.
    """

    corrections: list[Finding] = field(default_factory=list)
    suggestions: list[Finding] = field(default_factory=list)
    resolved_keys: frozenset[str] = frozenset()

    def is_resolved(self, finding: Finding) -> bool:
        return fingerprint(finding) in self.resolved_keys

    @property
    def pending_suggestions(self) -> list[Finding]:
        return [finding for finding in self.suggestions if not self.is_resolved(finding)]

    @property
    def resolved(self) -> list[Finding]:
        return [
            finding
            for finding in self.corrections + self.suggestions
            if self.is_resolved(finding)
        ]

    @property
    def actionable_count(self) -> int:
        return len(self.corrections) + len(self.pending_suggestions)

    def __len__(self) -> int:
        return len(self.corrections) + len(self.suggestions)


def is_correction(finding: Finding, tracker: ResolutionTracker) -> bool:
    return len(finding.replacements) == 1 and not tracker.is_resolved(fingerprint(finding))


def classify(findings: Iterable[Finding], tracker: ResolutionTracker) -> Classification:
    """Partition ``findings`` against the current ``tracker`` state."""

    corrections: list[Finding] = []
    suggestions: list[Finding] = []
    resolved_keys: set[str] = set()

    for finding in findings:
        key = fingerprint(finding)
        if tracker.is_resolved(key):
            resolved_keys.add(key)
        if is_correction(finding, tracker):
            corrections.append(finding)
        else:
            suggestions.append(finding)

    return Classification(
        corrections=corrections,
        suggestions=suggestions,
        resolved_keys=frozenset(resolved_keys),
    )
