"""Utilities for rendering a correction session as Markdown or CSV.

Both builders take a :class:`SessionSnapshot` so they never touch the
controller directly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from grammar_fixer.corrections import Classification, group_by_sentence
from grammar_fixer.models import Finding, SessionState

from .text_stats import readability_level, readability_score, sentence_slices, word_count

if TYPE_CHECKING:  # pragma: no cover - typing only
    from grammar_fixer.session.controller import SessionSnapshot


def format_suggestions(replacements: list[str] | None, max_suggestions: int = 3) -> str:
    """Return a human-friendly, truncated suggestions string.

    If there are no replacements returns "—". If there are more than
    ``max_suggestions`` replacements, the first ``max_suggestions`` are shown
    followed by "(+N more)".
    """
    if not replacements:
        return "—"
    if len(replacements) <= max_suggestions:
        return ", ".join(replacements)
    visible = ", ".join(replacements[:max_suggestions])
    remaining = len(replacements) - max_suggestions
    return f"{visible} (+{remaining} more)"


def _escape(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def _issue_text(finding: Finding, analysed: str | None) -> str:
    if analysed is None or not finding.fits(analysed):
        return ""
    return finding.matched_text(analysed)


def _status(finding: Finding, classification: Classification) -> str:
    return "Done" if classification.is_resolved(finding) else "Pending"


def _section_lines(
    title: str,
    findings: list[Finding],
    classification: Classification,
    analysed: str | None,
) -> list[str]:
    lines = ["", f"## {title}"]
    for sentence, group in group_by_sentence(findings).items():
        lines.append("")
        lines.append(f"### {_escape(sentence) if sentence else '(no context)'}")
        lines.append("")
        lines.append("| Issue | Message | Suggestions | Status |")
        lines.append("| --- | --- | --- | --- |")
        for finding in group:
            issue = _escape(_issue_text(finding, analysed)) or "—"
            message = _escape(finding.message)
            suggestions = _escape(format_suggestions(finding.replacements))
            lines.append(
                f"| {issue} | {message} | {suggestions} | {_status(finding, classification)} |"
            )
    return lines


def build_session_markdown(snapshot: "SessionSnapshot") -> str:
    """Convert a session snapshot into Markdown output."""

    lines: list[str] = ["# Grammar Check Report", ""]

    if snapshot.state is SessionState.FAILED:
        lines.append(f"Error: {snapshot.error or 'Unknown error'}")
        return "\n".join(lines)
    if snapshot.state is not SessionState.READY:
        lines.append("_No analysis has been run yet._")
        return "\n".join(lines)

    classification = snapshot.classification
    score = readability_score(snapshot.content)
    language = snapshot.language.label if snapshot.language is not None else "Unknown"

    lines.append(f"- Word count: {word_count(snapshot.content)}")
    lines.append(f"- Language: {language}")
    lines.append(f"- Readability: {score} ({readability_level(score)})")
    lines.append(f"- Issues found: {snapshot.total_findings}")
    lines.append(f"- Resolved: {len(classification.resolved)}")

    if snapshot.sentence_ranges and snapshot.analysed_content is not None:
        lines.append("")
        lines.append("## Sentence Structure")
        lines.append("")
        for index, sentence in enumerate(
            sentence_slices(snapshot.analysed_content, snapshot.sentence_ranges), start=1
        ):
            lines.append(f"{index}. {sentence.strip()}")

    if not classification.corrections and not classification.suggestions:
        lines.append("")
        lines.append("_No issues found! Your text looks great._")
        return "\n".join(lines)

    if classification.corrections:
        lines.extend(
            _section_lines(
                "Corrections",
                classification.corrections,
                classification,
                snapshot.analysed_content,
            )
        )
    if classification.suggestions:
        lines.extend(
            _section_lines(
                "Suggestions",
                classification.suggestions,
                classification,
                snapshot.analysed_content,
            )
        )
    return "\n".join(lines)


def build_session_csv(snapshot: "SessionSnapshot") -> list[list[str]]:
    """Convert a session snapshot into CSV data.

    Returns a list of rows, where each row is a list of string values.
    The first row contains the column headers.
    """

    rows: list[list[str]] = [
        [
            "Section",
            "Sentence",
            "Offset",
            "Length",
            "Issue",
            "Message",
            "Suggestions",
            "Rule ID",
            "Status",
        ]
    ]

    classification = snapshot.classification
    sections = (
        ("Correction", classification.corrections),
        ("Suggestion", classification.suggestions),
    )
    for section, findings in sections:
        for finding in findings:
            txt = format_suggestions(finding.replacements)
            rows.append(
                [
                    section,
                    finding.context.text,
                    str(finding.offset),
                    str(finding.length),
                    _issue_text(finding, snapshot.analysed_content),
                    finding.message,
                    "" if txt == "—" else txt,
                    finding.rule_id,
                    _status(finding, classification),
                ]
            )
    return rows
