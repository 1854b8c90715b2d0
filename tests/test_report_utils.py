from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from grammar_fixer.models import (
    AnalysisRequest,
    AnalysisResponse,
    Corrections,
    Finding,
    LanguageData,
)
from grammar_fixer.errors import OracleError
from grammar_fixer.report import build_session_csv, build_session_markdown, format_suggestions
from grammar_fixer.session import SessionController

TEXT = "She dont like apples. Their are many."

DONT = Finding(
    message="Possible agreement error.",
    offset=4,
    length=4,
    replacements=["doesn't"],
    context="She dont like apples.",
    rule_id="DONT_DOESNT",
)
THEIR = Finding(
    message="Did you mean | there?",
    offset=22,
    length=5,
    replacements=["There", "They're", "The", "Theirs"],
    context="Their are many.",
    rule_id="THEIR_IS",
)


class DummyAnalyzer:
    def __init__(self, response: AnalysisResponse) -> None:
        self.response = response

    def analyze(self, request: AnalysisRequest) -> AnalysisResponse:
        return self.response


def _controller(*findings: Finding) -> SessionController:
    corrections = Corrections(
        matches=list(findings),
        language=LanguageData.for_language("en"),
        sentence_ranges=[(0, 21), (22, 37)],
    )
    controller = SessionController(DummyAnalyzer(AnalysisResponse.ok(corrections)))
    controller.submit(TEXT)
    return controller


def test_format_suggestions_truncates() -> None:
    assert format_suggestions([]) == "—"
    assert format_suggestions(["a", "b"]) == "a, b"
    assert format_suggestions(["a", "b", "c", "d", "e"]) == "a, b, c (+2 more)"


def test_markdown_groups_corrections_and_suggestions_by_sentence() -> None:
    markdown = build_session_markdown(_controller(DONT, THEIR).snapshot())

    assert markdown.startswith("# Grammar Check Report")
    assert "- Word count: 7" in markdown
    assert "- Language: English" in markdown
    assert "- Issues found: 2" in markdown
    assert "- Resolved: 0" in markdown
    assert "## Sentence Structure" in markdown
    assert "1. She dont like apples." in markdown
    assert "2. Their are many." in markdown

    corrections_at = markdown.index("## Corrections")
    suggestions_at = markdown.index("## Suggestions")
    assert corrections_at < suggestions_at
    assert "### She dont like apples." in markdown
    assert "| dont | Possible agreement error. | doesn't | Pending |" in markdown
    assert (
        "| Their | Did you mean \\| there? | There, They're, The (+1 more) | Pending |"
        in markdown
    )


def test_markdown_marks_resolved_findings_done() -> None:
    controller = _controller(DONT)
    controller.apply_fix(DONT)

    markdown = build_session_markdown(controller.snapshot())

    assert "- Resolved: 1" in markdown
    assert "## Corrections" not in markdown
    assert "## Suggestions" in markdown
    assert "| dont | Possible agreement error. | doesn't | Done |" in markdown


def test_markdown_without_findings() -> None:
    markdown = build_session_markdown(_controller().snapshot())
    assert "_No issues found! Your text looks great._" in markdown


def test_markdown_before_analysis_and_after_failure() -> None:
    idle = SessionController(DummyAnalyzer(AnalysisResponse.failed("Server overloaded")))
    assert "_No analysis has been run yet._" in build_session_markdown(idle.snapshot())

    with pytest.raises(OracleError):
        idle.submit(TEXT)
    assert "Error: Server overloaded" in build_session_markdown(idle.snapshot())


def test_csv_rows() -> None:
    controller = _controller(DONT, THEIR)
    controller.apply_fix(DONT)

    rows = build_session_csv(controller.snapshot())

    assert rows[0] == [
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
    assert rows[1] == [
        "Suggestion",
        "She dont like apples.",
        "4",
        "4",
        "dont",
        "Possible agreement error.",
        "doesn't",
        "DONT_DOESNT",
        "Done",
    ]
    assert rows[2][0] == "Suggestion"
    assert rows[2][4] == "Their"
    assert rows[2][8] == "Pending"
    assert len(rows) == 3
