from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from grammar_fixer.language_check.analyzer import (
    LanguageToolAnalyzer,
    _retry_with_backoff,
    filter_findings,
    make_finding,
)
from grammar_fixer.models import AnalysisRequest, Finding


class DummyMatch:
    def __init__(
        self,
        *,
        offset: int = 0,
        length: int = 5,
        replacements: list[str] | None = None,
        context: str = "Thiss is a test.",
        rule_id: str = "TEST_RULE",
    ) -> None:
        self.ruleId = rule_id
        self.message = "Possible spelling mistake found. "
        self.shortMessage = "Spelling mistake"
        self.ruleIssueType = "misspelling"
        self.replacements = ["This"] if replacements is None else replacements
        self.context = context
        self.offset = offset
        self.offsetInContext = offset
        self.errorLength = length


class DummyTool:
    def __init__(self, matches: list[DummyMatch], failures: list[Exception] | None = None) -> None:
        self._matches = matches
        self._failures = list(failures or [])
        self.captured_texts: list[str] = []
        self.closed = False

    def check(self, text: str) -> list[DummyMatch]:
        self.captured_texts.append(text)
        if self._failures:
            raise self._failures.pop(0)
        return self._matches

    def close(self) -> None:
        self.closed = True


class DummyManager:
    def __init__(self, tool: DummyTool) -> None:
        self.tool = tool
        self.languages: list[str] = []
        self.closed = False

    def get_tool(self, language: str) -> DummyTool:
        self.languages.append(language)
        return self.tool

    def close(self) -> None:
        self.closed = True


def _no_sleep(delays: list[float]):
    return delays.append


def test_make_finding_converts_match_attributes() -> None:
    finding = make_finding(DummyMatch())

    assert finding.message == "Possible spelling mistake found."
    assert finding.short_message == "Spelling mistake"
    assert finding.replacements == ["This"]
    assert finding.offset == 0
    assert finding.length == 5
    assert finding.context.text == "Thiss is a test."
    assert finding.context.highlighted() == "**Thiss** is a test."
    assert finding.rule_id == "TEST_RULE"
    assert finding.issue_type == "misspelling"


def test_make_finding_defaults_invalid_offsets_to_zero() -> None:
    match = DummyMatch()
    match.offset = None
    match.errorLength = "not a number"

    finding = make_finding(match)

    assert finding.offset == 0
    assert finding.length == 0


def test_analyzer_returns_findings_and_language_metadata() -> None:
    tool = DummyTool([DummyMatch()])
    manager = DummyManager(tool)
    analyzer = LanguageToolAnalyzer(manager, sleep=lambda _: None)

    response = analyzer.analyze(AnalysisRequest(content="Thiss is a test.", language="de"))

    assert response.success
    assert manager.languages == ["de"]
    assert tool.captured_texts == ["Thiss is a test."]
    assert response.corrections is not None
    assert len(response.corrections.matches) == 1
    assert response.corrections.language.code == "de"
    assert response.corrections.language.name == "German"


def test_analyzer_drops_ignored_words() -> None:
    content = "Use HTML and Thiss together."
    html = DummyMatch(offset=4, length=4, replacements=["HTTP"], context=content)
    typo = DummyMatch(offset=13, length=5, context=content)
    analyzer = LanguageToolAnalyzer(DummyManager(DummyTool([html, typo])), sleep=lambda _: None)

    response = analyzer.analyze(AnalysisRequest(content=content))

    assert response.corrections is not None
    assert [f.offset for f in response.corrections.matches] == [13]


def test_analyzer_honours_extra_ignored_words() -> None:
    content = "Welcome to Zorbex exams."
    match = DummyMatch(offset=11, length=6, context=content)
    analyzer = LanguageToolAnalyzer(
        DummyManager(DummyTool([match])),
        ignored_words={"Zorbex"},
        sleep=lambda _: None,
    )

    response = analyzer.analyze(AnalysisRequest(content=content))

    assert response.corrections is not None
    assert response.corrections.matches == []


def test_analyzer_retries_transient_errors() -> None:
    delays: list[float] = []
    tool = DummyTool([DummyMatch()], failures=[ConnectionError("reset"), TimeoutError("slow")])
    analyzer = LanguageToolAnalyzer(DummyManager(tool), sleep=_no_sleep(delays))

    response = analyzer.analyze(AnalysisRequest(content="Thiss is a test."))

    assert response.success
    assert len(tool.captured_texts) == 3
    assert len(delays) == 2


def test_analyzer_reports_failure_after_exhausting_retries() -> None:
    delays: list[float] = []
    failures = [ConnectionError("down") for _ in range(3)]
    tool = DummyTool([], failures=failures)
    analyzer = LanguageToolAnalyzer(DummyManager(tool), max_retries=2, sleep=_no_sleep(delays))

    response = analyzer.analyze(AnalysisRequest(content="Thiss is a test."))

    assert not response.success
    assert response.error == "down"
    assert len(tool.captured_texts) == 3
    assert len(delays) == 2


def test_retry_does_not_retry_programming_errors() -> None:
    calls: list[int] = []

    def broken() -> None:
        calls.append(1)
        raise ValueError("bug")

    try:
        _retry_with_backoff(broken, max_retries=3, sleep=lambda _: None)
    except ValueError:
        pass
    else:  # pragma: no cover
        raise AssertionError("ValueError was not propagated")
    assert len(calls) == 1


def test_retry_delay_is_capped() -> None:
    delays: list[float] = []
    failures = [ConnectionError() for _ in range(4)]

    def flaky() -> str:
        if failures:
            raise failures.pop()
        return "ok"

    result = _retry_with_backoff(
        flaky, max_retries=4, base_delay=1.0, max_delay=2.0, sleep=delays.append
    )

    assert result == "ok"
    assert len(delays) == 4
    assert all(delay <= 2.0 for delay in delays)


def test_filter_findings_handles_acronym_plurals() -> None:
    content = "Two APIs and one Thiss."
    apis = Finding(message="Spelling", offset=4, length=4)
    typo = Finding(message="Spelling", offset=17, length=5)

    kept = filter_findings([apis, typo], content, {"API"})

    assert kept == [typo]


def test_close_releases_manager() -> None:
    manager = DummyManager(DummyTool([]))
    analyzer = LanguageToolAnalyzer(manager)

    analyzer.close()

    assert manager.closed
