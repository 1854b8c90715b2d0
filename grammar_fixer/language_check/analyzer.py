"""Grammar analysis backed by LanguageTool.

Two analyzers satisfy the :class:`Analyzer` protocol used by the session
controller:

* :class:`LanguageToolHTTPAnalyzer` posts the text to a LanguageTool
  ``/v2/check`` endpoint (the public API by default) and validates the JSON
  payload directly into :class:`~grammar_fixer.models.Corrections`.
* :class:`LanguageToolAnalyzer` drives ``language_tool_python`` tools built by
  :class:`LanguageToolManager` and converts their ``Match`` objects.

Both retry transient connection failures with exponential backoff and drop
findings whose flagged text is on the ignored-words list.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Any, Callable, Iterable, Protocol

import requests
from language_tool_python.utils import LanguageToolError
from pydantic import ValidationError as PydanticValidationError

from grammar_fixer.models import (
    AnalysisRequest,
    AnalysisResponse,
    Corrections,
    Finding,
    FindingContext,
    LanguageData,
)

from .language_check_config import (
    DEFAULT_DISABLED_RULES,
    DEFAULT_IGNORED_WORDS,
    DEFAULT_LANGUAGETOOL_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT_SECONDS,
)
from .language_tool_manager import LanguageToolManager

LOGGER = logging.getLogger(__name__)


# Transient errors that should trigger a retry
TRANSIENT_ERRORS = (
    ConnectionError,
    TimeoutError,
    requests.ConnectionError,
    requests.Timeout,
    # language_tool_python wraps connection-level failures in LanguageToolError
    LanguageToolError,
)


class Analyzer(Protocol):
    """Shared contract for grammar analysis oracles."""

    def analyze(self, request: AnalysisRequest) -> AnalysisResponse:
        """Check ``request.content`` and return the findings or an error."""
        ...


def _retry_with_backoff(
    func: Callable[..., Any],
    *args: Any,
    max_retries: int = DEFAULT_MAX_RETRIES,
    base_delay: float = 1.0,
    max_delay: float = 10.0,
    sleep: Callable[[float], None] = time.sleep,
) -> Any:
    """Execute ``func(*args)`` with exponential backoff on transient errors.

    Args:
            func: The function to call (e.g., tool.check)
            args: Positional arguments passed to func
            max_retries: Maximum number of retry attempts (total attempts = max_retries + 1)
            base_delay: Initial delay in seconds
            max_delay: Maximum delay in seconds
            sleep: Function used to wait between attempts

    Raises:
            The last exception if all retries fail
    """

    for attempt in range(max_retries + 1):
        try:
            return func(*args)
        except TRANSIENT_ERRORS as exc:
            if attempt >= max_retries:
                LOGGER.error(
                    "Grammar check failed after %d attempt(s): %s",
                    attempt + 1,
                    exc,
                )
                raise

            delay = base_delay * (2**attempt)
            # Add a small random jitter to avoid a thundering herd
            delay = min(delay * random.uniform(0.75, 1.25), max_delay)

            LOGGER.warning(
                "Grammar check attempt %d failed (transient error: %s); "
                "retrying in %.1f second(s)...",
                attempt + 1,
                type(exc).__name__,
                delay,
            )
            sleep(delay)

    raise RuntimeError("Retry logic completed without returning or raising")


def _is_ignored(text: str, words_to_ignore: set[str]) -> bool:
    original_text = text.strip()
    if not original_text:
        return False
    letters = "".join(ch for ch in original_text if ch.isalpha())
    if letters and (letters.isupper() or letters.rstrip("s").isupper()):
        # acronym forms: match with or without a plural "s"
        return letters in words_to_ignore or letters.rstrip("s") in words_to_ignore
    return original_text in words_to_ignore


def filter_findings(
    findings: Iterable[Finding], content: str, words_to_ignore: set[str]
) -> list[Finding]:
    """Drop findings whose flagged text is configured to be ignored.

    Matching is case-sensitive because many entries are acronyms or proper
    nouns.
    """

    if not words_to_ignore:
        return list(findings)
    return [
        finding
        for finding in findings
        if not _is_ignored(finding.matched_text(content), words_to_ignore)
    ]


def _safe_int(match: object, attribute: str, rule_id: str) -> int:
    # LanguageTool or mocks may provide None or unexpected values
    try:
        return max(0, int(getattr(match, attribute, 0) or 0))
    except (TypeError, ValueError):
        LOGGER.warning("Invalid %s for rule %s; defaulting to 0", attribute, rule_id)
        return 0


def make_finding(match: object) -> Finding:
    """Convert a ``language_tool_python`` ``Match`` into a :class:`Finding`."""

    rule_id = getattr(match, "ruleId", "UNKNOWN") or "UNKNOWN"
    length = _safe_int(match, "errorLength", rule_id)
    context = getattr(match, "context", "") or ""
    return Finding(
        message=str(getattr(match, "message", "") or "").strip(),
        short_message=str(getattr(match, "shortMessage", "") or ""),
        replacements=list(getattr(match, "replacements", []) or []),
        offset=_safe_int(match, "offset", rule_id),
        length=length,
        context=FindingContext(
            text=context,
            offset=_safe_int(match, "offsetInContext", rule_id),
            length=length,
        ),
        rule_id=rule_id,
        issue_type=getattr(match, "ruleIssueType", "") or "",
    )


def _collect_ignored_words(extra_words: Iterable[str] | None) -> set[str]:
    """Return the union of default ignored words and any extras."""
    words = set(DEFAULT_IGNORED_WORDS)
    if extra_words:
        words.update(extra_words)
    return words


class LanguageToolHTTPAnalyzer:
    """Analyzer that talks to a LanguageTool HTTP server with ``requests``."""

    RATE_LIMIT_MESSAGE = (
        "You have exceeded the rate limit for the free LanguageTool API. "
        "Please try again later."
    )

    def __init__(
        self,
        base_url: str = DEFAULT_LANGUAGETOOL_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_delay: float = 1.0,
        disabled_rules: Iterable[str] | None = None,
        ignored_words: Iterable[str] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.check_url = base_url.rstrip("/") + "/v2/check"
        self.timeout = timeout
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.disabled_rules = set(DEFAULT_DISABLED_RULES if disabled_rules is None else disabled_rules)
        self.words_to_ignore = _collect_ignored_words(ignored_words)
        self._sleep = sleep

    def _post(self, data: dict[str, str]) -> requests.Response:
        return requests.post(self.check_url, data=data, timeout=self.timeout)

    def analyze(self, request: AnalysisRequest) -> AnalysisResponse:
        data = {"text": request.content, "language": request.language.value}
        if self.disabled_rules:
            data["disabledRules"] = ",".join(sorted(self.disabled_rules))

        try:
            response = _retry_with_backoff(
                self._post,
                data,
                max_retries=self.max_retries,
                base_delay=self.base_delay,
                sleep=self._sleep,
            )
        except TRANSIENT_ERRORS as exc:
            LOGGER.exception("LanguageTool request to %s failed", self.check_url)
            return AnalysisResponse.failed(f"Failed to connect to LanguageTool: {exc}")

        if response.status_code == 426:
            return AnalysisResponse.failed(self.RATE_LIMIT_MESSAGE)
        if response.status_code >= 400:
            error = self._error_message(response)
            LOGGER.error(
                "LanguageTool returned HTTP %d: %s", response.status_code, error or "<no body>"
            )
            return AnalysisResponse.failed(error)

        try:
            corrections = Corrections.model_validate(response.json())
        except (ValueError, PydanticValidationError):
            LOGGER.exception("Unexpected response payload from %s", self.check_url)
            return AnalysisResponse.failed("Unexpected response from LanguageTool")

        corrections.matches = filter_findings(
            corrections.matches, request.content, self.words_to_ignore
        )
        LOGGER.info(
            "LanguageTool reported %d finding(s) for %d character(s) (%s)",
            len(corrections.matches),
            len(request.content),
            request.language.value,
        )
        return AnalysisResponse.ok(corrections)

    @staticmethod
    def _error_message(response: requests.Response) -> str | None:
        try:
            payload = response.json()
        except ValueError:
            text = (response.text or "").strip()
            return text or None
        if isinstance(payload, dict) and payload.get("message"):
            return str(payload["message"])
        return None


class LanguageToolAnalyzer:
    """Analyzer that drives ``language_tool_python`` tools."""

    def __init__(
        self,
        manager: LanguageToolManager | None = None,
        *,
        remote_server: str | None = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_delay: float = 1.0,
        ignored_words: Iterable[str] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.words_to_ignore = _collect_ignored_words(ignored_words)
        self.manager = manager or LanguageToolManager(
            ignored_words=self.words_to_ignore,
            disabled_rules=DEFAULT_DISABLED_RULES,
            remote_server=remote_server,
            logger=LOGGER,
        )
        self.max_retries = max_retries
        self.base_delay = base_delay
        self._sleep = sleep

    def analyze(self, request: AnalysisRequest) -> AnalysisResponse:
        language = request.language.value
        try:
            tool = self.manager.get_tool(language)
            matches = _retry_with_backoff(
                tool.check,
                request.content,
                max_retries=self.max_retries,
                base_delay=self.base_delay,
                sleep=self._sleep,
            )
        except TRANSIENT_ERRORS as exc:
            LOGGER.exception("Grammar check failed (language: %s) after all retries", language)
            return AnalysisResponse.failed(str(exc) or None)

        findings = filter_findings(
            (make_finding(match) for match in matches or []),
            request.content,
            self.words_to_ignore,
        )
        LOGGER.info("LanguageTool reported %d finding(s) (%s)", len(findings), language)
        return AnalysisResponse.ok(
            Corrections(matches=findings, language=LanguageData.for_language(request.language))
        )

    def close(self) -> None:
        self.manager.close()
