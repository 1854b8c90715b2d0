"""Session controller that owns the content buffer and resolution state.

The controller runs the whole correction loop::

    submit -> analyse -> classify -> render -> apply fix -> re-classify

It is the only object that mutates the content buffer or the
:class:`ResolutionTracker`. The applicator, classifier and grouper are pure
functions that receive state from here.

Fixes are applied without re-analysing the content. Findings located after
an edited span keep their original offsets, so they may point at the wrong
characters (or fall outside the buffer) until the user submits again.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from grammar_fixer.corrections import (
    Classification,
    ResolutionTracker,
    classify,
    fingerprint,
    group_by_sentence,
)
from grammar_fixer.errors import (
    ApplicationError,
    GrammarFixerError,
    OffsetOutOfRange,
    OracleError,
    StaleSubmission,
)
from grammar_fixer.models import (
    Corrections,
    Finding,
    FixRequest,
    LanguageData,
    SessionState,
    SupportedLanguage,
)

from .fix_service import FixService, LocalFixService
from .validation import validate_content

if TYPE_CHECKING:  # pragma: no cover - typing only
    from grammar_fixer.language_check.analyzer import Analyzer

LOGGER = logging.getLogger(__name__)


@dataclass
class SessionSnapshot:
    """Everything needed to render the current state of a session."""

    content: str
    state: SessionState
    classification: Classification = field(default_factory=Classification)
    language: LanguageData | None = None
    analysed_content: str | None = None
    sentence_ranges: list[tuple[int, int]] = field(default_factory=list)
    error: str | None = None

    @property
    def total_findings(self) -> int:
        return len(self.classification)


class SessionController:
    """Orchestrates one user's correction session."""

    def __init__(
        self,
        analyzer: "Analyzer",
        fix_service: FixService | None = None,
        *,
        content: str = "",
    ) -> None:
        self._analyzer = analyzer
        self._fix_service = fix_service or LocalFixService()
        self._content = content
        self._tracker = ResolutionTracker()
        self._findings: tuple[Finding, ...] = ()
        self._language: LanguageData | None = None
        self._sentence_ranges: list[tuple[int, int]] = []
        self._analysed_content: str | None = None
        self._state = SessionState.IDLE
        self._error: GrammarFixerError | None = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def content(self) -> str:
        return self._content

    @property
    def findings(self) -> tuple[Finding, ...]:
        return self._findings

    @property
    def error(self) -> GrammarFixerError | None:
        return self._error

    @property
    def language(self) -> LanguageData | None:
        return self._language

    def is_resolved(self, finding: Finding) -> bool:
        return self._tracker.is_resolved(fingerprint(finding))

    def edit(self, content: str) -> None:
        """Replace the buffer with user-typed text.

        The current findings stay attached to the analysed snapshot; they are
        only replaced by the next successful submission.
        """

        self._content = content

    def submit(
        self,
        content: str | None = None,
        language: SupportedLanguage | str | None = None,
    ) -> Classification:
        """Analyse ``content`` (or the current buffer) and classify the findings.

        Raises:
            ValidationError: The content is outside the accepted length; the
                session is left exactly as it was.
            OracleError: The checker failed; the session moves to FAILED and
                the buffer and tracker are untouched.
            StaleSubmission: A newer submission started while this one was in
                flight; its result is discarded.
        """

        text = self._content if content is None else content
        try:
            request = validate_content(text, language)
        except GrammarFixerError as exc:
            self._error = exc
            raise

        with self._lock:
            self._generation += 1
            generation = self._generation
            self._content = text
            self._state = SessionState.SUBMITTING
            self._error = None
        LOGGER.info(
            "Submitting %d character(s) for analysis #%d (%s)",
            len(request.content),
            generation,
            request.language.value,
        )

        cause: Exception | None = None
        error: str | None = None
        corrections: Corrections | None = None
        try:
            response = self._analyzer.analyze(request)
        except Exception as exc:
            LOGGER.exception("Analysis #%d raised an unexpected error", generation)
            cause = exc
        else:
            if response.success:
                corrections = response.corrections
            else:
                error = response.error

        with self._lock:
            if generation != self._generation:
                LOGGER.warning(
                    "Discarding analysis #%d; submission #%d is newer",
                    generation,
                    self._generation,
                )
                raise StaleSubmission(generation, self._generation)

            if corrections is None:
                failure = OracleError(error)
                LOGGER.error("Analysis #%d failed: %s", generation, failure)
                self._state = SessionState.FAILED
                self._error = failure
                self._findings = ()
                self._language = None
                self._sentence_ranges = []
                raise failure from cause

            self._tracker.reset()
            self._findings = tuple(corrections.matches)
            self._language = corrections.language
            self._sentence_ranges = list(corrections.sentence_ranges)
            self._analysed_content = request.content
            self._state = SessionState.READY

        for finding in self._findings:
            if not finding.fits(request.content):
                LOGGER.warning(
                    "Finding %r spans %d:%d beyond content length %d",
                    finding.message,
                    finding.offset,
                    finding.end,
                    len(request.content),
                )
        LOGGER.info("Analysis #%d ready with %d finding(s)", generation, len(self._findings))
        return self.classify()

    def apply_fix(self, finding: Finding, replacement: str | None = None) -> str:
        """Apply ``replacement`` for ``finding`` and mark it resolved.

        When ``replacement`` is omitted the finding must have exactly one
        candidate. Returns the new buffer.

        Raises:
            OffsetOutOfRange: The finding no longer fits the buffer.
            ApplicationError: No analysis is ready, the finding is unknown or
                already resolved, or the fix service failed.
        """

        if self._state is not SessionState.READY:
            raise self._reject(ApplicationError("No analysis is ready; submit content first"))
        if finding not in self._findings:
            raise self._reject(ApplicationError("Finding does not belong to the current analysis"))
        key = fingerprint(finding)
        if self._tracker.is_resolved(key):
            raise self._reject(ApplicationError(f"Finding {key!r} has already been applied"))
        if replacement is None:
            if len(finding.replacements) != 1:
                raise self._reject(
                    ApplicationError("Choose one of the suggested replacements")
                )
            replacement = finding.replacements[0]

        generation = self._generation
        request = FixRequest(match=finding, replacement=replacement, content=self._content)
        try:
            response = self._fix_service.apply(request)
        except OffsetOutOfRange as exc:
            LOGGER.warning("Cannot apply fix %r: %s", key, exc)
            raise self._reject(exc)
        except ApplicationError as exc:
            LOGGER.error("Fix service failed for %r: %s", key, exc)
            raise self._reject(exc)
        except Exception as exc:
            LOGGER.exception("Fix service raised an unexpected error for %r", key)
            raise self._reject(ApplicationError("Failed to insert the suggestion")) from exc
        if response.new_content is None:
            raise self._reject(ApplicationError("Fix service returned no content"))

        with self._lock:
            if generation != self._generation:
                raise self._reject(
                    ApplicationError("A newer analysis started; the fix was discarded")
                )
            self._content = response.new_content
            self._tracker.mark_resolved(key)
            self._error = None
        LOGGER.info("Applied %r -> %r (%s)", finding.matched_text(request.content), replacement, key)
        return self._content

    def _reject(self, exc: GrammarFixerError) -> GrammarFixerError:
        self._error = exc
        return exc

    def classify(self) -> Classification:
        """Re-classify the current findings against the tracker."""

        if self._state is not SessionState.READY:
            return Classification()
        return classify(self._findings, self._tracker)

    def groups(self) -> tuple[dict[str, list[Finding]], dict[str, list[Finding]]]:
        """Return (correction groups, suggestion groups) keyed by sentence."""

        classification = self.classify()
        return (
            group_by_sentence(classification.corrections),
            group_by_sentence(classification.suggestions),
        )

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            content=self._content,
            state=self._state,
            classification=self.classify(),
            language=self._language,
            analysed_content=self._analysed_content,
            sentence_ranges=list(self._sentence_ranges),
            error=str(self._error) if self._error is not None else None,
        )

    def close(self) -> None:
        """Release resources held by the analyzer, if it has any."""

        if hasattr(self._analyzer, "close"):
            self._analyzer.close()
