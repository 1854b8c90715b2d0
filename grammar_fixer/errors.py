"""Exception hierarchy shared by the correction engine and the session layer."""

from __future__ import annotations


class GrammarFixerError(Exception):
    """Base class for every recoverable failure raised by grammar_fixer."""


class ValidationError(GrammarFixerError):
    """Raised when submitted content fails input validation.

    Problems are reported per field so callers can show each message next to
    the input it refers to, e.g. ``{"content": ["Content must be at least 5
    characters long"]}``.
    """

    def __init__(self, field_errors: dict[str, list[str]]) -> None:
        self.field_errors = {name: list(messages) for name, messages in field_errors.items()}
        summary = "; ".join(
            f"{name}: {message}"
            for name, messages in self.field_errors.items()
            for message in messages
        )
        super().__init__(summary or "Invalid input")


class OracleError(GrammarFixerError):
    """Raised when the grammar checker fails or reports ``success: false``."""

    DEFAULT_MESSAGE = "Failed to analyze content"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.DEFAULT_MESSAGE)


class OffsetOutOfRange(GrammarFixerError):
    """Raised when a finding's span does not fit inside the current content."""

    def __init__(self, offset: int, length: int, content_length: int) -> None:
        super().__init__(
            f"Span {offset}:{offset + length} is outside content of length {content_length}"
        )
        self.offset = offset
        self.length = length
        self.content_length = content_length


class ApplicationError(GrammarFixerError):
    """Raised when a replacement could not be applied to the content buffer."""


class StaleSubmission(GrammarFixerError):
    """Raised when an analysis finishes after a newer submission has started."""

    def __init__(self, generation: int, current: int) -> None:
        super().__init__(
            f"Discarded analysis #{generation}; submission #{current} superseded it"
        )
        self.generation = generation
        self.current = current
