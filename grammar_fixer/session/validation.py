"""Input validation for content submitted for analysis."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from grammar_fixer.errors import ValidationError
from grammar_fixer.language_check.language_check_config import (
    DEFAULT_LANGUAGE,
    MAX_CONTENT_LENGTH,
    MIN_CONTENT_LENGTH,
)
from grammar_fixer.models import AnalysisRequest, SupportedLanguage


class ContentInput(BaseModel):
    """Form-level view of a submission, before the language is coerced."""

    model_config = ConfigDict(extra="forbid")

    content: str = Field(min_length=MIN_CONTENT_LENGTH, max_length=MAX_CONTENT_LENGTH)
    language: Optional[str] = None


_MESSAGES = {
    ("content", "string_too_short"): "Content must be at least {min_length} characters long",
    ("content", "string_too_long"): "Content must be at most {max_length} characters long",
    ("content", "string_type"): "Content is required and must be a string",
    ("content", "missing"): "Content is required and must be a string",
    ("language", "string_type"): "Language must be a string",
}


def _field_errors(exc: PydanticValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "__root__"
        template = _MESSAGES.get((field, error["type"]))
        message = template.format(**error.get("ctx", {})) if template else error["msg"]
        errors.setdefault(field, []).append(message)
    return errors


def validate_content(content: object, language: object = None) -> AnalysisRequest:
    """Validate a submission and build the request sent to the oracle.

    Unsupported languages are not an error; they are coerced to English.

    Raises:
        ValidationError: With one list of messages per offending field.
    """

    if isinstance(language, SupportedLanguage):
        language = language.value
    try:
        form = ContentInput.model_validate({"content": content, "language": language})
    except PydanticValidationError as exc:
        raise ValidationError(_field_errors(exc)) from exc
    return AnalysisRequest(content=form.content, language=form.language or DEFAULT_LANGUAGE)
