"""Request and response models for the analysis oracle and the fix endpoint."""

from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import SupportedLanguage
from .finding import Finding


class DetectedLanguage(BaseModel):
    """Language the checker believes the text is written in."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    code: str = ""
    confidence: float | None = None


class LanguageData(BaseModel):
    """Language the text was checked against, as reported by the checker."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = ""
    code: str = ""
    detected_language: DetectedLanguage | None = Field(default=None, alias="detectedLanguage")

    @classmethod
    def for_language(cls, language: SupportedLanguage | str) -> "LanguageData":
        lang = SupportedLanguage.coerce(language)
        return cls(name=lang.display_name, code=lang.value)

    @property
    def label(self) -> str:
        """Best human-readable language name, preferring the detected one."""

        if self.detected_language is not None and self.detected_language.name:
            return self.detected_language.name
        return self.name or "Unknown"


class Corrections(BaseModel):
    """Findings returned by one analysis, plus language metadata."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    matches: List[Finding] = Field(default_factory=list)
    language: LanguageData = Field(default_factory=LanguageData)
    sentence_ranges: List[Tuple[int, int]] = Field(default_factory=list, alias="sentenceRanges")

    @field_validator("matches", "sentence_ranges", mode="before")
    def _none_to_list(cls, value: object) -> object:
        return [] if value is None else value


class AnalysisRequest(BaseModel):
    """Payload sent to the analysis oracle."""

    model_config = ConfigDict(extra="forbid")

    content: str
    language: SupportedLanguage = SupportedLanguage.EN

    @field_validator("language", mode="before")
    def _coerce_language(cls, value: object) -> SupportedLanguage:
        return SupportedLanguage.coerce(value)


class AnalysisResponse(BaseModel):
    """Outcome of an analysis call.

    Either ``success`` is true and ``corrections`` holds the findings, or
    ``success`` is false and ``error`` carries the checker's message (which may
    be empty when none was available).
    """

    model_config = ConfigDict(extra="ignore")

    success: bool
    message: Optional[str] = None
    corrections: Optional[Corrections] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _check_payload(self) -> "AnalysisResponse":
        if self.success and self.corrections is None:
            raise ValueError("corrections must be provided when success is true")
        return self

    @classmethod
    def ok(cls, corrections: Corrections, message: str | None = None) -> "AnalysisResponse":
        return cls(
            success=True,
            message=message or "Content analyzed successfully",
            corrections=corrections,
        )

    @classmethod
    def failed(cls, error: str | None) -> "AnalysisResponse":
        return cls(success=False, error=error)


class FixRequest(BaseModel):
    """Payload for the fix-application endpoint."""

    model_config = ConfigDict(extra="ignore")

    match: Finding
    replacement: str
    content: str


class FixResponse(BaseModel):
    """Result returned by the fix-application endpoint."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    new_content: Optional[str] = Field(default=None, alias="newContent")
    success: bool = False
    error: Optional[str] = None

    @field_validator("error", mode="before")
    def _stringify_error(cls, value: object) -> str | None:
        if value is None or value == "":
            return None
        return str(value)
