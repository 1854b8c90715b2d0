"""Enumerations used by the finding and analysis models."""

from __future__ import annotations

from enum import Enum


class SupportedLanguage(str, Enum):
    """Languages the grammar checker is asked to analyse.

    Values are the LanguageTool language codes sent with each request. Any
    other value is coerced to :attr:`EN` before the checker is called.
    """

    EN = "en"
    DE = "de"
    FR = "fr"
    ES = "es"
    IT = "it"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]

    @classmethod
    def coerce(cls, value: object) -> "SupportedLanguage":
        """Return the matching language, falling back to English."""

        if isinstance(value, SupportedLanguage):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.EN


_DISPLAY_NAMES = {
    SupportedLanguage.EN: "English",
    SupportedLanguage.DE: "German",
    SupportedLanguage.FR: "French",
    SupportedLanguage.ES: "Spanish",
    SupportedLanguage.IT: "Italian",
}


class SessionState(str, Enum):
    """Lifecycle of a correction session.

    IDLE -> SUBMITTING -> READY | FAILED, and back to SUBMITTING on every new
    submission.
    """

    IDLE = "idle"
    SUBMITTING = "submitting"
    READY = "ready"
    FAILED = "failed"

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]
