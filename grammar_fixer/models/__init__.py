"""Public model exports for the project.

Import models from here, e.g.
``from grammar_fixer.models import Finding, SupportedLanguage``.
"""

from __future__ import annotations

from .analysis import (
    AnalysisRequest,
    AnalysisResponse,
    Corrections,
    DetectedLanguage,
    FixRequest,
    FixResponse,
    LanguageData,
)
from .enums import SessionState, SupportedLanguage
from .finding import Finding, FindingContext

__all__ = [
    "AnalysisRequest",
    "AnalysisResponse",
    "Corrections",
    "DetectedLanguage",
    "Finding",
    "FindingContext",
    "FixRequest",
    "FixResponse",
    "LanguageData",
    "SessionState",
    "SupportedLanguage",
]
