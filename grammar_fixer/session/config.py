from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from grammar_fixer.language_check.language_check_config import (
    DEFAULT_LANGUAGE,
    DEFAULT_LANGUAGETOOL_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT_SECONDS,
)
from grammar_fixer.models import SupportedLanguage

from .fix_service import FixService, LocalFixService, RemoteFixService

LOGGER = logging.getLogger(__name__)

BACKENDS = ("http", "library")


def _env_number(name: str, default, convert):
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return convert(raw.strip())
    except ValueError:
        LOGGER.warning("Ignoring invalid %s=%r; using %s", name, raw, default)
        return default


def _split_words(value: str | None) -> set[str]:
    if not value:
        return set()
    return {chunk.strip() for chunk in value.split(",") if chunk.strip()}


@dataclass
class SessionConfiguration:
    """Settings for one correction session.

    Environment variables (a ``.env`` file is loaded first when present):
      GRAMMAR_FIXER_LANGUAGE       Default language code (default: en)
      GRAMMAR_FIXER_BACKEND        "http" or "library" (default: http)
      LANGUAGETOOL_URL             LanguageTool server base URL
      GRAMMAR_FIXER_FIX_URL        Remote fix endpoint; fixes are local when unset
      GRAMMAR_FIXER_TIMEOUT        HTTP timeout in seconds (default: 30)
      GRAMMAR_FIXER_MAX_RETRIES    Retries for transient failures (default: 3)
      GRAMMAR_FIXER_IGNORED_WORDS  Comma-separated words to ignore
    """

    language: SupportedLanguage = DEFAULT_LANGUAGE
    backend: str = "http"
    languagetool_url: str = DEFAULT_LANGUAGETOOL_URL
    fix_url: str | None = None
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    max_retries: int = DEFAULT_MAX_RETRIES
    ignored_words: set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        self.language = SupportedLanguage.coerce(self.language)
        if self.backend not in BACKENDS:
            raise ValueError(
                f"Unknown backend {self.backend!r}; expected one of {', '.join(BACKENDS)}"
            )

    @classmethod
    def from_env(cls, dotenv_path: str | Path | None = None) -> "SessionConfiguration":
        if dotenv_path:
            load_dotenv(dotenv_path=str(dotenv_path), override=True)
        else:
            load_dotenv()

        return cls(
            language=SupportedLanguage.coerce(os.environ.get("GRAMMAR_FIXER_LANGUAGE")),
            backend=os.environ.get("GRAMMAR_FIXER_BACKEND", "http").strip().lower(),
            languagetool_url=os.environ.get("LANGUAGETOOL_URL") or DEFAULT_LANGUAGETOOL_URL,
            fix_url=os.environ.get("GRAMMAR_FIXER_FIX_URL") or None,
            timeout=_env_number("GRAMMAR_FIXER_TIMEOUT", DEFAULT_TIMEOUT_SECONDS, float),
            max_retries=_env_number("GRAMMAR_FIXER_MAX_RETRIES", DEFAULT_MAX_RETRIES, int),
            ignored_words=_split_words(os.environ.get("GRAMMAR_FIXER_IGNORED_WORDS")),
        )


def build_analyzer(config: SessionConfiguration):
    """Return the analysis oracle selected by ``config.backend``."""

    # Imported lazily so language_tool_python is only loaded when needed
    from grammar_fixer.language_check.analyzer import (
        LanguageToolAnalyzer,
        LanguageToolHTTPAnalyzer,
    )

    if config.backend == "library":
        remote = None if config.languagetool_url == DEFAULT_LANGUAGETOOL_URL else config.languagetool_url
        return LanguageToolAnalyzer(
            remote_server=remote,
            max_retries=config.max_retries,
            ignored_words=config.ignored_words,
        )
    return LanguageToolHTTPAnalyzer(
        config.languagetool_url,
        timeout=config.timeout,
        max_retries=config.max_retries,
        ignored_words=config.ignored_words,
    )


def build_fix_service(config: SessionConfiguration) -> FixService:
    if config.fix_url:
        return RemoteFixService(config.fix_url, timeout=config.timeout)
    return LocalFixService()
