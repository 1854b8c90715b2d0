"""LanguageTool setup helpers.

This module centralises LanguageTool instantiation so that custom spellings,
disabled rules and the choice between a local Java server and a remote
server stay in one place.
"""

from __future__ import annotations

from typing import Iterable, Any
import logging

import language_tool_python

# Default configuration for a locally started LanguageTool server. Remote
# servers do not accept a config, so it is only passed for local tools.
_DEFAULT_CONFIG = {
    "requestLimitPeriodInSeconds": 60,
    "maxCheckTimeMillis": 30000,
}


class LanguageToolManager:
    """Factory class responsible for configuring LanguageTool instances.

    Tools are cached per language code so repeated analyses in one session
    reuse the same server connection.
    """

    def __init__(
        self,
        *,
        ignored_words: Iterable[str] | None = None,
        disabled_rules: Iterable[str] | None = None,
        remote_server: str | None = None,
        config: dict[str, Any] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.remote_server = remote_server
        self.logger = logger or logging.getLogger(__name__)
        self.config = dict(config) if config is not None else dict(_DEFAULT_CONFIG)
        self.disabled_rules = set(disabled_rules or [])
        self._ignored_words = self._prepare_ignored_words(ignored_words)
        self._spellings_registered = False
        self._tools: dict[str, Any] = {}

    @staticmethod
    def _prepare_ignored_words(words: Iterable[str] | None) -> tuple[str, ...]:
        if not words:
            return tuple()
        cleaned = {word.strip() for word in words if word and word.strip()}
        return tuple(sorted(cleaned))

    def _prepare_new_spellings(self) -> list[str] | None:
        # Custom spellings are written to the local server's dictionary once
        if not self._ignored_words or self.remote_server or self._spellings_registered:
            return None
        self._spellings_registered = True
        self.logger.info(
            "Registering %d custom spellings with LanguageTool",
            len(self._ignored_words),
        )
        return list(self._ignored_words)

    def build_tool(self, language: str) -> Any:
        """Build a LanguageTool instance for ``language``."""

        kwargs: dict[str, Any] = {}
        if self.remote_server:
            kwargs["remote_server"] = self.remote_server
        elif self.config:
            kwargs["config"] = self.config
        new_spellings = self._prepare_new_spellings()
        if new_spellings:
            kwargs["newSpellings"] = new_spellings
            kwargs["new_spellings_persist"] = False

        tool = language_tool_python.LanguageTool(language, **kwargs)
        if self.disabled_rules:
            tool.disabled_rules = set(self.disabled_rules)
        self.logger.info(
            "Created LanguageTool for language: %s (%s)",
            language,
            self.remote_server or "local server",
        )
        return tool

    def get_tool(self, language: str) -> Any:
        """Return the cached tool for ``language``, building it on first use."""

        tool = self._tools.get(language)
        if tool is None:
            tool = self.build_tool(language)
            self._tools[language] = tool
        return tool

    def close(self) -> None:
        """Close every tool built by this manager."""

        for tool in self._tools.values():
            if hasattr(tool, "close"):
                tool.close()
        self._tools.clear()
