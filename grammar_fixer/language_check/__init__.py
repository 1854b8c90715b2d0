"""Language check package exports.

This package exposes the grammar-checking oracles so callers can import from
``grammar_fixer.language_check``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    # Only evaluated by type checkers
    from .analyzer import (
        Analyzer,
        LanguageToolAnalyzer,
        LanguageToolHTTPAnalyzer,
        filter_findings,
        make_finding,
    )
    from .language_check_config import DEFAULT_DISABLED_RULES, DEFAULT_IGNORED_WORDS
    from .language_tool_manager import LanguageToolManager

__all__ = [
    "Analyzer",
    "LanguageToolAnalyzer",
    "LanguageToolHTTPAnalyzer",
    "LanguageToolManager",
    "filter_findings",
    "make_finding",
    "DEFAULT_DISABLED_RULES",
    "DEFAULT_IGNORED_WORDS",
]

_LAZY_EXPORTS = {
    # attribute -> (module, attribute)
    "Analyzer": (".analyzer", "Analyzer"),
    "LanguageToolAnalyzer": (".analyzer", "LanguageToolAnalyzer"),
    "LanguageToolHTTPAnalyzer": (".analyzer", "LanguageToolHTTPAnalyzer"),
    "filter_findings": (".analyzer", "filter_findings"),
    "make_finding": (".analyzer", "make_finding"),
    "LanguageToolManager": (".language_tool_manager", "LanguageToolManager"),
    "DEFAULT_DISABLED_RULES": (".language_check_config", "DEFAULT_DISABLED_RULES"),
    "DEFAULT_IGNORED_WORDS": (".language_check_config", "DEFAULT_IGNORED_WORDS"),
}


def __getattr__(name: str):
    """Lazily import and return exported attributes.

    This keeps ``language_tool_python`` and ``requests`` out of the import
    path until an analyzer is actually needed.
    """

    if name in _LAZY_EXPORTS:
        module_name, attr = _LAZY_EXPORTS[name]
        from importlib import import_module

        mod = import_module(f"grammar_fixer.language_check{module_name}")
        value = getattr(mod, attr)
        globals()[name] = value
        return value
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_LAZY_EXPORTS.keys()))
