"""Configuration for grammar checking requests.

This module defines the defaults used when content is sent to LanguageTool:
accepted input sizes, the server to talk to, rules to disable and words to
ignore.
"""

from grammar_fixer.models import SupportedLanguage

DEFAULT_LANGUAGE = SupportedLanguage.EN

# Submitted content must fall inside these bounds (inclusive)
MIN_CONTENT_LENGTH = 5
MAX_CONTENT_LENGTH = 800

# Public LanguageTool server; ``/v2/check`` is appended by the HTTP analyzer
DEFAULT_LANGUAGETOOL_URL = "https://api.languagetool.org"

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_RETRIES = 3


# Rules that only produce noise for short pasted snippets
DEFAULT_DISABLED_RULES = {
    "WHITESPACE_RULE",
    "CONSECUTIVE_SPACES",
    "SENTENCE_WHITESPACE",
    "EN_UNPAIRED_BRACKETS",
}


# Default words to ignore (case-sensitive; can be extended via
# GRAMMAR_FIXER_IGNORED_WORDS). Casing is preserved because many entries are
# acronyms or product names.
DEFAULT_IGNORED_WORDS = {
    # --- Web / markup ---
    "HTML", "CSS", "JSON", "URL", "URLs", "API", "APIs", "SEO",

    # --- File formats ---
    "PDF", "PNG", "JPEG", "SVG", "CSV",

    # --- Product names ---
    "LanguageTool",
}
