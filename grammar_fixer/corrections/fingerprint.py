"""Identity keys used to remember which findings have been acted upon."""

from __future__ import annotations

from grammar_fixer.models import Finding

# Only the start of the message takes part in the key, so two findings with
# the same span and message prefix are treated as the same issue.
MESSAGE_PREFIX_LENGTH = 20


def fingerprint(finding: Finding) -> str:
    """Return ``"<offset>-<length>-<first 20 chars of message>"``."""

    return f"{finding.offset}-{finding.length}-{finding.message[:MESSAGE_PREFIX_LENGTH]}"
