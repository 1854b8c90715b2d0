"""Correction engine: apply replacements, classify, group and track findings."""

from __future__ import annotations

from .applicator import apply_replacement, check_span
from .classifier import Classification, classify, is_correction
from .fingerprint import MESSAGE_PREFIX_LENGTH, fingerprint
from .grouping import group_by_sentence
from .tracker import ResolutionTracker

__all__ = [
    "Classification",
    "MESSAGE_PREFIX_LENGTH",
    "ResolutionTracker",
    "apply_replacement",
    "check_span",
    "classify",
    "fingerprint",
    "group_by_sentence",
    "is_correction",
]
