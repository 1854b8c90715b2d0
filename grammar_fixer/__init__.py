"""Grammar checking sessions with selective, tracked corrections."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    "cli",
    "corrections",
    "language_check",
    "models",
    "report",
    "session",
]
