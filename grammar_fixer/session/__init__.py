"""Session layer: validation, fix services, configuration and the controller."""

from __future__ import annotations

from .config import SessionConfiguration, build_analyzer, build_fix_service
from .controller import SessionController, SessionSnapshot
from .fix_service import FixService, LocalFixService, RemoteFixService
from .validation import validate_content

__all__ = [
    "FixService",
    "LocalFixService",
    "RemoteFixService",
    "SessionConfiguration",
    "SessionController",
    "SessionSnapshot",
    "build_analyzer",
    "build_fix_service",
    "validate_content",
]
