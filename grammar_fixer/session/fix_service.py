"""Services that apply a chosen replacement to the content buffer.

:class:`LocalFixService` runs the applicator in-process.
:class:`RemoteFixService` posts the same request to an HTTP endpoint that
must honour the applicator contract and returns ``{"newContent", "success"}``.
"""

from __future__ import annotations

import logging
from typing import Protocol

import requests
from pydantic import ValidationError as PydanticValidationError

from grammar_fixer.corrections import apply_replacement, check_span
from grammar_fixer.errors import ApplicationError
from grammar_fixer.language_check.language_check_config import DEFAULT_TIMEOUT_SECONDS
from grammar_fixer.models import FixRequest, FixResponse

LOGGER = logging.getLogger(__name__)


class FixService(Protocol):
    """Shared contract for fix-application backends."""

    def apply(self, request: FixRequest) -> FixResponse:
        """Return the content with ``request.replacement`` applied."""
        ...


class LocalFixService:
    """Apply replacements locally with :func:`apply_replacement`."""

    def apply(self, request: FixRequest) -> FixResponse:
        new_content = apply_replacement(request.content, request.match, request.replacement)
        return FixResponse(new_content=new_content, success=True)


class RemoteFixService:
    """Apply replacements through a remote fix-application endpoint."""

    def __init__(self, url: str, *, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self.url = url
        self.timeout = timeout

    def apply(self, request: FixRequest) -> FixResponse:
        # Reject stale spans before making a network call
        check_span(request.content, request.match)

        payload = request.model_dump(mode="json", by_alias=True)
        try:
            response = requests.post(self.url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            LOGGER.exception("Fix request to %s failed", self.url)
            raise ApplicationError(f"Failed to insert the suggestion: {exc}") from exc

        if response.status_code >= 400:
            LOGGER.error("Fix endpoint %s returned HTTP %d", self.url, response.status_code)
            raise ApplicationError(
                f"Failed to insert the suggestion (HTTP {response.status_code})"
            )

        try:
            result = FixResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            raise ApplicationError("Fix endpoint returned an unexpected payload") from exc

        if not result.success:
            raise ApplicationError(result.error or "Failed to insert the suggestion")
        if result.new_content is None:
            LOGGER.error("Fix endpoint %s reported success without newContent", self.url)
            raise ApplicationError("Fix endpoint returned no content")
        return result
