from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from grammar_fixer.errors import ApplicationError, OffsetOutOfRange
from grammar_fixer.models import Finding, FixRequest
from grammar_fixer.session.fix_service import LocalFixService, RemoteFixService

FINDING = Finding(message="Agreement", offset=4, length=4, replacements=["doesn't"])


def _request(content: str = "She dont like apples.") -> FixRequest:
    return FixRequest(match=FINDING, replacement="doesn't", content=content)


def _response(status_code: int = 200, payload: object = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    return response


def test_local_service_applies_replacement() -> None:
    result = LocalFixService().apply(_request())
    assert result.success
    assert result.new_content == "She doesn't like apples."


def test_remote_service_posts_wire_payload() -> None:
    service = RemoteFixService("https://fix.example.org/api/fix", timeout=3.0)
    payload = {"newContent": "She doesn't like apples.", "success": True}

    with patch("requests.post", return_value=_response(payload=payload)) as mock_post:
        result = service.apply(_request())

    assert result.new_content == "She doesn't like apples."
    _, kwargs = mock_post.call_args
    assert kwargs["timeout"] == 3.0
    assert kwargs["json"]["replacement"] == "doesn't"
    assert kwargs["json"]["content"] == "She dont like apples."
    assert kwargs["json"]["match"]["offset"] == 4
    assert kwargs["json"]["match"]["shortMessage"] == ""


def test_remote_service_rejects_stale_span_without_calling_endpoint() -> None:
    service = RemoteFixService("https://fix.example.org/api/fix")

    with patch("requests.post") as mock_post:
        with pytest.raises(OffsetOutOfRange):
            service.apply(_request(content="She"))

    mock_post.assert_not_called()


@pytest.mark.parametrize(
    "outcome",
    [
        requests.ConnectionError("refused"),
        _response(status_code=500, payload={}),
        _response(payload={"unexpected": True}),
        _response(payload={"newContent": "", "success": False, "error": "Nope"}),
        _response(payload={"success": True}),
    ],
)
def test_remote_service_failures_raise_application_error(outcome) -> None:
    service = RemoteFixService("https://fix.example.org/api/fix")
    kwargs = {"side_effect": outcome} if isinstance(outcome, Exception) else {"return_value": outcome}

    with patch("requests.post", **kwargs):
        with pytest.raises(ApplicationError):
            service.apply(_request())
