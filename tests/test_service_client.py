from __future__ import annotations

import io
import json
import urllib.error
import urllib.request
from typing import Any

import pytest

from evalbench.tui.service_client import ServiceClient, ServiceClientError


class _FakeResponse:
    def __init__(self, payload: Any):
        self._body = json.dumps(payload).encode("utf-8")

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "_FakeResponse":
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None


def _capture(monkeypatch, payload: Any) -> list[urllib.request.Request]:
    seen: list[urllib.request.Request] = []

    def fake_urlopen(request: urllib.request.Request, timeout: float = 0) -> _FakeResponse:
        seen.append(request)
        return _FakeResponse(payload)

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
    return seen


def test_update_input_puts_editor_text_to_the_session(monkeypatch) -> None:
    seen = _capture(monkeypatch, {"session_id": "abc"})
    client = ServiceClient("http://127.0.0.1:8797/")

    assert client.update_input("abc", "let x = 1;") == {"session_id": "abc"}

    request = seen[0]
    assert request.get_method() == "PUT"
    assert request.full_url == "http://127.0.0.1:8797/api/sessions/abc/input"
    assert json.loads(request.data) == {"input_text": "let x = 1;"}


def test_theme_and_about_calls_are_scoped_to_the_session(monkeypatch) -> None:
    seen = _capture(monkeypatch, {})
    client = ServiceClient("http://127.0.0.1:8797")

    client.set_theme("abc", "dark")
    client.about("abc")

    assert [(r.get_method(), r.full_url) for r in seen] == [
        ("PUT", "http://127.0.0.1:8797/api/sessions/abc/theme"),
        ("GET", "http://127.0.0.1:8797/api/sessions/abc/about"),
    ]
    assert json.loads(seen[0].data) == {"preference": "dark"}


def test_http_errors_keep_their_status_code(monkeypatch) -> None:
    def fake_urlopen(request: urllib.request.Request, timeout: float = 0) -> _FakeResponse:
        raise urllib.error.HTTPError(
            request.full_url, 409, "Conflict", {}, io.BytesIO(b'{"detail": {"message": "Evaluator is not ready"}}')
        )

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    with pytest.raises(ServiceClientError) as excinfo:
        ServiceClient("http://127.0.0.1:8797").submit("abc", "1 + 2")
    assert excinfo.value.status_code == 409
    assert "Evaluator is not ready" in str(excinfo.value)
