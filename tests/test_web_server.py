import webbrowser

from evalbench import web_server


def test_browser_opens_workbench_page_once_api_is_ready(monkeypatch) -> None:
    waited: list[str] = []
    opened: list[str] = []
    monkeypatch.setattr(web_server, "_wait_for_api_ready", lambda base_url, timeout_seconds: waited.append(base_url))
    monkeypatch.setattr(webbrowser, "open", lambda url: opened.append(url) or True)

    assert web_server._open_browser_when_ready("http://127.0.0.1:8798/") is True
    assert waited == ["http://127.0.0.1:8798/"]
    assert opened == ["http://127.0.0.1:8798/web"]


def test_browser_is_not_opened_when_api_never_answers(monkeypatch) -> None:
    opened: list[str] = []

    def never_ready(base_url: str, timeout_seconds: float) -> None:
        raise RuntimeError(f"Timed out waiting for API readiness at {base_url}/health")

    monkeypatch.setattr(web_server, "_wait_for_api_ready", never_ready)
    monkeypatch.setattr(webbrowser, "open", lambda url: opened.append(url) or True)

    assert web_server._open_browser_when_ready("http://127.0.0.1:8798", timeout_seconds=0.1) is False
    assert opened == []
