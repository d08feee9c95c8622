from __future__ import annotations

import json
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any


class ServiceClientError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class ServiceClient:
    base_url: str

    def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        url = f"{self.base_url.rstrip('/')}{path}"
        headers = {"Content-Type": "application/json"}
        data = None
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")

        request = urllib.request.Request(url=url, data=data, headers=headers, method=method)
        try:
            with urllib.request.urlopen(request, timeout=60) as response:
                body = response.read().decode("utf-8")
        except urllib.error.HTTPError as exc:
            detail = exc.read().decode("utf-8")
            raise ServiceClientError(f"HTTP {exc.code}: {detail}", status_code=exc.code) from exc
        except urllib.error.URLError as exc:
            raise ServiceClientError(f"Connection error: {exc}") from exc

        if not body:
            return None
        return json.loads(body)

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/health")

    def create_session(self) -> dict[str, Any]:
        return self._request("POST", "/api/sessions")

    def get_session(self, session_id: str) -> dict[str, Any]:
        return self._request("GET", f"/api/sessions/{session_id}")

    def update_input(self, session_id: str, input_text: str) -> dict[str, Any]:
        return self._request("PUT", f"/api/sessions/{session_id}/input", {"input_text": input_text})

    def submit(self, session_id: str, input_text: str | None = None) -> dict[str, Any]:
        return self._request("POST", f"/api/sessions/{session_id}/submit", {"input_text": input_text})

    def set_view_mode(self, session_id: str, view_mode: str) -> dict[str, Any]:
        return self._request("PUT", f"/api/sessions/{session_id}/view-mode", {"view_mode": view_mode})

    def set_viewport(self, session_id: str, width: int, unit: str = "columns") -> dict[str, Any]:
        return self._request("PUT", f"/api/sessions/{session_id}/viewport", {"width": width, "unit": unit})

    def overlay(self, session_id: str, action: str, region: str | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"action": action}
        if region is not None:
            payload["region"] = region
        return self._request("POST", f"/api/sessions/{session_id}/overlay", payload)

    def set_theme(self, session_id: str, preference: str) -> dict[str, Any]:
        return self._request("PUT", f"/api/sessions/{session_id}/theme", {"preference": preference})

    def about(self, session_id: str) -> dict[str, Any]:
        return self._request("GET", f"/api/sessions/{session_id}/about")
