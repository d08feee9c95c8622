from __future__ import annotations

from typing import Any


THEME_CYCLE = ("light", "dark", "system")


def _textual_theme(resolved: str | None) -> str:
    return "textual-light" if resolved == "light" else "textual-dark"


def _next_preference(current: str | None) -> str:
    try:
        index = THEME_CYCLE.index(str(current))
    except ValueError:
        return THEME_CYCLE[0]
    return THEME_CYCLE[(index + 1) % len(THEME_CYCLE)]


def _status_line(workbench: dict[str, Any], theme: dict[str, Any] | None = None) -> str:
    binding = workbench.get("binding") or {}
    status = str(binding.get("status") or "unready")
    if status == "unready":
        text = "Loading interpreter..."
    elif status == "unavailable":
        text = f"Interpreter unavailable: {binding.get('reason') or 'failed to load'}"
    else:
        text = f"Ready | {workbench.get('phase', 'idle')}"
        completed = int(workbench.get("completed_submission_id") or 0)
        if completed:
            text += f" | run #{completed}"
    if theme:
        text += f" | theme: {theme.get('preference')} ({theme.get('resolved')})"
    return text
