from pathlib import Path

import pytest

from evalbench.core.config import Settings
from evalbench.core.models import OverlayAction, OverlayRegion, ResolvedTheme, ThemePreference
from evalbench.runtime.binding import EvaluatorBinding
from evalbench.runtime.sessions import SessionManager, UnknownSessionError
from evalbench.runtime.theme import ThemeStore


def _build_manager(tmp_path: Path, max_sessions: int = 256) -> SessionManager:
    settings = Settings(
        _env_file=None,
        EVALBENCH_STATE_DIR=str(tmp_path / "state"),
        EVALBENCH_MAX_SESSIONS=max_sessions,
    )
    return SessionManager(settings, EvaluatorBinding.ready(str.upper), ThemeStore.from_settings(settings))


def test_sessions_are_independent(tmp_path: Path) -> None:
    manager = _build_manager(tmp_path)
    first = manager.create()
    second = manager.create()

    first.workbench.set_input("abc")
    first.workbench.submit()
    first.apply_overlay(OverlayAction.OPEN)

    assert manager.get(first.session_id).snapshot().workbench.result_text == "ABC"
    assert manager.get(second.session_id).snapshot().workbench.result_text == ""
    assert second.snapshot().overlay.visible is False


def test_oldest_session_is_evicted_past_the_limit(tmp_path: Path) -> None:
    manager = _build_manager(tmp_path, max_sessions=2)
    first = manager.create()
    second = manager.create()
    manager.get(first.session_id)
    third = manager.create()

    assert len(manager) == 2
    manager.get(first.session_id)
    manager.get(third.session_id)
    with pytest.raises(UnknownSessionError):
        manager.get(second.session_id)


def test_overlay_click_requires_region(tmp_path: Path) -> None:
    session = _build_manager(tmp_path).create()
    session.apply_overlay(OverlayAction.OPEN)
    with pytest.raises(ValueError):
        session.apply_overlay(OverlayAction.CLICK)
    session.apply_overlay(OverlayAction.CLICK, OverlayRegion.CONTENT)
    assert session.snapshot().overlay.visible is True


def test_system_appearance_is_kept_per_session(tmp_path: Path) -> None:
    manager = _build_manager(tmp_path)
    dark_client = manager.create()
    light_client = manager.create()

    dark_client.set_system_appearance("dark")
    light_client.set_system_appearance(ResolvedTheme.LIGHT)

    assert dark_client.snapshot().theme.resolved == ResolvedTheme.DARK
    assert light_client.snapshot().theme.resolved == ResolvedTheme.LIGHT


def test_preference_change_reaches_every_live_session(tmp_path: Path) -> None:
    manager = _build_manager(tmp_path)
    dark_client = manager.create()
    light_client = manager.create()
    dark_client.set_system_appearance("dark")

    manager.theme.set_preference("light")
    assert dark_client.theme.preference == ThemePreference.LIGHT
    assert dark_client.theme.resolved == ResolvedTheme.LIGHT
    assert light_client.theme.resolved == ResolvedTheme.LIGHT

    manager.theme.set_preference("system")
    assert dark_client.theme.resolved == ResolvedTheme.DARK
    assert light_client.theme.resolved == ResolvedTheme.LIGHT

    late = manager.create()
    assert late.theme.preference == ThemePreference.SYSTEM
