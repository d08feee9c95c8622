from __future__ import annotations

from pathlib import Path

import pytest

from evalbench.core.config import Settings
from evalbench.core.models import ResolvedTheme, ThemePreference
from evalbench.runtime.theme import PreferenceStore, ThemeStore, resolve_theme, theme_state


def _build_settings(tmp_path: Path) -> Settings:
    settings = Settings(_env_file=None, EVALBENCH_STATE_DIR=str(tmp_path / "state"))
    settings.ensure_runtime_dirs()
    return settings


def test_default_preference_is_system(tmp_path: Path) -> None:
    theme = ThemeStore.from_settings(_build_settings(tmp_path))
    assert theme.preference == ThemePreference.SYSTEM
    assert theme.get().resolved == ResolvedTheme.LIGHT
    assert theme.get(ResolvedTheme.DARK).resolved == ResolvedTheme.DARK


def test_configured_default_is_used_without_saved_value(tmp_path: Path) -> None:
    settings = Settings(
        _env_file=None,
        EVALBENCH_STATE_DIR=str(tmp_path / "state"),
        EVALBENCH_DEFAULT_THEME="dark",
    )
    assert ThemeStore.from_settings(settings).preference == ThemePreference.DARK


def test_set_preference_persists_across_instances(tmp_path: Path) -> None:
    settings = _build_settings(tmp_path)
    ThemeStore.from_settings(settings).set_preference("dark")

    restored = ThemeStore.from_settings(settings)
    assert restored.preference == ThemePreference.DARK
    assert restored.get(ResolvedTheme.LIGHT).resolved == ResolvedTheme.DARK
    assert PreferenceStore(settings.preferences_path).read("evalbench-theme") == "dark"


def test_get_resolves_against_the_callers_appearance(tmp_path: Path) -> None:
    theme = ThemeStore.from_settings(_build_settings(tmp_path))

    assert theme.get("dark").resolved == ResolvedTheme.DARK
    assert theme.get("light").resolved == ResolvedTheme.LIGHT
    # one caller's appearance never sticks to the store
    assert theme.get().system_appearance == ResolvedTheme.LIGHT

    theme.set_preference("light")
    assert theme.get("dark").resolved == ResolvedTheme.LIGHT


def test_subscribers_hear_every_preference_change(tmp_path: Path) -> None:
    theme = ThemeStore.from_settings(_build_settings(tmp_path))
    seen: list[ThemePreference] = []
    unsubscribe = theme.subscribe(seen.append)

    theme.set_preference("dark")
    theme.set_preference("dark")
    unsubscribe()
    theme.set_preference("light")

    assert seen == [ThemePreference.DARK, ThemePreference.DARK]


def test_invalid_preference_is_rejected(tmp_path: Path) -> None:
    settings = _build_settings(tmp_path)
    theme = ThemeStore.from_settings(settings)
    seen: list[ThemePreference] = []
    theme.subscribe(seen.append)
    with pytest.raises(ValueError):
        theme.set_preference("sepia")
    assert theme.preference == ThemePreference.SYSTEM
    assert seen == []
    assert not settings.preferences_path.exists()


def test_corrupt_saved_preference_falls_back_to_default(tmp_path: Path) -> None:
    settings = _build_settings(tmp_path)
    PreferenceStore(settings.preferences_path).write("evalbench-theme", "sepia")
    assert ThemeStore.from_settings(settings).preference == ThemePreference.SYSTEM


def test_resolve_theme_table() -> None:
    assert resolve_theme(ThemePreference.LIGHT, ResolvedTheme.DARK) == ResolvedTheme.LIGHT
    assert resolve_theme(ThemePreference.DARK, ResolvedTheme.LIGHT) == ResolvedTheme.DARK
    assert resolve_theme(ThemePreference.SYSTEM, ResolvedTheme.DARK) == ResolvedTheme.DARK

    state = theme_state(ThemePreference.SYSTEM, ResolvedTheme.DARK, "k")
    assert (state.resolved, state.system_appearance, state.storage_key) == (ResolvedTheme.DARK, ResolvedTheme.DARK, "k")
