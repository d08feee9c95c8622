import pytest
from pydantic import ValidationError

from evalbench.core.config import DEFAULT_EVALUATOR, REPO_ROOT, Settings
from evalbench.core.models import ThemePreference


def test_empty_optional_env_is_ignored(monkeypatch) -> None:
    monkeypatch.setenv("EVALBENCH_LOG_FILE", "")
    settings = Settings(_env_file=None)
    assert settings.log_file is None


def test_repo_root_and_default_state_path() -> None:
    settings = Settings(_env_file=None)
    assert (REPO_ROOT / "pyproject.toml").exists()
    assert settings.state_path == REPO_ROOT / ".evalbench_state"
    assert settings.preferences_path == REPO_ROOT / ".evalbench_state" / "preferences.json"
    assert settings.evaluator == DEFAULT_EVALUATOR
    assert settings.default_theme == ThemePreference.SYSTEM
    assert settings.breakpoint_px == 768


def test_evaluator_can_be_overridden_from_env(monkeypatch) -> None:
    monkeypatch.setenv("EVALBENCH_EVALUATOR", "my_interp.wasm:interpret")
    assert Settings(_env_file=None).evaluator == "my_interp.wasm:interpret"


def test_default_theme_is_validated_when_settings_load(monkeypatch) -> None:
    monkeypatch.setenv("EVALBENCH_DEFAULT_THEME", "dark")
    assert Settings(_env_file=None).default_theme == ThemePreference.DARK

    monkeypatch.setenv("EVALBENCH_DEFAULT_THEME", "Dark")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
