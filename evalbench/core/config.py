from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from evalbench.core.models import ThemePreference


REPO_ROOT = Path(__file__).resolve().parent.parent.parent

DEFAULT_EVALUATOR = "evalbench.core.reference_evaluator:evaluate"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_ignore_empty=True,
    )

    api_host: str = Field(default="0.0.0.0", alias="EVALBENCH_API_HOST")
    api_port: int = Field(default=8797, alias="EVALBENCH_API_PORT")
    api_base_url: str = Field(default="http://127.0.0.1:8797", alias="EVALBENCH_API_BASE_URL")
    web_host: str = Field(default="127.0.0.1", alias="EVALBENCH_WEB_HOST")
    web_port: int = Field(default=8798, alias="EVALBENCH_WEB_PORT")

    state_dir: str = Field(default=".evalbench_state", alias="EVALBENCH_STATE_DIR")
    log_level: str = Field(default="INFO", alias="EVALBENCH_LOG_LEVEL")
    log_file: str | None = Field(default=None, alias="EVALBENCH_LOG_FILE")

    evaluator: str = Field(default=DEFAULT_EVALUATOR, alias="EVALBENCH_EVALUATOR")
    default_theme: ThemePreference = Field(default=ThemePreference.SYSTEM, alias="EVALBENCH_DEFAULT_THEME")
    theme_storage_key: str = Field(default="evalbench-theme", alias="EVALBENCH_THEME_STORAGE_KEY")

    breakpoint_px: int = Field(default=768, ge=1, alias="EVALBENCH_BREAKPOINT_PX")
    tui_breakpoint_columns: int = Field(default=100, ge=1, alias="EVALBENCH_TUI_BREAKPOINT_COLUMNS")
    max_sessions: int = Field(default=256, ge=1, alias="EVALBENCH_MAX_SESSIONS")

    def resolve_path(self, path_value: str) -> Path:
        candidate = Path(path_value).expanduser()
        if candidate.is_absolute():
            return candidate
        return REPO_ROOT / candidate

    @property
    def state_path(self) -> Path:
        return self.resolve_path(self.state_dir)

    @property
    def preferences_path(self) -> Path:
        return self.state_path / "preferences.json"

    def ensure_runtime_dirs(self) -> None:
        self.state_path.mkdir(parents=True, exist_ok=True)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    settings = Settings()
    settings.ensure_runtime_dirs()
    return settings
