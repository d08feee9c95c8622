from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path

from evalbench.core.config import Settings
from evalbench.core.models import ResolvedTheme, ThemePreference, ThemeState
from evalbench.core.storage import read_json_if_exists, write_json


logger = logging.getLogger(__name__)

PreferenceListener = Callable[[ThemePreference], None]


class PreferenceStore:
    """Key/value preferences kept in a JSON file so they survive restarts."""

    def __init__(self, path: Path):
        self.path = path

    def read(self, key: str) -> str | None:
        value = read_json_if_exists(self.path).get(key)
        return value if isinstance(value, str) else None

    def write(self, key: str, value: str) -> None:
        payload = read_json_if_exists(self.path)
        payload[key] = value
        write_json(self.path, payload)


def resolve_theme(preference: ThemePreference, system_appearance: ResolvedTheme) -> ResolvedTheme:
    if preference == ThemePreference.SYSTEM:
        return system_appearance
    return ResolvedTheme(preference.value)


def theme_state(preference: ThemePreference, system_appearance: ResolvedTheme, key: str) -> ThemeState:
    return ThemeState(
        preference=preference,
        resolved=resolve_theme(preference, system_appearance),
        system_appearance=system_appearance,
        storage_key=key,
    )


class ThemeStore:
    """Process-wide theme preference with explicit get/set/subscribe.

    Only the preference is shared. The OS appearance belongs to each
    client, so ``get`` resolves against the appearance it is given.
    """

    def __init__(
        self,
        store: PreferenceStore,
        *,
        key: str = "evalbench-theme",
        default: ThemePreference | str = ThemePreference.SYSTEM,
    ):
        self.store = store
        self.key = key
        self._lock = threading.RLock()
        self._listeners: list[PreferenceListener] = []

        fallback = ThemePreference(default)
        saved = store.read(key)
        try:
            self._preference = ThemePreference(saved) if saved is not None else fallback
        except ValueError:
            logger.warning("Ignoring unknown saved theme %r", saved)
            self._preference = fallback

    @classmethod
    def from_settings(cls, settings: Settings) -> "ThemeStore":
        return cls(
            PreferenceStore(settings.preferences_path),
            key=settings.theme_storage_key,
            default=settings.default_theme,
        )

    @property
    def preference(self) -> ThemePreference:
        return self._preference

    def get(self, system_appearance: ResolvedTheme | str = ResolvedTheme.LIGHT) -> ThemeState:
        return theme_state(self._preference, ResolvedTheme(system_appearance), self.key)

    def set_preference(self, value: ThemePreference | str) -> ThemePreference:
        preference = ThemePreference(value)
        with self._lock:
            self._preference = preference
            self.store.write(self.key, preference.value)
            listeners = list(self._listeners)
        logger.debug("Theme preference set to %s", preference.value)
        for listener in listeners:
            listener(preference)
        return preference

    def subscribe(self, listener: PreferenceListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe
