from __future__ import annotations

import logging
import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field

from evalbench.core.config import Settings
from evalbench.core.models import (
    OverlayAction,
    OverlayRegion,
    ResolvedTheme,
    SessionSnapshot,
    ThemePreference,
    ThemeState,
)
from evalbench.runtime.binding import EvaluatorBinding
from evalbench.runtime.layout import InfoOverlay, LayoutShell
from evalbench.runtime.theme import ThemeStore, theme_state
from evalbench.runtime.workbench import Workbench


logger = logging.getLogger(__name__)


class UnknownSessionError(KeyError):
    pass


@dataclass
class Session:
    session_id: str
    workbench: Workbench
    theme: ThemeState
    overlay: InfoOverlay = field(default_factory=InfoOverlay)

    def apply_overlay(self, action: OverlayAction, region: OverlayRegion | None = None) -> None:
        if action == OverlayAction.OPEN:
            self.overlay.open()
        elif action == OverlayAction.CLOSE:
            self.overlay.close()
        elif action == OverlayAction.TOGGLE:
            self.overlay.toggle()
        elif action == OverlayAction.CLICK:
            if region is None:
                raise ValueError("click action requires region")
            self.overlay.click(region)

    def set_system_appearance(self, appearance: ResolvedTheme | str) -> ThemeState:
        """Record this client's OS appearance; only this session re-resolves."""
        self.theme = theme_state(self.theme.preference, ResolvedTheme(appearance), self.theme.storage_key)
        return self.theme

    def apply_preference(self, preference: ThemePreference) -> None:
        self.theme = theme_state(preference, self.theme.system_appearance, self.theme.storage_key)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            session_id=self.session_id,
            workbench=self.workbench.state(),
            layout=self.workbench.layout_state(),
            overlay=self.overlay.state(),
            theme=self.theme,
        )


class SessionManager:
    """One workbench, overlay and OS appearance per browser tab or terminal client.

    Subscribes to the shared theme preference so every live session
    re-resolves its theme as soon as any client changes it.
    """

    def __init__(self, settings: Settings, binding: EvaluatorBinding, theme: ThemeStore):
        self.settings = settings
        self.binding = binding
        self.theme = theme
        self.layout = LayoutShell(settings.breakpoint_px, settings.tui_breakpoint_columns)
        self._lock = threading.RLock()
        self._sessions: OrderedDict[str, Session] = OrderedDict()
        theme.subscribe(self._apply_preference)

    def create(self) -> Session:
        with self._lock:
            session = Session(
                session_id=uuid.uuid4().hex[:12],
                workbench=Workbench(self.binding, layout=self.layout),
                theme=self.theme.get(),
            )
            self._sessions[session.session_id] = session
            while len(self._sessions) > self.settings.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("Evicted idle session %s", evicted)
        return session

    def get(self, session_id: str) -> Session:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise UnknownSessionError(session_id)
            self._sessions.move_to_end(session_id)
            return session

    def _apply_preference(self, preference: ThemePreference) -> None:
        with self._lock:
            sessions = list(self._sessions.values())
            for session in sessions:
                session.apply_preference(preference)
        logger.debug("Theme preference %s applied to %d sessions", preference.value, len(sessions))

    def __len__(self) -> int:
        return len(self._sessions)
