from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse, Response

from evalbench.core.about import about_info
from evalbench.core.config import Settings
from evalbench.core.models import (
    AboutInfo,
    FailureKind,
    InputUpdateRequest,
    OverlayRequest,
    SessionSnapshot,
    SubmitRequest,
    SystemAppearanceRequest,
    ThemeRequest,
    ThemeState,
    ViewModeRequest,
    ViewportRequest,
)
from evalbench.runtime.sessions import Session, SessionManager, UnknownSessionError
from evalbench.web.page_shell import head_html, header_html, init_js, overlay_html, shared_js
from evalbench.web.page_workbench import workbench_js, workbench_section_html


LOGO_FILES = {"logo-light", "logo-dark"}


def build_web_router(*, settings: Settings, sessions: SessionManager) -> APIRouter:
    router = APIRouter()

    def _session(session_id: str) -> Session:
        try:
            return sessions.get(session_id)
        except UnknownSessionError as exc:
            raise HTTPException(status_code=404, detail=f"Session not found: {session_id}") from exc

    @router.get("/web", response_class=HTMLResponse)
    @router.get("/web/", response_class=HTMLResponse)
    def web_home() -> HTMLResponse:
        return HTMLResponse(_web_page_html(settings.theme_storage_key))

    @router.get("/web/{name}.svg")
    def web_logo(name: str) -> Response:
        logo = Path(__file__).parent / f"{name}.svg"
        if name not in LOGO_FILES or not logo.exists():
            raise HTTPException(status_code=404, detail="Logo not found")
        return Response(content=logo.read_bytes(), media_type="image/svg+xml")

    @router.post("/api/sessions")
    def create_session() -> SessionSnapshot:
        return sessions.create().snapshot()

    @router.get("/api/sessions/{session_id}")
    def get_session(session_id: str) -> SessionSnapshot:
        return _session(session_id).snapshot()

    @router.put("/api/sessions/{session_id}/input")
    def update_input(session_id: str, payload: InputUpdateRequest) -> SessionSnapshot:
        session = _session(session_id)
        session.workbench.set_input(payload.input_text)
        return session.snapshot()

    @router.post("/api/sessions/{session_id}/submit")
    def submit(session_id: str, payload: SubmitRequest | None = None) -> SessionSnapshot:
        session = _session(session_id)
        if payload is not None and payload.input_text is not None:
            session.workbench.set_input(payload.input_text)

        state = session.workbench.submit()
        if state.last_refusal == FailureKind.BINDING_UNAVAILABLE:
            raise HTTPException(
                status_code=409,
                detail={
                    "message": "Evaluator is not ready",
                    "binding": state.binding.model_dump(mode="json"),
                },
            )
        return session.snapshot()

    @router.put("/api/sessions/{session_id}/view-mode")
    def set_view_mode(session_id: str, payload: ViewModeRequest) -> SessionSnapshot:
        session = _session(session_id)
        session.workbench.set_view_mode(payload.view_mode)
        return session.snapshot()

    @router.put("/api/sessions/{session_id}/viewport")
    def set_viewport(session_id: str, payload: ViewportRequest) -> SessionSnapshot:
        session = _session(session_id)
        session.workbench.set_viewport(payload.width, payload.unit)
        return session.snapshot()

    @router.post("/api/sessions/{session_id}/overlay")
    def overlay(session_id: str, payload: OverlayRequest) -> SessionSnapshot:
        session = _session(session_id)
        session.apply_overlay(payload.action, payload.region)
        return session.snapshot()

    @router.get("/api/sessions/{session_id}/theme")
    def get_theme(session_id: str) -> ThemeState:
        return _session(session_id).theme

    @router.put("/api/sessions/{session_id}/theme")
    def set_theme(session_id: str, payload: ThemeRequest) -> ThemeState:
        session = _session(session_id)
        try:
            sessions.theme.set_preference(payload.preference)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"Unknown theme preference: {payload.preference}") from exc
        return session.theme

    @router.put("/api/sessions/{session_id}/appearance")
    def set_system_appearance(session_id: str, payload: SystemAppearanceRequest) -> ThemeState:
        return _session(session_id).set_system_appearance(payload.appearance)

    @router.get("/api/sessions/{session_id}/about")
    def about(session_id: str) -> AboutInfo:
        return about_info(_session(session_id).theme.resolved)

    return router


def _web_page_html(storage_key: str) -> str:
    return (
        '<!doctype html>\n<html lang="en">\n  <head>\n'
        + head_html(storage_key)
        + "\n  </head>\n"
        + '  <body class="bg-w-bg text-w-text font-sans text-sm leading-relaxed min-h-screen">\n'
        + overlay_html()
        + "\n"
        + '    <div class="max-w-[1200px] mx-auto px-5 pb-8">\n'
        + header_html()
        + "\n"
        + workbench_section_html()
        + "\n"
        + "    </div>\n"
        + '    <div id="toast-container" class="fixed bottom-5 right-5 z-50 flex flex-col gap-2 pointer-events-none"></div>\n'
        + "    <script>\n"
        + shared_js(storage_key)
        + "\n"
        + workbench_js()
        + "\n"
        + init_js()
        + "\n"
        + "    </script>\n"
        + "  </body>\n</html>\n"
    )
