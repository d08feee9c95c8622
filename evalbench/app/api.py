from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from evalbench.core.config import Settings, get_settings
from evalbench.core.models import BindingState
from evalbench.runtime.binding import EvaluatorBinding
from evalbench.runtime.sessions import SessionManager
from evalbench.runtime.theme import ThemeStore
from evalbench.web.routes import build_web_router


logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    binding: EvaluatorBinding | None = None,
    theme: ThemeStore | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    binding = binding or EvaluatorBinding(settings.evaluator)
    theme = theme or ThemeStore.from_settings(settings)
    sessions = SessionManager(settings, binding, theme)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Resolve the evaluator in the background; sessions report "unready" until it settles.
        app.state.binding_task = asyncio.create_task(binding.load())
        try:
            yield
        finally:
            task = app.state.binding_task
            if not task.done():
                task.cancel()

    app = FastAPI(title="evalbench", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.binding = binding
    app.state.theme = theme
    app.state.sessions = sessions

    @app.get("/", include_in_schema=False)
    def root() -> RedirectResponse:
        return RedirectResponse(url="/web")

    @app.get("/health")
    def health() -> dict[str, Any]:
        return {"status": "ok", "binding": binding.status.value}

    @app.get("/api/binding")
    def binding_state() -> BindingState:
        return binding.state()

    @app.post("/api/binding/reload")
    async def reload_binding() -> BindingState:
        return await binding.reload()

    app.include_router(build_web_router(settings=settings, sessions=sessions))
    return app


app = create_app()
