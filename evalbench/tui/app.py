from __future__ import annotations

import asyncio
from typing import Any

from rich.text import Text
from textual import events, on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Footer, Header, Label, Static, TextArea

from evalbench.tui.common import _next_preference, _status_line, _textual_theme
from evalbench.tui.screens import InfoOverlayScreen
from evalbench.tui.service_client import ServiceClient, ServiceClientError


BINDING_POLL_SECONDS = 0.5
REFRESH_SECONDS = 3.0
INPUT_SYNC_SECONDS = 0.3


class EvalbenchTUIApp(App[None]):
    CSS = """
    Screen {
      layout: vertical;
    }

    #toolbar {
      height: 3;
      padding: 0 1;
    }

    #toolbar Button {
      margin-right: 1;
      min-width: 12;
    }

    #panes {
      layout: horizontal;
      height: 1fr;
    }

    #pane-input,
    #pane-output {
      width: 1fr;
      border: solid $accent;
      margin: 0 1 1 1;
      padding: 0 1;
    }

    .pane-title {
      text-style: bold;
      color: $accent;
      height: auto;
    }

    #input {
      height: 1fr;
    }

    #output {
      height: 1fr;
      overflow: auto;
    }

    #status {
      color: $text-muted;
      height: 1;
      padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+r", "submit", "Run"),
        Binding("f2", "toggle_view", "Editor/Output"),
        Binding("f3", "cycle_theme", "Theme"),
        Binding("f1", "open_info", "About"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    TITLE = "Monkey Interpreter"

    def __init__(self, api_base_url: str):
        super().__init__()
        self.client = ServiceClient(api_base_url)
        self.session_id: str | None = None
        self.snapshot: dict[str, Any] | None = None
        self.theme_state: dict[str, Any] | None = None
        self._refresh_timer = None
        self._slow_refresh = False
        self._input_timer = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="toolbar"):
            yield Button("Editor", id="mode-editor")
            yield Button("Output", id="mode-output")
            yield Button("Run (Ctrl+R)", id="run", variant="success", disabled=True)
            yield Button("Theme (F3)", id="theme")
            yield Button("About (F1)", id="info")
        with Horizontal(id="panes"):
            with Vertical(id="pane-input"):
                yield Label("Input", classes="pane-title")
                yield TextArea(id="input")
            with Vertical(id="pane-output"):
                yield Label("Output", classes="pane-title")
                yield Static("", id="output")
        yield Static("Connecting...", id="status")
        yield Footer()

    async def on_mount(self) -> None:
        try:
            await asyncio.to_thread(self.client.health)
            snapshot = await asyncio.to_thread(self.client.create_session)
        except ServiceClientError as exc:
            self.query_one("#status", Static).update(f"API unavailable: {exc}")
            return

        self.session_id = snapshot["session_id"]
        self._render(snapshot)
        await self._sync_viewport(self.size.width)
        self._refresh_timer = self.set_interval(BINDING_POLL_SECONDS, self._refresh)

    async def _refresh(self) -> None:
        if not self.session_id:
            return
        try:
            snapshot = await asyncio.to_thread(self.client.get_session, self.session_id)
        except ServiceClientError as exc:
            self.query_one("#status", Static).update(f"API unavailable: {exc}")
            return
        self._render(snapshot)
        # Once the interpreter settles, keep polling slowly to follow theme changes from other clients.
        if snapshot["workbench"]["binding"]["status"] != "unready" and not self._slow_refresh:
            self._slow_refresh = True
            if self._refresh_timer is not None:
                self._refresh_timer.stop()
            self._refresh_timer = self.set_interval(REFRESH_SECONDS, self._refresh)

    async def _sync_viewport(self, columns: int) -> None:
        if not self.session_id:
            return
        try:
            snapshot = await asyncio.to_thread(self.client.set_viewport, self.session_id, columns, "columns")
        except ServiceClientError as exc:
            self.notify(str(exc), severity="error")
            return
        self._render(snapshot)

    def _apply_theme(self, theme_state: dict[str, Any]) -> None:
        changed = self.theme_state is None or theme_state.get("resolved") != self.theme_state.get("resolved")
        self.theme_state = theme_state
        if changed:
            self.theme = _textual_theme(theme_state.get("resolved"))

    def _render(self, snapshot: dict[str, Any]) -> None:
        self.snapshot = snapshot
        workbench = snapshot["workbench"]
        layout = snapshot["layout"]
        self._apply_theme(snapshot["theme"])

        failed = workbench["phase"] == "failed"
        self.query_one("#output", Static).update(Text(workbench["result_text"], style="red" if failed else ""))
        self.query_one("#run", Button).disabled = not workbench["can_submit"]
        self.query_one("#status", Static).update(_status_line(workbench, self.theme_state))

        visible = set(layout["visible_panes"])
        self.query_one("#pane-input").display = "input" in visible
        self.query_one("#pane-output").display = "output" in visible
        for mode in ("editor", "output"):
            button = self.query_one(f"#mode-{mode}", Button)
            button.display = bool(layout["show_toggle"])
            button.variant = "primary" if layout["view_mode"] == mode else "default"

    @on(TextArea.Changed, "#input")
    def on_input_changed(self) -> None:
        if self._input_timer is not None:
            self._input_timer.stop()
        self._input_timer = self.set_timer(INPUT_SYNC_SECONDS, self._push_input)

    async def _push_input(self) -> None:
        self._input_timer = None
        if not self.session_id:
            return
        text = self.query_one("#input", TextArea).text
        try:
            await asyncio.to_thread(self.client.update_input, self.session_id, text)
        except ServiceClientError as exc:
            self.notify(str(exc), severity="error")

    async def on_resize(self, event: events.Resize) -> None:
        await self._sync_viewport(event.size.width)

    async def action_submit(self) -> None:
        if not self.session_id or not self.snapshot or not self.snapshot["workbench"]["can_submit"]:
            return
        if self._input_timer is not None:
            self._input_timer.stop()
            self._input_timer = None
        source = self.query_one("#input", TextArea).text
        try:
            snapshot = await asyncio.to_thread(self.client.submit, self.session_id, source)
        except ServiceClientError as exc:
            self.notify("Interpreter is not ready" if exc.status_code == 409 else str(exc), severity="error")
            return
        self._render(snapshot)

    async def action_toggle_view(self) -> None:
        if not self.session_id or not self.snapshot:
            return
        target = "editor" if self.snapshot["layout"]["view_mode"] == "output" else "output"
        await self._set_view_mode(target)

    async def _set_view_mode(self, mode: str) -> None:
        if not self.session_id:
            return
        try:
            snapshot = await asyncio.to_thread(self.client.set_view_mode, self.session_id, mode)
        except ServiceClientError as exc:
            self.notify(str(exc), severity="error")
            return
        self._render(snapshot)

    async def action_cycle_theme(self) -> None:
        if not self.session_id:
            return
        current = (self.theme_state or {}).get("preference")
        try:
            await asyncio.to_thread(self.client.set_theme, self.session_id, _next_preference(current))
        except ServiceClientError as exc:
            self.notify(str(exc), severity="error")
            return
        await self._refresh()

    async def action_open_info(self) -> None:
        if not self.session_id:
            return
        try:
            snapshot = await asyncio.to_thread(self.client.overlay, self.session_id, "open")
            about = await asyncio.to_thread(self.client.about, self.session_id)
        except ServiceClientError as exc:
            self.notify(str(exc), severity="error")
            return
        if snapshot["overlay"]["visible"]:
            self.push_screen(InfoOverlayScreen(client=self.client, session_id=self.session_id, about=about))

    @on(Button.Pressed, "#run")
    async def on_run_pressed(self) -> None:
        await self.action_submit()

    @on(Button.Pressed, "#mode-editor")
    async def on_editor_pressed(self) -> None:
        await self._set_view_mode("editor")

    @on(Button.Pressed, "#mode-output")
    async def on_output_pressed(self) -> None:
        await self._set_view_mode("output")

    @on(Button.Pressed, "#theme")
    async def on_theme_pressed(self) -> None:
        await self.action_cycle_theme()

    @on(Button.Pressed, "#info")
    async def on_info_pressed(self) -> None:
        await self.action_open_info()


def run_tui(api_base_url: str) -> None:
    EvalbenchTUIApp(api_base_url).run()
