from __future__ import annotations

import asyncio
from typing import Any

from rich.text import Text
from textual import events, on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

from evalbench.tui.service_client import ServiceClient, ServiceClientError


class InfoContent(Container):
    """Dialog body. Clicks inside it stop here and never reach the backdrop."""

    def on_click(self, event: events.Click) -> None:
        event.stop()


class InfoOverlayScreen(ModalScreen[None]):
    CSS = """
    InfoOverlayScreen {
      align: center middle;
    }

    #info-content {
      width: 52;
      height: auto;
      border: heavy $accent;
      background: $panel;
      padding: 0 1;
    }

    #info-title {
      text-style: bold;
      color: $accent;
      height: auto;
      margin-top: 1;
    }

    #info-body {
      height: auto;
      margin: 1 0;
    }

    #info-close {
      margin-bottom: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "close", "Close"),
    ]

    def __init__(self, *, client: ServiceClient, session_id: str, about: dict[str, Any]):
        super().__init__()
        self.client = client
        self.session_id = session_id
        self.about = about

    def compose(self) -> ComposeResult:
        with InfoContent(id="info-content"):
            yield Label("About", id="info-title")
            yield Static(self._about_text(), id="info-body")
            yield Button("Close (Esc)", id="info-close", variant="error")

    def _about_text(self) -> Text:
        about = self.about
        text = Text()
        text.append(f"{about.get('title', '')}\n", style="bold")
        text.append(f"{about.get('description', '')} ")
        text.append(str(about.get("language_label", "")), style=f"underline link {about.get('language_url', '')}")
        text.append("\n\nMade with ")
        text.append("♥", style="red")
        text.append(" by ")
        text.append(str(about.get("author", "")), style=f"underline link {about.get('author_url', '')}")
        return text

    async def _send(self, action: str, region: str | None = None) -> None:
        try:
            snapshot = await asyncio.to_thread(self.client.overlay, self.session_id, action, region)
        except ServiceClientError as exc:
            self.notify(str(exc), severity="error")
            self.dismiss(None)
            return
        if not snapshot["overlay"]["visible"]:
            self.dismiss(None)

    async def on_click(self, event: events.Click) -> None:
        # Only backdrop clicks get here; InfoContent stops its own.
        await self._send("click", "backdrop")

    async def action_close(self) -> None:
        await self._send("close")

    @on(Button.Pressed, "#info-close")
    async def on_close_pressed(self) -> None:
        await self.action_close()
