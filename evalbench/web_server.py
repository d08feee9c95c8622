"""Browser-only entry point: serve the workbench and open it once the API answers."""

from __future__ import annotations

import argparse
import logging
import threading
import webbrowser

import uvicorn

from evalbench.cli import _local_tui_base_url, _wait_for_api_ready
from evalbench.core.config import Settings, get_settings
from evalbench.logging_config import setup_logging


logger = logging.getLogger(__name__)

BROWSER_WAIT_SECONDS = 15.0


def _open_browser_when_ready(base_url: str, timeout_seconds: float = BROWSER_WAIT_SECONDS) -> bool:
    """Open ``/web`` once ``/health`` responds; returns whether a browser was launched."""
    try:
        _wait_for_api_ready(base_url, timeout_seconds=timeout_seconds)
    except RuntimeError as exc:
        logger.warning("Not opening a browser: %s", exc)
        return False

    page_url = f"{base_url.rstrip('/')}/web"
    try:
        opened = webbrowser.open(page_url)
    except webbrowser.Error as exc:
        logger.warning("Could not open browser: %s", exc)
        return False
    if not opened:
        logger.info("No browser available; open %s manually", page_url)
    return opened


def run_web_server(host: str, port: int, no_open: bool = False, settings: Settings | None = None) -> None:
    from evalbench.app.api import create_app

    settings = settings or get_settings()
    base_url = _local_tui_base_url(host, port)
    logger.info("Serving the workbench at %s/web with evaluator %s", base_url, settings.evaluator)
    if not no_open:
        threading.Thread(
            target=_open_browser_when_ready,
            args=(base_url,),
            name="evalbench-browser",
            daemon=True,
        ).start()

    uvicorn.run(create_app(settings), host=host, port=port, log_level="info")


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)

    parser = argparse.ArgumentParser(description="Serve the evalbench browser workbench")
    parser.add_argument("--host", default=settings.web_host)
    parser.add_argument("--port", type=int, default=settings.web_port)
    parser.add_argument("--evaluator", default=None, help="Evaluator import path 'package.module:function'")
    parser.add_argument("--no-open", action="store_true", help="Do not open a browser tab")
    args = parser.parse_args()

    if args.evaluator:
        settings = settings.model_copy(update={"evaluator": args.evaluator})
    run_web_server(host=args.host, port=args.port, no_open=args.no_open, settings=settings)


if __name__ == "__main__":
    main()
