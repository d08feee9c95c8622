from __future__ import annotations

import argparse
import logging
import subprocess
import sys
import time
import urllib.error
import urllib.request
from pathlib import Path

from evalbench.logging_config import setup_logging


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="evalbench (no subcommand runs API + TUI)")
    subparsers = parser.add_subparsers(dest="command", required=False)

    all_parser = subparsers.add_parser("all", help="Run API and TUI together in one command")
    all_parser.add_argument("--host", default=None)
    all_parser.add_argument("--port", type=int, default=None)
    all_parser.add_argument(
        "--api-base-url",
        default=None,
        help="Override API URL used by the TUI when running in combined mode",
    )

    api_parser = subparsers.add_parser("api", help="Run the evalbench API service")
    api_parser.add_argument("--host", default=None)
    api_parser.add_argument("--port", type=int, default=None)

    tui_parser = subparsers.add_parser("tui", help="Run the Textual workbench")
    tui_parser.add_argument(
        "--api-base-url",
        default=None,
        help="Base URL of the evalbench API (default from env EVALBENCH_API_BASE_URL)",
    )

    web_parser = subparsers.add_parser("web", help="Run the browser workbench")
    web_parser.add_argument("--host", default=None)
    web_parser.add_argument("--port", type=int, default=None)
    web_parser.add_argument("--no-open", action="store_true")
    web_parser.add_argument("--evaluator", default=None, help="Evaluator import path 'package.module:function'")

    repl_parser = subparsers.add_parser("repl", help="Evaluate stdin line by line")
    repl_parser.add_argument(
        "--evaluator",
        default=None,
        help="Evaluator import path 'package.module:function' (default from env EVALBENCH_EVALUATOR)",
    )

    test_parser = subparsers.add_parser("test", help="Run all tests with pytest")
    test_parser.add_argument(
        "pytest_args",
        nargs=argparse.REMAINDER,
        help="Optional extra pytest args; use `--` before args (e.g. evalbench test -- -k theme)",
    )

    return parser


def run_tests(args: argparse.Namespace) -> int:
    cmd = [sys.executable, "-m", "pytest"]
    if args.pytest_args:
        cmd.extend(arg for arg in args.pytest_args if arg != "--")
    logger.info("Running: %s", " ".join(cmd))
    return subprocess.call(cmd)


def run_repl(args: argparse.Namespace) -> int:
    from evalbench.core.config import get_settings
    from evalbench.repl import start
    from evalbench.runtime.binding import EvaluatorBinding

    settings = get_settings()
    binding = EvaluatorBinding(args.evaluator or settings.evaluator)
    return start(binding)


def _local_tui_base_url(host: str, port: int) -> str:
    if host in {"0.0.0.0", "::", "::0", "[::]"}:
        host = "127.0.0.1"
    return f"http://{host}:{port}"


def _wait_for_api_ready(base_url: str, timeout_seconds: float = 30.0) -> None:
    deadline = time.time() + timeout_seconds
    health_url = f"{base_url.rstrip('/')}/health"
    while time.time() < deadline:
        try:
            with urllib.request.urlopen(health_url, timeout=2) as response:
                if response.status == 200:
                    return
        except (urllib.error.URLError, TimeoutError, ConnectionError):
            pass
        time.sleep(0.3)
    raise RuntimeError(f"Timed out waiting for API readiness at {health_url}")


def _stop_process(process: subprocess.Popen) -> None:
    if process.poll() is not None:
        return
    process.terminate()
    try:
        process.wait(timeout=10)
    except subprocess.TimeoutExpired:
        process.kill()


def run_all(args: argparse.Namespace) -> int:
    from evalbench.core.config import get_settings
    from evalbench.tui.app import run_tui

    settings = get_settings()
    host = getattr(args, "host", None) or settings.api_host
    port = getattr(args, "port", None) or settings.api_port
    api_base_url = getattr(args, "api_base_url", None) or _local_tui_base_url(host, port)

    log_path: Path = settings.state_path / "combined_api.log"
    cmd = [
        sys.executable,
        "-m",
        "evalbench",
        "api",
        "--host",
        host,
        "--port",
        str(port),
    ]

    logger.info("Starting API in background on %s:%s (logs: %s)", host, port, log_path)
    with log_path.open("a", encoding="utf-8") as log_file:
        api_process = subprocess.Popen(
            cmd,
            stdout=log_file,
            stderr=subprocess.STDOUT,
            text=True,
        )

        try:
            _wait_for_api_ready(api_base_url)
        except RuntimeError as exc:
            _stop_process(api_process)
            print(f"Failed to start API: {exc}", file=sys.stderr)
            return 1

        try:
            run_tui(api_base_url)
            return 0
        finally:
            _stop_process(api_process)


def main() -> None:
    from evalbench.core.config import get_settings

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)

    parser = build_parser()
    args = parser.parse_args()

    if args.command in {None, "all"}:
        raise SystemExit(run_all(args))

    if args.command == "api":
        import uvicorn

        from evalbench.app.api import app

        host = args.host or settings.api_host
        port = args.port or settings.api_port
        uvicorn.run(app, host=host, port=port, log_level="info")
        return

    if args.command == "tui":
        from evalbench.tui.app import run_tui

        run_tui(args.api_base_url or settings.api_base_url)
        return

    if args.command == "web":
        from evalbench.web_server import run_web_server

        host = args.host or settings.web_host
        port = args.port or settings.web_port
        if args.evaluator:
            settings = settings.model_copy(update={"evaluator": args.evaluator})
        run_web_server(host=host, port=port, no_open=bool(args.no_open), settings=settings)
        return

    if args.command == "repl":
        raise SystemExit(run_repl(args))

    if args.command == "test":
        raise SystemExit(run_tests(args))

    parser.print_help()


if __name__ == "__main__":
    main()
