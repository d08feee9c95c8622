from __future__ import annotations

import asyncio
import getpass
import sys
from typing import TextIO

from evalbench.core.models import BindingStatus
from evalbench.runtime.binding import EvaluatorBinding
from evalbench.runtime.workbench import Workbench


PROMPT = ">> "


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "there"


def start(
    binding: EvaluatorBinding,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    user: str | None = None,
) -> int:
    """Read lines from stdin, evaluate each one and print the result."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    state = asyncio.run(binding.load())
    if state.status != BindingStatus.READY:
        print(f"Evaluator unavailable: {state.reason or state.evaluator}", file=stdout)
        return 1

    workbench = Workbench(binding)
    print(f"Hello {user or _current_user()}! This is the Monkey programming language!", file=stdout)
    print("Feel free to type commands", file=stdout)
    stdout.write(PROMPT)
    stdout.flush()

    for line in stdin:
        source = line.rstrip("\n")
        if source.strip():
            workbench.set_input(source)
            print(workbench.submit().result_text, file=stdout)
        stdout.write(PROMPT)
        stdout.flush()

    stdout.write("\n")
    return 0
