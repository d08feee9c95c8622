import io

from evalbench.runtime.binding import EvaluatorBinding
from evalbench.runtime.workbench import FAILURE_MARKER


def _calc(source: str) -> str:
    if source == "1 + 2":
        return "3"
    raise ValueError("parse error")


def test_repl_evaluates_each_line() -> None:
    from evalbench.repl import start

    stdin = io.StringIO("1 + 2\n\n((\n")
    stdout = io.StringIO()
    code = start(EvaluatorBinding.ready(_calc), stdin=stdin, stdout=stdout, user="tester")

    assert code == 0
    output = stdout.getvalue()
    assert output.startswith("Hello tester!")
    assert ">> 3\n" in output
    assert FAILURE_MARKER in output
    assert output.count(">> ") == 4


def test_repl_exits_when_evaluator_cannot_load() -> None:
    from evalbench.repl import start

    stdout = io.StringIO()
    code = start(EvaluatorBinding("evalbench_missing_module_xyz:evaluate"), stdin=io.StringIO(""), stdout=stdout)

    assert code == 1
    assert "Evaluator unavailable" in stdout.getvalue()
