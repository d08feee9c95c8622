from __future__ import annotations

import asyncio

import pytest

from evalbench.core.models import BindingStatus, FailureKind
from evalbench.runtime.binding import Err, EvaluatorBinding, Ok, resolve_callable


def test_resolve_callable_imports_module_attribute() -> None:
    evaluate = resolve_callable("evalbench.core.reference_evaluator:evaluate")
    assert evaluate("1 + 2") == "3"


@pytest.mark.parametrize("path", ["no_colon_here", ":evaluate", "module:"])
def test_resolve_callable_rejects_malformed_paths(path: str) -> None:
    with pytest.raises(ValueError):
        resolve_callable(path)


def test_load_resolves_exactly_once() -> None:
    calls: list[str] = []

    def resolver(path: str):
        calls.append(path)
        return str.upper

    binding = EvaluatorBinding("fake:upper", resolver=resolver)
    assert binding.status == BindingStatus.UNREADY

    async def load_twice():
        return await asyncio.gather(binding.load(), binding.load())

    first, second = asyncio.run(load_twice())
    assert first.status == second.status == BindingStatus.READY
    assert calls == ["fake:upper"]
    assert binding.invoke("abc") == Ok("ABC")


def test_load_failure_is_reported_as_unavailable() -> None:
    binding = EvaluatorBinding("evalbench_missing_module_xyz:evaluate")
    state = asyncio.run(binding.load())

    assert state.status == BindingStatus.UNAVAILABLE
    assert state.reason and "ModuleNotFoundError" in state.reason
    outcome = binding.invoke("1")
    assert isinstance(outcome, Err)
    assert outcome.kind == FailureKind.BINDING_UNAVAILABLE


def test_reload_retries_after_failure() -> None:
    attempts = {"count": 0}

    def flaky(path: str):
        attempts["count"] += 1
        if attempts["count"] == 1:
            raise ImportError("not built yet")
        return str.lower

    binding = EvaluatorBinding("fake:lower", resolver=flaky)
    assert asyncio.run(binding.load()).status == BindingStatus.UNAVAILABLE
    assert asyncio.run(binding.load()).status == BindingStatus.UNAVAILABLE
    assert asyncio.run(binding.reload()).status == BindingStatus.READY
    assert attempts["count"] == 2


def test_invoke_converts_exceptions_and_non_text_results() -> None:
    def raises(source: str) -> str:
        raise RuntimeError("boom")

    assert EvaluatorBinding.ready(raises).invoke("x") == Err(FailureKind.EVALUATION_FAILURE, "RuntimeError: boom")

    outcome = EvaluatorBinding.ready(lambda source: 42).invoke("x")  # type: ignore[arg-type, return-value]
    assert isinstance(outcome, Err)
    assert outcome.kind == FailureKind.EVALUATION_FAILURE
