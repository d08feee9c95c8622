from __future__ import annotations

import asyncio
import importlib
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from evalbench.core.models import BindingState, BindingStatus, FailureKind


logger = logging.getLogger(__name__)

Evaluator = Callable[[str], str]


@dataclass(frozen=True)
class Ok:
    text: str


@dataclass(frozen=True)
class Err:
    kind: FailureKind
    detail: str | None = None


EvaluationOutcome = Ok | Err


def resolve_callable(import_path: str) -> Evaluator:
    """Import ``package.module:function`` and return the callable."""
    module_name, sep, attr_path = import_path.partition(":")
    if not sep or not module_name.strip() or not attr_path.strip():
        raise ValueError(f"Evaluator must look like 'package.module:function', got {import_path!r}")

    target: object = importlib.import_module(module_name.strip())
    for attr in attr_path.strip().split("."):
        target = getattr(target, attr)
    if not callable(target):
        raise TypeError(f"Evaluator {import_path!r} is not callable")
    return target  # type: ignore[return-value]


class EvaluatorBinding:
    """Lazily resolved evaluation capability: unready, ready(callable) or unavailable."""

    def __init__(self, import_path: str, *, resolver: Callable[[str], Evaluator] = resolve_callable):
        self.import_path = import_path
        self._resolver = resolver
        self._state_lock = threading.RLock()
        self._load_lock: asyncio.Lock | None = None
        self._status = BindingStatus.UNREADY
        self._evaluator: Evaluator | None = None
        self._reason: str | None = None

    @classmethod
    def ready(cls, evaluator: Evaluator, *, name: str | None = None) -> "EvaluatorBinding":
        label = name or f"{getattr(evaluator, '__module__', '?')}:{getattr(evaluator, '__qualname__', repr(evaluator))}"
        binding = cls(label)
        binding._evaluator = evaluator
        binding._status = BindingStatus.READY
        return binding

    @property
    def status(self) -> BindingStatus:
        return self._status

    @property
    def is_ready(self) -> bool:
        return self._status == BindingStatus.READY

    def state(self) -> BindingState:
        with self._state_lock:
            return BindingState(status=self._status, evaluator=self.import_path, reason=self._reason)

    async def load(self) -> BindingState:
        """Resolve the evaluator once; later calls return the settled state."""
        if self._load_lock is None:
            self._load_lock = asyncio.Lock()
        async with self._load_lock:
            if self._status != BindingStatus.UNREADY:
                return self.state()

            logger.info("Loading evaluator %s", self.import_path)
            try:
                evaluator = await asyncio.to_thread(self._resolver, self.import_path)
            except Exception as exc:  # noqa: BLE001
                with self._state_lock:
                    self._status = BindingStatus.UNAVAILABLE
                    self._reason = f"{type(exc).__name__}: {exc}"
                logger.warning("Evaluator %s unavailable: %s", self.import_path, self._reason)
            else:
                with self._state_lock:
                    self._evaluator = evaluator
                    self._status = BindingStatus.READY
                    self._reason = None
                logger.info("Evaluator %s ready", self.import_path)
        return self.state()

    async def reload(self) -> BindingState:
        with self._state_lock:
            self._status = BindingStatus.UNREADY
            self._evaluator = None
            self._reason = None
        return await self.load()

    def invoke(self, source: str) -> EvaluationOutcome:
        """Run the evaluator; never raises."""
        evaluator = self._evaluator
        if self._status != BindingStatus.READY or evaluator is None:
            return Err(FailureKind.BINDING_UNAVAILABLE, self._reason)
        try:
            result = evaluator(source)
        except Exception as exc:  # noqa: BLE001
            return Err(FailureKind.EVALUATION_FAILURE, f"{type(exc).__name__}: {exc}")
        if not isinstance(result, str):
            return Err(FailureKind.EVALUATION_FAILURE, f"evaluator returned {type(result).__name__}, expected str")
        return Ok(result)
