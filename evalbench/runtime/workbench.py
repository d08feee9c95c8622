from __future__ import annotations

import logging
import threading

from evalbench.core.models import (
    FailureKind,
    LayoutState,
    ViewMode,
    ViewportUnit,
    WidthClass,
    WorkbenchPhase,
    WorkbenchState,
)
from evalbench.runtime.binding import Err, EvaluatorBinding, Ok
from evalbench.runtime.layout import LayoutShell


logger = logging.getLogger(__name__)

FAILURE_MARKER = "[evaluation failed]"


class Workbench:
    """Owns the editor text, the last result and the narrow-layout view mode.

    ``submit`` evaluates the current input through the binding. Submissions
    run one at a time; the result shown always belongs to the most recent
    completed one. Evaluator errors are replaced by ``FAILURE_MARKER`` and
    never leave this class.
    """

    def __init__(self, binding: EvaluatorBinding, *, layout: LayoutShell | None = None):
        self.binding = binding
        self.layout = layout or LayoutShell()
        self._lock = threading.RLock()

        self.input_text = ""
        self.result_text = ""
        self.phase = WorkbenchPhase.IDLE
        self.view_mode = ViewMode.EDITOR
        self.width_class = WidthClass.WIDE
        self.submission_id = 0
        self.completed_submission_id = 0
        self.last_refusal: FailureKind | None = None

    @property
    def can_submit(self) -> bool:
        return self.binding.is_ready and self.phase != WorkbenchPhase.EVALUATING

    def set_input(self, text: str) -> None:
        self.input_text = text

    def set_view_mode(self, mode: ViewMode | str) -> None:
        with self._lock:
            self.view_mode = ViewMode(mode)

    def set_width_class(self, width_class: WidthClass | str) -> None:
        with self._lock:
            self.width_class = WidthClass(width_class)

    def set_viewport(self, width: int, unit: ViewportUnit = ViewportUnit.PX) -> LayoutState:
        with self._lock:
            self.width_class = self.layout.width_class_for(width, unit)
            return self.layout_state()

    def submit(self) -> WorkbenchState:
        with self._lock:
            if not self.binding.is_ready:
                self.last_refusal = FailureKind.BINDING_UNAVAILABLE
                logger.debug("Submit refused: binding is %s", self.binding.status.value)
                return self.state()

            self.submission_id += 1
            submission_id = self.submission_id
            source = self.input_text
            self.last_refusal = None
            self.phase = WorkbenchPhase.EVALUATING

            outcome = self.binding.invoke(source)
            if isinstance(outcome, Ok):
                self.result_text = outcome.text
                self.phase = WorkbenchPhase.EVALUATED
            elif isinstance(outcome, Err):
                logger.debug("Submission %d failed: %s", submission_id, outcome.detail)
                self.result_text = FAILURE_MARKER
                self.phase = WorkbenchPhase.FAILED

            self.completed_submission_id = submission_id
            if self.width_class == WidthClass.NARROW:
                self.view_mode = ViewMode.OUTPUT
            return self.state()

    def layout_state(self) -> LayoutState:
        return self.layout.arrange(self.width_class, self.view_mode)

    def state(self) -> WorkbenchState:
        with self._lock:
            return WorkbenchState(
                input_text=self.input_text,
                result_text=self.result_text,
                phase=self.phase,
                view_mode=self.view_mode,
                width_class=self.width_class,
                submission_id=self.submission_id,
                completed_submission_id=self.completed_submission_id,
                last_refusal=self.last_refusal,
                can_submit=self.can_submit,
                binding=self.binding.state(),
            )
