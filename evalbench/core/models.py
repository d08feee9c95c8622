from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class ThemePreference(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class ResolvedTheme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class ViewMode(str, Enum):
    EDITOR = "editor"
    OUTPUT = "output"


class WidthClass(str, Enum):
    NARROW = "narrow"
    WIDE = "wide"


class ViewportUnit(str, Enum):
    PX = "px"
    COLUMNS = "columns"


class Pane(str, Enum):
    INPUT = "input"
    OUTPUT = "output"


class TriggerPlacement(str, Enum):
    TOOLBAR = "toolbar"
    BETWEEN_PANES = "between_panes"


class WorkbenchPhase(str, Enum):
    IDLE = "idle"
    EVALUATING = "evaluating"
    EVALUATED = "evaluated"
    FAILED = "failed"


class BindingStatus(str, Enum):
    UNREADY = "unready"
    READY = "ready"
    UNAVAILABLE = "unavailable"


class FailureKind(str, Enum):
    EVALUATION_FAILURE = "evaluation_failure"
    BINDING_UNAVAILABLE = "binding_unavailable"


class OverlayRegion(str, Enum):
    BACKDROP = "backdrop"
    CONTENT = "content"


class OverlayAction(str, Enum):
    OPEN = "open"
    CLOSE = "close"
    TOGGLE = "toggle"
    CLICK = "click"


class BindingState(BaseModel):
    status: BindingStatus
    evaluator: str
    reason: str | None = None


class LayoutState(BaseModel):
    width_class: WidthClass
    view_mode: ViewMode
    visible_panes: list[Pane]
    show_toggle: bool
    trigger_placement: TriggerPlacement
    input_editable: bool = True
    output_read_only: bool = True


class OverlayState(BaseModel):
    visible: bool = False


class WorkbenchState(BaseModel):
    input_text: str = ""
    result_text: str = ""
    phase: WorkbenchPhase = WorkbenchPhase.IDLE
    view_mode: ViewMode = ViewMode.EDITOR
    width_class: WidthClass = WidthClass.WIDE
    submission_id: int = 0
    completed_submission_id: int = 0
    last_refusal: FailureKind | None = None
    can_submit: bool = False
    binding: BindingState


class ThemeState(BaseModel):
    preference: ThemePreference
    resolved: ResolvedTheme
    system_appearance: ResolvedTheme
    storage_key: str


class SessionSnapshot(BaseModel):
    session_id: str
    workbench: WorkbenchState
    layout: LayoutState
    overlay: OverlayState
    theme: ThemeState
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class AboutInfo(BaseModel):
    title: str
    description: str
    language_label: str
    language_url: str
    author: str
    author_url: str
    logo_url: str


class InputUpdateRequest(BaseModel):
    input_text: str


class SubmitRequest(BaseModel):
    input_text: str | None = Field(
        default=None,
        description="Latest editor text; applied as an edit right before submitting",
    )


class ViewModeRequest(BaseModel):
    view_mode: ViewMode


class ViewportRequest(BaseModel):
    width: int = Field(..., ge=0)
    unit: ViewportUnit = ViewportUnit.PX


class OverlayRequest(BaseModel):
    action: OverlayAction
    region: OverlayRegion | None = None

    @model_validator(mode="after")
    def validate_click_region(self) -> "OverlayRequest":
        if self.action == OverlayAction.CLICK and self.region is None:
            raise ValueError("click action requires region")
        return self


class ThemeRequest(BaseModel):
    preference: str


class SystemAppearanceRequest(BaseModel):
    appearance: ResolvedTheme
