from __future__ import annotations

from evalbench.core.models import (
    LayoutState,
    OverlayRegion,
    OverlayState,
    Pane,
    TriggerPlacement,
    ViewMode,
    ViewportUnit,
    WidthClass,
)


class LayoutShell:
    """Decides which panes are visible for a viewport width class."""

    def __init__(self, breakpoint_px: int = 768, breakpoint_columns: int = 100):
        self.breakpoint_px = breakpoint_px
        self.breakpoint_columns = breakpoint_columns

    def width_class_for(self, width: int, unit: ViewportUnit = ViewportUnit.PX) -> WidthClass:
        breakpoint = self.breakpoint_columns if unit == ViewportUnit.COLUMNS else self.breakpoint_px
        return WidthClass.NARROW if width < breakpoint else WidthClass.WIDE

    @staticmethod
    def arrange(width_class: WidthClass, view_mode: ViewMode) -> LayoutState:
        if width_class == WidthClass.WIDE:
            return LayoutState(
                width_class=width_class,
                view_mode=view_mode,
                visible_panes=[Pane.INPUT, Pane.OUTPUT],
                show_toggle=False,
                trigger_placement=TriggerPlacement.BETWEEN_PANES,
            )

        visible = Pane.OUTPUT if view_mode == ViewMode.OUTPUT else Pane.INPUT
        return LayoutState(
            width_class=width_class,
            view_mode=view_mode,
            visible_panes=[visible],
            show_toggle=True,
            trigger_placement=TriggerPlacement.TOOLBAR,
        )


class InfoOverlay:
    """Dismissible info dialog.

    Clicks on the content region are absorbed so they never reach the
    backdrop's close handler.
    """

    def __init__(self) -> None:
        self.visible = False

    @staticmethod
    def content_absorbs_click(region: OverlayRegion) -> bool:
        return region == OverlayRegion.CONTENT

    def open(self) -> None:
        self.visible = True

    def close(self) -> None:
        self.visible = False

    def toggle(self) -> None:
        self.visible = not self.visible

    def click(self, region: OverlayRegion | str) -> None:
        if not self.visible or self.content_absorbs_click(OverlayRegion(region)):
            return
        self.close()

    def state(self) -> OverlayState:
        return OverlayState(visible=self.visible)
