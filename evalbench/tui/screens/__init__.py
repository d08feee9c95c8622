from evalbench.tui.screens.info_overlay import InfoContent, InfoOverlayScreen

__all__ = [
    "InfoContent",
    "InfoOverlayScreen",
]
