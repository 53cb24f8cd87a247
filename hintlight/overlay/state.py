"""
hintlight/overlay/state.py

The overlay's UI state as a value object.

The controller never edits a state in place: every transition builds a new
``OverlayState`` and hands it to the render functions. Whatever is on screen
is therefore always a function of the latest state, never of leftover DOM.
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from markupsafe import Markup


class OverlayStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class HintPanel:
    """One accordion entry. ``index`` starts at 1."""

    index: int
    text: Markup
    expanded: bool = False
    # Measured content height while open, e.g. "84px"; None when collapsed.
    max_height: str | None = None

    def toggled(self, measured_height: int) -> "HintPanel":
        if self.expanded:
            return replace(self, expanded=False, max_height=None)
        return replace(self, expanded=True, max_height=f"{measured_height}px")


@dataclass(frozen=True)
class OverlayState:
    status: OverlayStatus = OverlayStatus.IDLE
    request_id: int = 0
    message: str | None = None
    panels: tuple[HintPanel, ...] = field(default_factory=tuple)
    visible: bool = False

    @classmethod
    def loading(cls, request_id: int, message: str) -> "OverlayState":
        return cls(
            status=OverlayStatus.LOADING,
            request_id=request_id,
            message=message,
            visible=True,
        )

    def failed(self, message: str) -> "OverlayState":
        return replace(self, status=OverlayStatus.ERROR, message=message, panels=())

    def succeeded(self, panels: tuple[HintPanel, ...]) -> "OverlayState":
        return replace(self, status=OverlayStatus.SUCCESS, message=None, panels=panels)

    def with_panel(self, panel: HintPanel) -> "OverlayState":
        panels = tuple(panel if p.index == panel.index else p for p in self.panels)
        return replace(self, panels=panels)

    def panel(self, index: int) -> HintPanel:
        for p in self.panels:
            if p.index == index:
                return p
        raise KeyError(f"No hint panel with index {index}")

    def hidden(self) -> "OverlayState":
        return replace(self, visible=False)
