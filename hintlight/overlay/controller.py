"""
hintlight/overlay/controller.py

Drives the overlay through ``idle → loading → success | error``.

Each ``trigger()`` call takes a fresh request id and starts over from
``loading``, whatever the previous state. Responses are applied only if
their request id is still the latest one, so a slow answer to an old click
can never overwrite the result of a newer click.

Usage:
    controller = OverlayController(LocalChannel(relay), settle_delay=0.15)
    state = await controller.trigger(PageSnapshot(html=page_html, url=page_url))
    state = controller.toggle(1)
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass

from hintlight.core.errors import TransportError
from hintlight.core.logging import get_logger
from hintlight.extractors import extract_problem
from hintlight.overlay.markup import parse_hints
from hintlight.overlay.render import NO_HINTS_MESSAGE, render_modal
from hintlight.overlay.state import HintPanel, OverlayState
from hintlight.schemas.messages import GetHintsRequest
from hintlight.schemas.problem import ProblemInfo
from hintlight.services.channel import MessageChannel

logger = get_logger(__name__)

LOADING_MESSAGE = "Getting problem info and generating hints..."
EXTRACTION_FAILED_MESSAGE = (
    "Could not extract problem information from this page. "
    "Please make sure you are on a valid problem page."
)

# Rough rendering metrics for the default panel measurement.
_LINE_HEIGHT_PX = 22
_CHARS_PER_LINE = 60
_PANEL_PADDING_PX = 30


@dataclass(frozen=True)
class PageSnapshot:
    html: str
    url: str


def estimate_panel_height(panel: HintPanel) -> int:
    """Approximate scroll height of an opened panel, in px."""
    lines = max(1, -(-len(panel.text.striptags()) // _CHARS_PER_LINE))
    return lines * _LINE_HEIGHT_PX + _PANEL_PADDING_PX


class OverlayController:
    def __init__(
        self,
        channel: MessageChannel,
        *,
        settle_delay: float = 0.15,
        extract: Callable[[str, str], ProblemInfo | None] = extract_problem,
        measure: Callable[[HintPanel], int] = estimate_panel_height,
        on_render: Callable[[OverlayState, str], None] | None = None,
    ) -> None:
        self._channel = channel
        self._settle_delay = settle_delay
        self._extract = extract
        self._measure = measure
        self._on_render = on_render
        self._latest_request_id = 0
        self.state = OverlayState()
        self.html = render_modal(self.state)

    def _transition(self, state: OverlayState) -> OverlayState:
        self.state = state
        self.html = render_modal(state)
        if self._on_render is not None:
            self._on_render(state, self.html)
        return state

    def _is_current(self, request_id: int) -> bool:
        if request_id == self._latest_request_id:
            return True
        logger.info(
            "overlay_stale_response_discarded",
            request_id=request_id,
            latest_request_id=self._latest_request_id,
        )
        return False

    async def trigger(self, page: PageSnapshot) -> OverlayState:
        """Handle a click on the trigger button.

        Returns the state this request ended in. If a newer request started
        meanwhile, this request's result is dropped and the controller's
        current state is returned instead.
        """
        self._latest_request_id += 1
        request_id = self._latest_request_id
        self._transition(OverlayState.loading(request_id, LOADING_MESSAGE))

        # Let the host page finish rendering before scraping it.
        await asyncio.sleep(self._settle_delay)
        if not self._is_current(request_id):
            return self.state

        # Parsing a full page is CPU-bound; keep it off the event loop.
        info = await asyncio.to_thread(self._extract, page.html, page.url)
        if not self._is_current(request_id):
            return self.state
        if info is None:
            return self._transition(self.state.failed(EXTRACTION_FAILED_MESSAGE))

        try:
            response = await self._channel.send(GetHintsRequest(problem_info=info))
        except TransportError as exc:
            if not self._is_current(request_id):
                return self.state
            logger.warning("overlay_transport_error", request_id=request_id, error=str(exc))
            return self._transition(self.state.failed(f"Error: {exc}"))

        if not self._is_current(request_id):
            return self.state

        if not response.success:
            return self._transition(self.state.failed(response.error or "Unknown error"))

        panels = parse_hints(response.hints or "")
        if not panels:
            logger.warning("overlay_no_hints_parsed", request_id=request_id)
            return self._transition(self.state.failed(NO_HINTS_MESSAGE))

        logger.info("overlay_hints_rendered", request_id=request_id, panels=len(panels))
        return self._transition(self.state.succeeded(panels))

    def toggle(self, index: int) -> OverlayState:
        """Open or close one hint panel; other panels are left as they are."""
        panel = self.state.panel(index)
        measured = 0 if panel.expanded else self._measure(panel)
        return self._transition(self.state.with_panel(panel.toggled(measured)))

    def close(self) -> OverlayState:
        return self._transition(self.state.hidden())
