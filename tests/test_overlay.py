from __future__ import annotations

import asyncio
import threading

import pytest

from hintlight.core.errors import TransportError
from hintlight.overlay.controller import (
    EXTRACTION_FAILED_MESSAGE,
    OverlayController,
    PageSnapshot,
)
from hintlight.overlay.render import (
    BUTTON_ID,
    MODAL_ID,
    NO_HINTS_MESSAGE,
    inject_overlay,
    render_modal,
)
from hintlight.overlay.state import OverlayState, OverlayStatus
from hintlight.schemas.messages import GetHintsRequest, HintResponse
from hintlight.schemas.problem import Platform, ProblemInfo

from conftest import CODEFORCES_URL


class RecordingChannel:
    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.sent: list[GetHintsRequest] = []

    async def send(self, message: GetHintsRequest) -> HintResponse:
        self.sent.append(message)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def page(load_fixture) -> PageSnapshot:
    return PageSnapshot(html=load_fixture("codeforces_problem.html"), url=CODEFORCES_URL)


def make_controller(channel, renders=None, **kwargs) -> OverlayController:
    def on_render(state, html):
        if renders is not None:
            renders.append((state, html))

    return OverlayController(channel, settle_delay=0, on_render=on_render, **kwargs)


@pytest.mark.anyio
async def test_success_renders_panels_in_order(page) -> None:
    channel = RecordingChannel(HintResponse.ok("* A\n* B\n* C"))
    renders: list = []
    controller = make_controller(channel, renders)

    state = await controller.trigger(page)

    assert state.status is OverlayStatus.SUCCESS
    assert [p.index for p in state.panels] == [1, 2, 3]
    assert [str(p.text) for p in state.panels] == ["A", "B", "C"]
    assert [s.status for s, _ in renders] == [OverlayStatus.LOADING, OverlayStatus.SUCCESS]
    assert controller.html.count('class="hint-accordion-header"') == 3

    sent = channel.sent[0]
    assert sent.action == "getHints"
    assert sent.problem_info.title == "Watermelon"


@pytest.mark.anyio
async def test_unsupported_page_sends_nothing() -> None:
    channel = RecordingChannel()
    controller = make_controller(channel)

    state = await controller.trigger(PageSnapshot(html="<html></html>", url="https://example.com/"))

    assert state.status is OverlayStatus.ERROR
    assert state.message == EXTRACTION_FAILED_MESSAGE
    assert channel.sent == []


@pytest.mark.anyio
async def test_transport_failure_shows_raw_error(page) -> None:
    channel = RecordingChannel(TransportError("Could not establish connection. Receiving end does not exist."))
    controller = make_controller(channel)

    state = await controller.trigger(page)

    assert state.status is OverlayStatus.ERROR
    assert state.message == "Error: Could not establish connection. Receiving end does not exist."


@pytest.mark.anyio
async def test_relay_failure_is_shown_verbatim(page) -> None:
    channel = RecordingChannel(HintResponse.failure("Failed to fetch hints: API request failed: quota exceeded"))
    controller = make_controller(channel)

    state = await controller.trigger(page)

    assert state.status is OverlayStatus.ERROR
    assert state.message == "Failed to fetch hints: API request failed: quota exceeded"
    assert "quota exceeded" in controller.html


@pytest.mark.anyio
@pytest.mark.parametrize("hints", ["", "I cannot help with that."])
async def test_no_hints_message(page, hints) -> None:
    controller = make_controller(RecordingChannel(HintResponse.ok(hints)))

    state = await controller.trigger(page)

    assert state.panels == ()
    assert state.message == NO_HINTS_MESSAGE
    assert NO_HINTS_MESSAGE in controller.html
    assert "hint-accordion" not in controller.html


@pytest.mark.anyio
async def test_each_trigger_restarts_from_loading(page) -> None:
    channel = RecordingChannel(HintResponse.failure("boom"), HintResponse.ok("* A"))
    renders: list = []
    controller = make_controller(channel, renders)

    await controller.trigger(page)
    state = await controller.trigger(page)

    assert [s.status for s, _ in renders] == [
        OverlayStatus.LOADING,
        OverlayStatus.ERROR,
        OverlayStatus.LOADING,
        OverlayStatus.SUCCESS,
    ]
    assert state.request_id == 2
    assert state.message is None


@pytest.mark.anyio
async def test_stale_response_is_discarded(page) -> None:
    release_first = asyncio.Event()
    first_sent = asyncio.Event()

    class SlowFirstChannel:
        calls = 0

        async def send(self, message):
            self.calls += 1
            if self.calls == 1:
                first_sent.set()
                await release_first.wait()
                return HintResponse.ok("* stale hint")
            return HintResponse.ok("* fresh hint")

    controller = make_controller(SlowFirstChannel())

    first = asyncio.create_task(controller.trigger(page))
    await first_sent.wait()
    second = await controller.trigger(page)
    release_first.set()
    await first

    assert second.request_id == 2
    assert controller.state.request_id == 2
    assert [str(p.text) for p in controller.state.panels] == ["fresh hint"]


@pytest.mark.anyio
async def test_toggle_twice_restores_collapsed_state(page) -> None:
    controller = make_controller(
        RecordingChannel(HintResponse.ok("* A\n* B")),
        measure=lambda panel: 120,
    )
    await controller.trigger(page)
    original = controller.state.panel(1)

    opened = controller.toggle(1)
    assert opened.panel(1).expanded is True
    assert opened.panel(1).max_height == "120px"
    assert opened.panel(2).expanded is False
    assert 'style="max-height: 120px"' in controller.html

    closed = controller.toggle(1)
    assert closed.panel(1) == original
    assert "max-height" not in controller.html


@pytest.mark.anyio
async def test_panels_open_independently(page) -> None:
    controller = make_controller(RecordingChannel(HintResponse.ok("* A\n* B\n* C")))
    await controller.trigger(page)

    controller.toggle(1)
    state = controller.toggle(3)

    assert [p.expanded for p in state.panels] == [True, False, True]
    with pytest.raises(KeyError):
        controller.toggle(4)


@pytest.mark.anyio
async def test_close_hides_modal_and_keeps_panels(page) -> None:
    controller = make_controller(RecordingChannel(HintResponse.ok("* A")))
    await controller.trigger(page)

    state = controller.close()

    assert state.visible is False
    assert len(state.panels) == 1
    assert 'style="display: none"' in controller.html


def test_render_modal_escapes_messages() -> None:
    html = render_modal(OverlayState(status=OverlayStatus.ERROR, message="<b>bad</b>", visible=True))
    assert "&lt;b&gt;bad&lt;/b&gt;" in html
    assert f'id="{MODAL_ID}"' in html


def test_inject_overlay_only_once(load_fixture) -> None:
    page_html = load_fixture("codeforces_problem.html")

    once = inject_overlay(page_html)
    twice = inject_overlay(once)

    assert once.count(f'id="{BUTTON_ID}"') == 1
    assert once.count(f'id="{MODAL_ID}"') == 1
    assert twice == once
    assert "Watermelon" in once


@pytest.mark.anyio
async def test_extraction_does_not_block_the_event_loop(page) -> None:
    released = threading.Event()

    def slow_extract(html, url):
        # Only returns if the loop keeps running while this thread waits.
        if not released.wait(timeout=5):
            return None
        return ProblemInfo(platform=Platform.CODEFORCES, title="Watermelon")

    async def release_soon() -> None:
        await asyncio.sleep(0.01)
        released.set()

    controller = make_controller(RecordingChannel(HintResponse.ok("* A")), extract=slow_extract)

    state, _ = await asyncio.gather(controller.trigger(page), release_soon())

    assert state.status is OverlayStatus.SUCCESS
    assert [str(p.text) for p in state.panels] == ["A"]
