"""
hintlight/api/v1/overlay.py

POST /api/v1/overlay: run the full pipeline on a page snapshot.

Scrapes the submitted HTML, relays the problem in-process, and returns the
resulting overlay state together with the rendered modal. With
``inject: true`` the response also carries the page with the trigger button
and modal root added.
"""

import asyncio

from fastapi import APIRouter, Depends

from hintlight.core.config import get_settings
from hintlight.core.logging import get_logger
from hintlight.overlay.controller import OverlayController, PageSnapshot
from hintlight.overlay.render import inject_overlay
from hintlight.schemas.api import OverlayRequest, OverlayResponse, PanelOut
from hintlight.services.channel import LocalChannel
from hintlight.services.relay import HintRelay, get_relay

logger = get_logger(__name__)

router = APIRouter()


@router.post("/overlay", response_model=OverlayResponse, response_model_by_alias=True)
async def build_overlay(
    body: OverlayRequest,
    relay: HintRelay = Depends(get_relay),
) -> OverlayResponse:
    settings = get_settings()
    controller = OverlayController(
        LocalChannel(relay),
        settle_delay=settings.settle_delay_seconds,
    )
    state = await controller.trigger(PageSnapshot(html=body.html, url=body.url))

    page = await asyncio.to_thread(inject_overlay, body.html, state) if body.inject else None

    logger.info("overlay_built", url=body.url, status=state.status.value, panels=len(state.panels))

    return OverlayResponse(
        status=state.status.value,
        request_id=state.request_id,
        message=state.message,
        panels=[
            PanelOut(index=p.index, text=str(p.text), expanded=p.expanded)
            for p in state.panels
        ],
        html=controller.html,
        page=page,
    )
