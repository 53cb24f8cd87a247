"""
hintlight/api/v1/messages.py

POST /api/v1/messages: the relay end of the message channel.

Always answers 200 with a HintResponse body for ``getHints`` messages, even
when the relay fails: failures are data (``success: false``) so the overlay
can show them in the modal. Only malformed messages (unknown ``action``,
invalid ``problemInfo``) are rejected with 422.
"""

from fastapi import APIRouter, Depends

from hintlight.core.logging import get_logger
from hintlight.schemas.messages import GetHintsRequest, HintResponse
from hintlight.services.relay import HintRelay, get_relay

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/messages",
    response_model=HintResponse,
    response_model_exclude_none=True,
    summary="Deliver a message to the hint relay",
)
async def post_message(
    body: GetHintsRequest,
    relay: HintRelay = Depends(get_relay),
) -> HintResponse:
    logger.info(
        "message_received",
        action=body.action,
        has_problem=body.problem_info is not None,
    )
    return await relay.dispatch(body)
