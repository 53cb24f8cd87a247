"""
hintlight/services/channel.py

Message channels between the overlay controller and the relay.

  - ``LocalChannel``: the relay lives in the same process (API, CLI).
  - ``HttpChannel``: the relay is a remote hintlight service; messages go to
    ``POST /api/v1/messages``.

Both raise ``TransportError`` when the message cannot be delivered or the
answer cannot be read. A delivered message always yields a HintResponse,
including relay-side failures (``success: false``).
"""

from typing import Protocol

import httpx
from pydantic import ValidationError

from hintlight.core.errors import TransportError
from hintlight.core.logging import get_logger
from hintlight.schemas.messages import GetHintsRequest, HintResponse
from hintlight.services.relay import HintRelay

logger = get_logger(__name__)

MESSAGES_PATH = "/api/v1/messages"


class MessageChannel(Protocol):
    async def send(self, message: GetHintsRequest) -> HintResponse: ...


class LocalChannel:
    def __init__(self, relay: HintRelay) -> None:
        self._relay = relay

    async def send(self, message: GetHintsRequest) -> HintResponse:
        return await self._relay.dispatch(message)


class HttpChannel:
    def __init__(self, http_client: httpx.AsyncClient, base_url: str) -> None:
        self._http = http_client
        self._url = f"{base_url.rstrip('/')}{MESSAGES_PATH}"

    async def send(self, message: GetHintsRequest) -> HintResponse:
        payload = message.model_dump(mode="json", by_alias=True)
        try:
            response = await self._http.post(self._url, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "channel_delivery_rejected",
                url=self._url,
                status_code=exc.response.status_code,
            )
            raise TransportError(
                f"Relay rejected the message with status {exc.response.status_code}"
            ) from exc
        except httpx.RequestError as exc:
            logger.error("channel_delivery_failed", url=self._url, error=str(exc))
            raise TransportError(f"Could not reach the relay: {exc}") from exc

        try:
            return HintResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.error("channel_response_unreadable", url=self._url, error=str(exc))
            raise TransportError("The relay sent an unreadable response") from exc
