"""
hintlight/services/llm.py

Gemini ``generateContent`` client.

One POST per hint request, no retries: a failure is terminal for that user
action and the user retries by clicking again. The API key travels as the
``key`` query parameter, so request URLs are never logged.

Usage:
    client = GeminiClient(http_client, api_base=..., model="gemini-1.5-flash-latest")
    text = await client.generate(prompt, api_key)
"""

import httpx

from hintlight.core.errors import TransportError, UpstreamError
from hintlight.core.logging import get_logger

logger = get_logger(__name__)

GENERATION_CONFIG = {
    "temperature": 0.4,
    "topK": 32,
    "topP": 1,
    "maxOutputTokens": 4096,
}


def build_request_body(prompt: str) -> dict:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": dict(GENERATION_CONFIG),
    }


def _error_message(response: httpx.Response) -> str:
    """Pull ``error.message`` out of a failed response, or describe the status."""
    try:
        return f"API request failed: {response.json()['error']['message']}"
    except (ValueError, KeyError, TypeError):
        return f"API request failed with status {response.status_code}"


class GeminiClient:
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        api_base: str,
        model: str,
    ) -> None:
        self._http = http_client
        self._url = f"{api_base.rstrip('/')}/models/{model}:generateContent"
        self._model = model

    async def generate(self, prompt: str, api_key: str) -> str:
        """Send ``prompt`` and return the first candidate's text.

        Raises:
            TransportError: The request never got an HTTP response.
            UpstreamError: Non-2xx status, or a 2xx body without candidate text.
        """
        logger.info("llm_request_start", model=self._model, prompt_length=len(prompt))

        try:
            response = await self._http.post(
                self._url,
                params={"key": api_key},
                json=build_request_body(prompt),
            )
        except httpx.RequestError as exc:
            logger.error(
                "llm_request_error",
                model=self._model,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise TransportError(str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            message = _error_message(response)
            logger.error(
                "llm_request_failed",
                model=self._model,
                status_code=response.status_code,
                error=message,
            )
            raise UpstreamError(message)

        try:
            text = response.json()["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            logger.error(
                "llm_response_malformed",
                model=self._model,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise UpstreamError("Unexpected response from the completion endpoint") from exc

        logger.info("llm_request_success", model=self._model, response_length=len(text))
        return text
