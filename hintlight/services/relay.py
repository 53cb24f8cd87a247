"""
hintlight/services/relay.py

The hint fetch relay: receives a scraped problem, loads the API key,
builds the prompt, calls the completion endpoint and answers with a
``HintResponse``.

Flow per request:
  1. Reject a missing problem: no storage read, no network.
  2. Read the API key. A missing key means no network call either.
  3. Compile the prompt (statement truncated to MAX_CONTENT_CHARS).
  4. One ``generateContent`` call.
  5. Wrap the text, or the failure, into a HintResponse.

There is no queue and no de-duplication: two requests for the same problem
run independently. The overlay decides which answer is current.
"""

from fastapi import Request

from hintlight.core.errors import ConfigurationError, HintError
from hintlight.core.logging import get_logger
from hintlight.schemas.messages import GetHintsRequest, HintResponse
from hintlight.schemas.problem import ProblemInfo
from hintlight.services.hint_prompt import compile_hint_prompt
from hintlight.services.llm import GeminiClient
from hintlight.services.settings_store import SettingsStore

logger = get_logger(__name__)

MISSING_PROBLEM_MESSAGE = "Problem information was not provided."
MISSING_KEY_MESSAGE = "Gemini API key not found. Please set it in the extension settings."


class HintRelay:
    def __init__(self, store: SettingsStore, llm: GeminiClient) -> None:
        self._store = store
        self._llm = llm

    async def dispatch(self, message: GetHintsRequest) -> HintResponse:
        """Entry point for the message channel."""
        return await self.handle(message.problem_info)

    async def handle(self, problem_info: ProblemInfo | None) -> HintResponse:
        if problem_info is None:
            logger.warning("hint_relay_missing_problem")
            return HintResponse.failure(MISSING_PROBLEM_MESSAGE)

        try:
            api_key = await self._store.get_api_key()
            if not api_key:
                raise ConfigurationError(MISSING_KEY_MESSAGE)

            prompt = compile_hint_prompt(problem_info)
            hints = await self._llm.generate(prompt, api_key)

        except ConfigurationError as exc:
            logger.warning("hint_relay_unconfigured")
            return HintResponse.failure(str(exc))
        except HintError as exc:
            logger.error(
                "hint_relay_failed",
                platform=problem_info.platform.value,
                title=problem_info.title,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return HintResponse.failure(f"Failed to fetch hints: {exc}")

        logger.info(
            "hint_relay_success",
            platform=problem_info.platform.value,
            title=problem_info.title,
            hints_length=len(hints),
        )
        return HintResponse.ok(hints)


def get_relay(request: Request) -> HintRelay:
    """FastAPI dependency that retrieves the relay from app state."""
    return request.app.state.relay
