"""
hintlight/services/settings_store.py

Persists the user's Gemini API key in Redis.

There is exactly one setting, ``apiKey``. Reads and writes are single-key
GET/SET, so concurrent saves from the settings form and reads from the relay
rely on Redis' per-key atomicity and need no locking.
"""

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from hintlight.core.errors import TransportError
from hintlight.core.logging import get_logger

logger = get_logger(__name__)

API_KEY_FIELD = "apiKey"
INVALID_KEY_MESSAGE = "Please enter a valid API key."


class SettingsStore:
    def __init__(self, redis: aioredis.Redis, namespace: str = "hintlight:settings") -> None:
        self._redis = redis
        self._key = f"{namespace}:{API_KEY_FIELD}"

    async def get_api_key(self) -> str | None:
        try:
            value = await self._redis.get(self._key)
        except RedisError as exc:
            logger.error("settings_read_failed", error=str(exc))
            raise TransportError(f"Could not read settings: {exc}") from exc
        return value or None

    async def set_api_key(self, value: str) -> None:
        """Save a key. Surrounding whitespace is trimmed; blank keys are rejected.

        Raises:
            ValueError: The key is empty after trimming.
            TransportError: Redis is unreachable.
        """
        api_key = (value or "").strip()
        if not api_key:
            raise ValueError(INVALID_KEY_MESSAGE)
        try:
            await self._redis.set(self._key, api_key)
        except RedisError as exc:
            logger.error("settings_write_failed", error=str(exc))
            raise TransportError(f"Could not save settings: {exc}") from exc
        logger.info("settings_api_key_saved")

    async def clear_api_key(self) -> None:
        try:
            await self._redis.delete(self._key)
        except RedisError as exc:
            logger.error("settings_write_failed", error=str(exc))
            raise TransportError(f"Could not clear settings: {exc}") from exc
        logger.info("settings_api_key_cleared")
