"""
hintlight/services/redis_client.py

Redis connection pool: lifecycle managed by FastAPI's lifespan.

The client is stored on ``app.state.redis`` after startup and torn down
cleanly at shutdown. Redis only backs the settings store; hints themselves
are never persisted.
"""

import redis.asyncio as aioredis
from fastapi import Request

from hintlight.core.config import get_settings
from hintlight.core.logging import get_logger

logger = get_logger(__name__)


async def init_redis(redis_url: str | None = None) -> aioredis.Redis:
    """Create an async Redis connection pool and verify connectivity.

    Called once during application startup (lifespan) and by the CLI.
    Performs a PING to fail fast if Redis is unreachable.

    Raises:
        RuntimeError: If Redis cannot be reached.
    """
    redis_url = redis_url or get_settings().redis_url

    logger.info("redis_init_start", url=redis_url)

    client: aioredis.Redis = aioredis.from_url(
        redis_url,
        decode_responses=True,
        health_check_interval=30,
    )

    try:
        pong = await client.ping()
        if not pong:
            raise ConnectionError("PING returned falsy response")
        logger.info("redis_connected", url=redis_url)
    except Exception as exc:
        logger.error("redis_connection_failed", url=redis_url, error=str(exc))
        raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}: {exc}") from exc

    return client


async def close_redis(client: aioredis.Redis) -> None:
    """Gracefully close the Redis connection pool at shutdown."""
    await client.aclose()
    logger.info("redis_closed")


def get_redis(request: Request) -> aioredis.Redis:
    """FastAPI dependency that retrieves the Redis client from app state."""
    return request.app.state.redis
