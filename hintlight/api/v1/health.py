"""
hintlight/api/v1/health.py

GET /api/v1/health: Backend and settings-store connectivity check.

Returns HTTP 200 if Redis is reachable, HTTP 503 otherwise: without the
settings store no hint request can succeed. The completion endpoint is not
probed: that would need the user's key and cost a request.
"""

import redis.asyncio as aioredis
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from hintlight.core.config import get_settings
from hintlight.core.logging import get_logger
from hintlight.schemas.api import HealthResponse, ServiceStatus
from hintlight.services.redis_client import get_redis

logger = get_logger(__name__)
router = APIRouter()


async def _probe_redis(redis: aioredis.Redis) -> ServiceStatus:
    """Issue an async PING to verify Redis is reachable."""
    try:
        pong = await redis.ping()
        if pong:
            return ServiceStatus(status="ok")
        return ServiceStatus(status="error", detail="PING returned falsy response")
    except Exception as exc:
        logger.warning("health_redis_probe_failed", error=str(exc))
        return ServiceStatus(status="error", detail=str(exc))


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Backend health check",
    description="Verifies that the settings store (Redis) is reachable. Returns HTTP 503 if not.",
)
async def health_check(redis: aioredis.Redis = Depends(get_redis)) -> JSONResponse:
    settings = get_settings()

    redis_status = await _probe_redis(redis)
    all_ok = redis_status.status == "ok"
    overall = "ok" if all_ok else "degraded"

    response = HealthResponse(
        status=overall,
        version=settings.app_version,
        environment=settings.environment,
        redis=redis_status,
    )

    logger.info("health_check", overall=overall, redis=redis_status.status)

    return JSONResponse(
        content=response.model_dump(),
        status_code=status.HTTP_200_OK if all_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
    )
