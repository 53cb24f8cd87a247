"""
hintlight/main.py

FastAPI application entrypoint.

Startup sequence (via lifespan):
  1. Logging is configured (JSON in prod, coloured console in dev).
  2. Redis connection pool is created and PINGed (fails fast if unreachable).
  3. A shared httpx client, the settings store, the Gemini client and the
     hint relay are built and stored on ``app.state``.

Shutdown sequence (via lifespan):
  1. The httpx client is closed.
  2. Redis connection pool is gracefully closed.

Environment variables are loaded by Pydantic Settings from ``.env``; there
is no ``load_dotenv()`` call here.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hintlight.core.config import get_settings
from hintlight.core.logging import get_logger, setup_logging
from hintlight.services.llm import GeminiClient
from hintlight.services.redis_client import close_redis, init_redis
from hintlight.services.relay import HintRelay
from hintlight.services.settings_store import SettingsStore

EXTENSION_ORIGIN_REGEX = r"^(chrome|moz)-extension://.*$"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup and shutdown of all external service connections."""
    settings = get_settings()

    # ── Startup ───────────────────────────────────────────────────────────────
    setup_logging(environment=settings.environment)
    logger = get_logger(__name__)

    logger.info(
        "app_startup",
        version=settings.app_version,
        environment=settings.environment,
    )

    app.state.redis = await init_redis()
    app.state.http = httpx.AsyncClient(timeout=settings.llm_timeout_seconds)
    app.state.settings_store = SettingsStore(app.state.redis, settings.settings_namespace)
    app.state.relay = HintRelay(
        app.state.settings_store,
        GeminiClient(
            app.state.http,
            api_base=settings.gemini_api_base,
            model=settings.gemini_model,
        ),
    )

    logger.info("app_ready", model=settings.gemini_model)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────────
    logger.info("app_shutdown", message="Shutting down gracefully...")
    await app.state.http.aclose()
    await close_redis(app.state.redis)
    logger.info("app_stopped")


def create_app() -> FastAPI:
    """Application factory.

    Returns a configured FastAPI instance. Separating creation from the module
    global makes the app importable without side effects (useful for testing).
    """
    settings = get_settings()

    app = FastAPI(
        title="hintlight",
        description=(
            "Progressive hints for competitive-programming problems. Scrapes LeetCode "
            "and Codeforces pages, relays them to Gemini and renders the answer as an "
            "accordion overlay."
        ),
        version=settings.app_version,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
    )

    # ── CORS ──────────────────────────────────────────────────────────────────
    # Extension pages are always allowed; anything else only in development.
    origins = ["*"] if not settings.is_production else settings.allowed_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_origin_regex=EXTENSION_ORIGIN_REGEX,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    # ── Routers ───────────────────────────────────────────────────────────────
    from hintlight.api.v1 import health, messages, overlay, settings as settings_api  # noqa: PLC0415

    app.include_router(health.router, prefix="/api/v1", tags=["Health"])
    app.include_router(messages.router, prefix="/api/v1", tags=["Messages"])
    app.include_router(settings_api.router, prefix="/api/v1", tags=["Settings"])
    app.include_router(overlay.router, prefix="/api/v1", tags=["Overlay"])

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        return {
            "service": "hintlight",
            "version": settings.app_version,
            "docs": "/docs",
        }

    return app


# Module-level app instance for uvicorn: ``uvicorn hintlight.main:app``
app = create_app()
