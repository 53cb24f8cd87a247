"""
hintlight/core/config.py

Application settings loaded from environment variables / .env file.
Uses Pydantic Settings v2 for type-safe config with fail-fast validation:
a malformed URL or a negative delay stops the service at startup instead of
surfacing as a confusing failure on the first hint request.

The Gemini API key is deliberately NOT a setting. It is user data, written
through ``PUT /api/v1/settings`` and read from the settings store on every
request.

Usage:
    from hintlight.core.config import get_settings
    settings = get_settings()
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="HINTLIGHT_",
        case_sensitive=False,
        # Extra fields in .env are silently ignored.
        extra="ignore",
    )

    # ── Redis (settings store) ────────────────────────────────────────────────
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL for the settings store",
    )
    settings_namespace: str = Field(
        default="hintlight:settings",
        description="Key prefix for persisted settings (the API key lives at <prefix>:apiKey)",
    )

    # ── Completion endpoint ───────────────────────────────────────────────────
    gemini_api_base: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the Gemini REST API",
    )
    gemini_model: str = Field(
        default="gemini-1.5-flash-latest",
        description="Model name used for generateContent",
    )
    llm_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Transport timeout for the completion request",
    )

    # ── Overlay ───────────────────────────────────────────────────────────────
    settle_delay_ms: int = Field(
        default=150,
        description="Delay between entering the loading state and scraping the page",
    )

    # ── Application ───────────────────────────────────────────────────────────
    environment: Literal["development", "production"] = Field(
        default="development",
        description="Runtime environment; controls log format and debug features",
    )
    app_version: str = Field(default="0.1.0")
    allowed_origins: list[str] = Field(
        default_factory=list,
        description="Extra CORS origins allowed in production (extension origins are always allowed)",
    )

    # ── Validators ────────────────────────────────────────────────────────────
    @field_validator("gemini_api_base")
    @classmethod
    def api_base_must_be_http(cls, v: str) -> str:
        if not v.startswith(("https://", "http://127.", "http://localhost")):
            raise ValueError(
                "HINTLIGHT_GEMINI_API_BASE must start with https:// "
                "(or http://127.x.x.x / http://localhost for a local stub)"
            )
        return v.rstrip("/")

    @field_validator("redis_url")
    @classmethod
    def redis_url_must_have_scheme(cls, v: str) -> str:
        if not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError("HINTLIGHT_REDIS_URL must start with redis://, rediss:// or unix://")
        return v

    @field_validator("settle_delay_ms")
    @classmethod
    def settle_delay_must_not_be_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("HINTLIGHT_SETTLE_DELAY_MS must be >= 0")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def settle_delay_seconds(self) -> float:
        return self.settle_delay_ms / 1000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return (and cache) the application settings singleton.

    The cache means settings are validated once at first call.
    Use `get_settings.cache_clear()` in tests to reload from a fresh environment.
    """
    return Settings()
