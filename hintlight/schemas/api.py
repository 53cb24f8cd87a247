"""
hintlight/schemas/api.py

Request/response models for the settings, overlay and health endpoints.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


# ── Settings (popup form) ─────────────────────────────────────────────────────


class ApiKeySettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    api_key: str | None = Field(default=None, alias="apiKey")


class ApiKeyUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    api_key: str = Field(..., alias="apiKey", max_length=512)


class SettingsStatus(BaseModel):
    status: str


# ── Overlay ───────────────────────────────────────────────────────────────────


class OverlayRequest(BaseModel):
    """Request body for POST /api/v1/overlay."""

    url: str = Field(..., min_length=1, description="Location of the scraped page")
    html: str = Field(..., description="Serialized DOM of the page")
    inject: bool = Field(
        default=False,
        description="Also return the page with the trigger button and modal injected",
    )


class PanelOut(BaseModel):
    index: int
    text: str
    expanded: bool


class OverlayResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: Literal["idle", "loading", "success", "error"]
    request_id: int = Field(..., alias="requestId")
    message: str | None = None
    panels: list[PanelOut] = Field(default_factory=list)
    html: str
    page: str | None = None


# ── Health check ──────────────────────────────────────────────────────────────


class ServiceStatus(BaseModel):
    status: Literal["ok", "degraded", "error"]
    detail: str | None = None


class HealthResponse(BaseModel):
    status: Literal["ok", "degraded"]
    version: str
    environment: str
    redis: ServiceStatus
