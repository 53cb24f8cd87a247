"""
hintlight/api/v1/settings.py

/api/v1/settings: the API key form.

  GET     returns the saved key (null if none) so the form can prefill it.
  PUT     saves a trimmed key; a blank key is rejected with 400.
  DELETE  forgets the key.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status

from hintlight.core.errors import TransportError
from hintlight.core.logging import get_logger
from hintlight.schemas.api import ApiKeySettings, ApiKeyUpdate, SettingsStatus
from hintlight.services.settings_store import SettingsStore

logger = get_logger(__name__)

router = APIRouter()

SAVED_MESSAGE = "API Key saved!"


def get_settings_store(request: Request) -> SettingsStore:
    return request.app.state.settings_store


def _unavailable(exc: TransportError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=str(exc),
    )


@router.get("/settings", response_model=ApiKeySettings, response_model_by_alias=True)
async def read_settings(store: SettingsStore = Depends(get_settings_store)) -> ApiKeySettings:
    try:
        api_key = await store.get_api_key()
    except TransportError as exc:
        raise _unavailable(exc) from exc
    return ApiKeySettings(api_key=api_key)


@router.put("/settings", response_model=SettingsStatus)
async def save_settings(
    body: ApiKeyUpdate,
    store: SettingsStore = Depends(get_settings_store),
) -> SettingsStatus:
    try:
        await store.set_api_key(body.api_key)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except TransportError as exc:
        raise _unavailable(exc) from exc
    return SettingsStatus(status=SAVED_MESSAGE)


@router.delete("/settings", status_code=status.HTTP_204_NO_CONTENT)
async def clear_settings(store: SettingsStore = Depends(get_settings_store)) -> None:
    try:
        await store.clear_api_key()
    except TransportError as exc:
        raise _unavailable(exc) from exc
