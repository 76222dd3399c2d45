"""Site settings, dark-mode flag and settings diagnostics."""

from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from cms.core.dependencies import get_store, require_writable
from cms.schemas.content import DarkModeResponse, SiteSettings, SuccessResponse
from cms.services.content_store import ContentStore

router = APIRouter()


def _stored_settings(store: ContentStore) -> dict[str, Any]:
    settings = store.get("settings", {})
    return settings if isinstance(settings, dict) else {}


@router.get("/settings")
def get_settings(store: ContentStore = Depends(get_store)) -> dict[str, Any]:
    return _stored_settings(store)


@router.post(
    "/settings",
    response_model=SuccessResponse,
    dependencies=[Depends(require_writable)],
)
def save_settings(
    body: dict[str, Any] = Body(...),
    store: ContentStore = Depends(get_store),
):
    """Shallow-merge the posted keys over the stored settings."""
    try:
        SiteSettings.model_validate(body)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc

    def _merge(document: dict[str, Any]) -> None:
        current = document.get("settings")
        document["settings"] = {**(current if isinstance(current, dict) else {}), **body}

    store.update(_merge)
    return SuccessResponse()


@router.get("/dark-mode", response_model=DarkModeResponse)
def get_dark_mode(store: ContentStore = Depends(get_store)):
    return DarkModeResponse(enabled=_stored_settings(store).get("enableDarkMode") is True)


@router.get("/debug-settings")
def debug_settings(store: ContentStore = Depends(get_store)) -> dict[str, Any]:
    """What the store currently holds under ``settings``."""
    settings = _stored_settings(store)
    footer = settings.get("footer")
    return {
        "hasSettings": bool(settings),
        "hasFooter": isinstance(footer, dict),
        "footerEnabled": isinstance(footer, dict) and footer.get("enabled") is True,
        "settingsKeys": list(settings),
        "fullSettings": settings,
    }
