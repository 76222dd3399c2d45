"""Theme colors and typography."""

from fastapi import APIRouter, Depends, Response

from cms.core.dependencies import get_store, require_writable
from cms.schemas.content import (
    SuccessResponse,
    ThemeResponse,
    ThemeUpdate,
    TypographyResponse,
    TypographyUpdate,
)
from cms.services.content_store import ContentStore
from cms.services.theme import load_colors, load_typography

router = APIRouter()

NO_STORE = "no-store, max-age=0"


@router.get("/theme", response_model=ThemeResponse)
def get_theme(response: Response, store: ContentStore = Depends(get_store)):
    """Stored palette with defaults for missing keys."""
    response.headers["Cache-Control"] = NO_STORE
    return ThemeResponse(colors=load_colors(store))


@router.post(
    "/theme",
    response_model=SuccessResponse,
    dependencies=[Depends(require_writable)],
)
def save_theme(body: ThemeUpdate, store: ContentStore = Depends(get_store)):
    store.replace("colors", body.colors.model_dump())
    return SuccessResponse()


@router.get("/typography", response_model=TypographyResponse)
def get_typography(response: Response, store: ContentStore = Depends(get_store)):
    """``{"typography": null}`` means the default stylesheet applies."""
    response.headers["Cache-Control"] = NO_STORE
    return TypographyResponse(typography=load_typography(store))


@router.post(
    "/typography",
    response_model=SuccessResponse,
    dependencies=[Depends(require_writable)],
)
def save_typography(body: TypographyUpdate, store: ContentStore = Depends(get_store)):
    if body.action == "delete":
        store.delete("typography")
    else:
        store.replace("typography", body.typography.model_dump(exclude_none=True))
    return SuccessResponse()
