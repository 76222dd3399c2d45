"""Site logo and header variation."""

from fastapi import APIRouter, Depends

from cms.core.dependencies import get_store, require_writable
from cms.rendering.site import load_header_variation, load_logo
from cms.schemas.content import HeaderVariation, LogoResponse, LogoSavedResponse, LogoUpdate
from cms.services.content_store import ContentStore

router = APIRouter()


@router.get("/logo", response_model=LogoResponse)
def get_logo(store: ContentStore = Depends(get_store)):
    return LogoResponse(logo=load_logo(store))


@router.post(
    "/logo",
    response_model=LogoSavedResponse,
    dependencies=[Depends(require_writable)],
)
def save_logo(body: LogoUpdate, store: ContentStore = Depends(get_store)):
    store.replace("logo", body.logo.model_dump())
    return LogoSavedResponse(logo=body.logo)


@router.get("/header-variation", response_model=HeaderVariation)
def get_header_variation(store: ContentStore = Depends(get_store)):
    return HeaderVariation(variation=load_header_variation(store))


@router.post("/header-variation", dependencies=[Depends(require_writable)])
def save_header_variation(body: HeaderVariation, store: ContentStore = Depends(get_store)):
    store.replace("headerVariation", body.variation)
    return {"success": True, "variation": body.variation}
