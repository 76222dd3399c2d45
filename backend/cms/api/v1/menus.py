"""Menus resource: whole-list read and replace."""

from typing import Any

from fastapi import APIRouter, Depends

from cms.core.dependencies import get_store, require_writable
from cms.schemas.content import Menu, SuccessResponse
from cms.services.content_store import ContentStore

router = APIRouter()


@router.get("/menus")
def list_menus(store: ContentStore = Depends(get_store)) -> list[dict[str, Any]]:
    menus = store.get("menus", [])
    return menus if isinstance(menus, list) else []


@router.post(
    "/menus",
    response_model=SuccessResponse,
    dependencies=[Depends(require_writable)],
)
def save_menus(body: list[Menu], store: ContentStore = Depends(get_store)):
    store.replace("menus", [menu.model_dump(exclude_none=True) for menu in body])
    return SuccessResponse()
