"""Dashboard editor endpoints.

Each operation runs as one read-modify-write of the site document and returns
the re-fetched state of what it edited.
"""

from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Body, Depends

from cms.core.dependencies import get_store, require_writable
from cms.rendering.resolver import resolve_page
from cms.rendering.site import load_settings
from cms.schemas.content import SuccessResponse
from cms.schemas.dashboard import (
    MakeSubmenu,
    MenuCreate,
    MenuItemCreate,
    MenuItemUpdate,
    PageCreate,
    PageUpdate,
    ReorderItem,
    SectionMove,
)
from cms.schemas.render import PageRender
from cms.services import menus as menu_service
from cms.services import pages as page_service
from cms.services.content_store import ContentStore
from cms.services.theme import load_colors

router = APIRouter()

writable = [Depends(require_writable)]


def _menus(document: dict[str, Any]) -> list[dict[str, Any]]:
    if not isinstance(document.get("menus"), list):
        document["menus"] = []
    return document["menus"]


def _edit_page(
    store: ContentStore, page_id: str, edit: Callable[[dict[str, Any]], Any]
) -> dict[str, Any]:
    """Apply ``edit`` and return the page as stored afterwards."""
    document = store.update(edit)
    return page_service.find_page(document, page_id)


def _edit_menu(
    store: ContentStore, menu_id: str, edit: Callable[[list[dict[str, Any]]], Any]
) -> dict[str, Any]:
    document = store.update(lambda doc: edit(_menus(doc)))
    return menu_service.find_menu(_menus(document), menu_id)


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------


@router.post("/pages", status_code=201, dependencies=writable)
def create_page(body: PageCreate, store: ContentStore = Depends(get_store)):
    created: dict[str, Any] = {}

    def _create(document: dict[str, Any]) -> None:
        created.update(
            page_service.create_page(document, body.name, body.slug, body.title, body.status)
        )

    document = store.update(_create)
    return page_service.find_page(document, created["id"])


@router.put("/pages/{page_id}", dependencies=writable)
def update_page(page_id: str, body: PageUpdate, store: ContentStore = Depends(get_store)):
    changes = body.model_dump(exclude_none=True)
    new_id = changes.get("id", page_id)
    return _edit_page(
        store, new_id, lambda doc: page_service.update_page(doc, page_id, changes)
    )


@router.delete("/pages/{page_id}", response_model=SuccessResponse, dependencies=writable)
def delete_page(page_id: str, store: ContentStore = Depends(get_store)):
    store.update(lambda doc: page_service.delete_page(doc, page_id))
    return SuccessResponse()


@router.get("/pages/{page_id}/preview", response_model=PageRender)
def preview_page(page_id: str, store: ContentStore = Depends(get_store)):
    """Resolved sections of one page, as the public site would lay them out."""
    page = page_service.find_page({"pages": store.get("pages", [])}, page_id)
    dark_mode = load_settings(store).enableDarkMode
    return resolve_page(page, load_colors(store), dark_mode)


# ---------------------------------------------------------------------------
# Sections of a page
# ---------------------------------------------------------------------------


@router.post("/pages/{page_id}/sections", status_code=201, dependencies=writable)
def add_section(
    page_id: str,
    body: dict[str, Any] = Body(...),
    store: ContentStore = Depends(get_store),
):
    return _edit_page(store, page_id, lambda doc: page_service.add_section(doc, page_id, body))


@router.get("/pages/{page_id}/sections/{index}")
def get_section(page_id: str, index: int, store: ContentStore = Depends(get_store)):
    """Editor form values for one section."""
    return page_service.get_section({"pages": store.get("pages", [])}, page_id, index)


@router.put("/pages/{page_id}/sections/{index}", dependencies=writable)
def update_section(
    page_id: str,
    index: int,
    body: dict[str, Any] = Body(...),
    store: ContentStore = Depends(get_store),
):
    return _edit_page(
        store, page_id, lambda doc: page_service.update_section(doc, page_id, index, body)
    )


@router.delete("/pages/{page_id}/sections/{index}", dependencies=writable)
def delete_section(page_id: str, index: int, store: ContentStore = Depends(get_store)):
    return _edit_page(
        store, page_id, lambda doc: page_service.delete_section(doc, page_id, index)
    )


@router.post("/pages/{page_id}/sections/{index}/toggle", dependencies=writable)
def toggle_section(page_id: str, index: int, store: ContentStore = Depends(get_store)):
    return _edit_page(
        store, page_id, lambda doc: page_service.toggle_section(doc, page_id, index)
    )


@router.post("/pages/{page_id}/sections/{index}/duplicate", dependencies=writable)
def duplicate_section(page_id: str, index: int, store: ContentStore = Depends(get_store)):
    return _edit_page(
        store, page_id, lambda doc: page_service.duplicate_section(doc, page_id, index)
    )


@router.post("/pages/{page_id}/sections/move", dependencies=writable)
def move_section(
    page_id: str, body: SectionMove, store: ContentStore = Depends(get_store)
):
    return _edit_page(
        store,
        page_id,
        lambda doc: page_service.move_section(doc, page_id, body.fromIndex, body.toIndex),
    )


# ---------------------------------------------------------------------------
# Menus
# ---------------------------------------------------------------------------


@router.post("/menus", status_code=201, dependencies=writable)
def create_menu(body: MenuCreate, store: ContentStore = Depends(get_store)):
    created: dict[str, Any] = {}

    def _create(document: dict[str, Any]) -> None:
        created.update(menu_service.create_menu(_menus(document), body.name))

    document = store.update(_create)
    return menu_service.find_menu(_menus(document), created["id"])


@router.delete("/menus/{menu_id}", response_model=SuccessResponse, dependencies=writable)
def delete_menu(menu_id: str, store: ContentStore = Depends(get_store)):
    store.update(lambda doc: menu_service.delete_menu(_menus(doc), menu_id))
    return SuccessResponse()


@router.post("/menus/{menu_id}/items", status_code=201, dependencies=writable)
def add_menu_item(
    menu_id: str, body: MenuItemCreate, store: ContentStore = Depends(get_store)
):
    return _edit_menu(
        store,
        menu_id,
        lambda menus: menu_service.add_item(menus, menu_id, body.label, body.url, body.parentId),
    )


@router.put("/menus/{menu_id}/items/{item_id}", dependencies=writable)
def edit_menu_item(
    menu_id: str,
    item_id: str,
    body: MenuItemUpdate,
    store: ContentStore = Depends(get_store),
):
    return _edit_menu(
        store,
        menu_id,
        lambda menus: menu_service.edit_item(menus, menu_id, item_id, body.label, body.url),
    )


@router.delete("/menus/{menu_id}/items/{item_id}", dependencies=writable)
def delete_menu_item(menu_id: str, item_id: str, store: ContentStore = Depends(get_store)):
    return _edit_menu(
        store, menu_id, lambda menus: menu_service.delete_item(menus, menu_id, item_id)
    )


@router.post("/menus/{menu_id}/items/{item_id}/submenu", dependencies=writable)
def make_submenu(
    menu_id: str,
    item_id: str,
    body: MakeSubmenu,
    store: ContentStore = Depends(get_store),
):
    return _edit_menu(
        store,
        menu_id,
        lambda menus: menu_service.make_submenu(menus, menu_id, item_id, body.parentId),
    )


@router.post("/menus/{menu_id}/items/{item_id}/top-level", dependencies=writable)
def make_top_level(menu_id: str, item_id: str, store: ContentStore = Depends(get_store)):
    return _edit_menu(
        store, menu_id, lambda menus: menu_service.make_top_level(menus, menu_id, item_id)
    )


@router.post("/menus/{menu_id}/items/{item_id}/reorder", dependencies=writable)
def reorder_menu_item(
    menu_id: str,
    item_id: str,
    body: ReorderItem,
    store: ContentStore = Depends(get_store),
):
    return _edit_menu(
        store,
        menu_id,
        lambda menus: menu_service.reorder_item(
            menus, menu_id, item_id, body.targetId, body.position
        ),
    )


@router.post("/menus/{menu_id}/header", dependencies=writable)
def set_header_menu(menu_id: str, store: ContentStore = Depends(get_store)):
    """Show this menu in the site header (``settings.selectedMenuId``)."""

    def _select(document: dict[str, Any]) -> None:
        menu_service.find_menu(_menus(document), menu_id)
        settings = document.get("settings")
        if not isinstance(settings, dict):
            settings = {}
        document["settings"] = {**settings, "selectedMenuId": menu_id}

    store.update(_select)
    return {"success": True, "selectedMenuId": menu_id}
