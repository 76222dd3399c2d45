"""Pages resource: whole-list read and replace."""

from typing import Any

from fastapi import APIRouter, Depends

from cms.core.dependencies import get_store, require_writable
from cms.schemas.content import Page, SuccessResponse
from cms.services.content_store import ContentStore
from cms.services.sections import strip_section

router = APIRouter()


@router.get("/pages")
def list_pages(store: ContentStore = Depends(get_store)) -> list[dict[str, Any]]:
    """All pages with their (sparse) sections. Empty list when nothing is stored."""
    pages = store.get("pages", [])
    return pages if isinstance(pages, list) else []


@router.post(
    "/pages",
    response_model=SuccessResponse,
    dependencies=[Depends(require_writable)],
)
def save_pages(body: list[Page], store: ContentStore = Depends(get_store)):
    """Replace the page list. Sections are stored stripped of defaults."""
    pages = []
    for page in body:
        data = page.model_dump()
        data["sections"] = [strip_section(section) for section in page.sections]
        pages.append(data)
    store.replace("pages", pages)
    return SuccessResponse()
