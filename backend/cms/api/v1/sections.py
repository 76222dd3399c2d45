"""Sections resource: the flattened, pageId-tagged view over all pages."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from cms.core.dependencies import get_store, require_writable
from cms.schemas.content import SuccessResponse
from cms.services.content_store import ContentStore
from cms.services.sections import flatten_sections, merge_sections_into_pages

router = APIRouter()


@router.get("/sections")
def list_sections(store: ContentStore = Depends(get_store)) -> list[dict[str, Any]]:
    pages = store.get("pages", [])
    return flatten_sections(pages if isinstance(pages, list) else [])


@router.post(
    "/sections",
    response_model=SuccessResponse,
    dependencies=[Depends(require_writable)],
)
def save_sections(
    body: list[dict[str, Any]] = Body(...),
    store: ContentStore = Depends(get_store),
):
    """Group posted sections by ``pageId`` and store them on their pages.

    Pages with no posted entries keep their current sections.
    """

    def _merge(document: dict[str, Any]) -> None:
        if not isinstance(document.get("pages"), list):
            document["pages"] = []
        merge_sections_into_pages(document["pages"], body)

    store.update(_merge)
    return SuccessResponse()
