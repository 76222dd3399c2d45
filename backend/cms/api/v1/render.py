"""Resolved page descriptions as JSON (the same data the HTML renderer uses)."""

from fastapi import APIRouter, Depends, HTTPException

from cms.core.dependencies import get_store
from cms.rendering.resolver import resolve_page
from cms.rendering.site import find_home_page, find_page_by_slug, load_settings
from cms.schemas.render import PageRender
from cms.services.content_store import ContentStore
from cms.services.theme import load_colors

router = APIRouter()


@router.get("/{slug:path}", response_model=PageRender)
def render_page(slug: str, store: ContentStore = Depends(get_store)):
    """``slug`` ``home`` (or empty) resolves the home page."""
    pages = store.get("pages", [])
    pages = pages if isinstance(pages, list) else []
    if slug.strip("/") in ("", "home"):
        page = find_home_page(pages)
    else:
        page = find_page_by_slug(pages, slug)
    if page is None:
        raise HTTPException(status_code=404, detail="Page not found")
    return resolve_page(page, load_colors(store), load_settings(store).enableDarkMode)
