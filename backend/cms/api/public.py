"""Public site: server-rendered pages and the theme stylesheet."""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, Response

from cms.core.dependencies import get_store
from cms.rendering.resolver import resolve_page
from cms.rendering.site import (
    find_home_page,
    find_page_by_slug,
    load_header_variation,
    load_logo,
    load_settings,
    resolve_footer,
    resolve_header,
)
from cms.rendering.templates import render_site_page
from cms.services.content_store import ContentStore
from cms.services.theme import build_theme_css, load_colors, load_typography

logger = logging.getLogger(__name__)

router = APIRouter()


def _chrome(store: ContentStore) -> dict[str, Any]:
    """Header, footer and site-wide flags shared by every public page."""
    settings = load_settings(store)
    logo = load_logo(store)
    menus = store.get("menus", [])
    menus = menus if isinstance(menus, list) else []
    return {
        "header": resolve_header(menus, settings, logo, load_header_variation(store)),
        "footer": resolve_footer(settings.footer, menus, logo, settings.enableDarkMode),
        "dark_mode": settings.enableDarkMode,
        "favicon": settings.favicon,
    }


def _render(store: ContentStore, page: dict[str, Any] | None, path: str) -> HTMLResponse:
    chrome = _chrome(store)
    if page is None:
        logger.info("No page for %s", path)
        html = render_site_page("not_found.html", path=path, page_title="Page not found", **chrome)
        return HTMLResponse(html, status_code=404)
    resolved = resolve_page(page, load_colors(store), chrome["dark_mode"])
    html = render_site_page(
        "page.html",
        page=resolved,
        page_title=resolved.title or resolved.name,
        **chrome,
    )
    return HTMLResponse(html)


def _pages(store: ContentStore) -> list[dict[str, Any]]:
    pages = store.get("pages", [])
    return pages if isinstance(pages, list) else []


@router.get("/theme.css", include_in_schema=False)
def theme_css(store: ContentStore = Depends(get_store)):
    css = build_theme_css(load_colors(store), load_typography(store))
    return Response(
        css, media_type="text/css", headers={"Cache-Control": "no-store, max-age=0"}
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def home(store: ContentStore = Depends(get_store)):
    return _render(store, find_home_page(_pages(store)), "/")


@router.get("/{slug}", response_class=HTMLResponse, include_in_schema=False)
def page_by_slug(slug: str, store: ContentStore = Depends(get_store)):
    return _render(store, find_page_by_slug(_pages(store), slug), f"/{slug}")
