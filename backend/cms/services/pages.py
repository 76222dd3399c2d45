"""Page and per-page section editor operations.

Every function takes the loaded site document and mutates it in place; callers
run them inside ``ContentStore.update`` so the whole document is written back.
"""

import copy
import logging
import time
from typing import Any

from cms.core.exceptions import ProblemDetailError
from cms.services.menus import rename_menu_urls, validate_menu_references
from cms.services.sections import (
    page_ids,
    section_with_defaults,
    strip_section,
    sync_sections_with_pages,
)

logger = logging.getLogger(__name__)


def derive_page_id(slug: str) -> str:
    """``/about-us`` -> ``about-us``; a bare ``/`` falls back to a timestamp."""
    return slug.replace("/", "").lower() or str(int(time.time() * 1000))


def _pages(document: dict[str, Any]) -> list[dict[str, Any]]:
    pages = document.get("pages")
    if not isinstance(pages, list):
        pages = []
        document["pages"] = pages
    return pages


def find_page(document: dict[str, Any], page_id: str) -> dict[str, Any]:
    for page in _pages(document):
        if isinstance(page, dict) and page.get("id") == page_id:
            return page
    raise ProblemDetailError(404, "Not Found", f"Page '{page_id}' not found")


def _require(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ProblemDetailError(400, "Bad Request", message)
    return value.strip()


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------


def create_page(
    document: dict[str, Any],
    name: str,
    slug: str,
    title: str = "",
    status: str = "draft",
) -> dict[str, Any]:
    name = _require(name, "Please enter a page name")
    slug = _require(slug, "Please enter a slug")
    pages = _pages(document)
    page_id = derive_page_id(slug)
    for page in pages:
        if not isinstance(page, dict):
            continue
        if page.get("slug") == slug:
            raise ProblemDetailError(409, "Conflict", f"A page with slug '{slug}' already exists")
        if page.get("id") == page_id:
            raise ProblemDetailError(409, "Conflict", f"A page with id '{page_id}' already exists")
    page = {
        "id": page_id,
        "name": name,
        "slug": slug,
        "title": title,
        "status": status,
        "sections": [],
    }
    pages.append(page)
    logger.info("Created page %r (%s)", page_id, slug)
    return page


def update_page(document: dict[str, Any], page_id: str, changes: dict[str, Any]) -> dict[str, Any]:
    """Apply ``changes`` to a page.

    Sections stay with the page when its id changes. A slug change rewrites
    menu items that linked to the old slug.
    """
    page = find_page(document, page_id)
    merged = {**page, **{k: v for k, v in changes.items() if k != "sections"}}
    merged["name"] = _require(merged.get("name"), "Please enter a page name")
    merged["slug"] = _require(merged.get("slug"), "Please enter a slug")
    merged["id"] = _require(merged.get("id"), "Page id cannot be empty")

    for other in _pages(document):
        if other is page or not isinstance(other, dict):
            continue
        if other.get("id") == merged["id"]:
            raise ProblemDetailError(409, "Conflict", f"A page with id '{merged['id']}' already exists")
        if other.get("slug") == merged["slug"]:
            raise ProblemDetailError(
                409, "Conflict", f"A page with slug '{merged['slug']}' already exists"
            )

    old_slug = page.get("slug")
    page.clear()
    page.update(merged)
    if old_slug and old_slug != merged["slug"]:
        document["menus"] = rename_menu_urls(document.get("menus") or [], old_slug, merged["slug"])
        logger.info("Rewrote menu links %s -> %s", old_slug, merged["slug"])
    return page


def delete_page(document: dict[str, Any], page_id: str) -> None:
    """Remove a page, re-homing its sections and pruning dead menu links."""
    page = find_page(document, page_id)
    pages = _pages(document)
    remaining = [p for p in pages if p is not page]
    if not page_ids(remaining):
        raise ProblemDetailError(400, "Bad Request", "Cannot delete the last page")

    orphans = [
        {**section, "pageId": page_id}
        for section in page.get("sections") or []
        if isinstance(section, dict)
    ]
    for section in sync_sections_with_pages(orphans, remaining):
        target = find_page({"pages": remaining}, section["pageId"])
        body = {k: v for k, v in section.items() if k != "pageId"}
        target.setdefault("sections", []).append(body)
    if orphans:
        logger.info("Moved %d section(s) from deleted page %r", len(orphans), page_id)

    document["pages"] = remaining
    document["menus"] = validate_menu_references(document.get("menus") or [], remaining)


# ---------------------------------------------------------------------------
# Sections of one page
# ---------------------------------------------------------------------------


def _sections(page: dict[str, Any]) -> list[dict[str, Any]]:
    sections = page.get("sections")
    if not isinstance(sections, list):
        sections = []
        page["sections"] = sections
    return sections


def _check_index(sections: list[dict[str, Any]], index: int) -> None:
    if not 0 <= index < len(sections):
        raise ProblemDetailError(404, "Not Found", f"Section {index} not found")


def add_section(document: dict[str, Any], page_id: str, section: dict[str, Any]) -> int:
    _require(section.get("heading"), "Please enter a heading")
    sections = _sections(find_page(document, page_id))
    sections.append(strip_section(section))
    return len(sections) - 1


def get_section(document: dict[str, Any], page_id: str, index: int) -> dict[str, Any]:
    """One section with every default filled in, as the editor form shows it."""
    sections = _sections(find_page(document, page_id))
    _check_index(sections, index)
    section = sections[index]
    return section_with_defaults(section if isinstance(section, dict) else {})


def update_section(
    document: dict[str, Any], page_id: str, index: int, section: dict[str, Any]
) -> None:
    _require(section.get("heading"), "Please enter a heading")
    sections = _sections(find_page(document, page_id))
    _check_index(sections, index)
    sections[index] = strip_section(section)


def delete_section(document: dict[str, Any], page_id: str, index: int) -> None:
    sections = _sections(find_page(document, page_id))
    _check_index(sections, index)
    del sections[index]


def toggle_section(document: dict[str, Any], page_id: str, index: int) -> bool:
    """Flip visibility; returns the new ``hidden`` state."""
    sections = _sections(find_page(document, page_id))
    _check_index(sections, index)
    hidden = sections[index].get("hidden") is not True
    sections[index] = strip_section({**sections[index], "hidden": hidden})
    return hidden


def duplicate_section(document: dict[str, Any], page_id: str, index: int) -> int:
    """Insert a copy directly after the original; returns the copy's index."""
    sections = _sections(find_page(document, page_id))
    _check_index(sections, index)
    sections.insert(index + 1, copy.deepcopy(sections[index]))
    return index + 1


def move_section(document: dict[str, Any], page_id: str, from_index: int, to_index: int) -> None:
    sections = _sections(find_page(document, page_id))
    _check_index(sections, from_index)
    _check_index(sections, to_index)
    sections.insert(to_index, sections.pop(from_index))
