"""Sparse section records: the default table, cleaning and page grouping.

Sections are stored sparse: empty and default-valued fields are dropped on
save and re-supplied from ``SECTION_DEFAULTS`` on read. Everything that reads a
section field goes through ``section_value`` so the defaults live in one place.
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_PAGE_ID = "home"

SECTION_DEFAULTS: dict[str, Any] = {
    "align": "left",
    "textAlign": "left",
    "bgType": "none",
    "bgImageSize": "cover",
    "bgImageOverlay": 0,
    "bgVideoOverlay": 50,
    "bgVideoAutoplay": True,
    "bgVideoLoop": True,
    "bgVideoMuted": True,
    "bgVideoControls": False,
    "bgVideoShowPlayButton": True,
    "bgVideoWidth": "full",
    "paddingY": "comfortable",
    "imgFit": "cover",
    "hidden": False,
    "showSubheading": True,
    "showDescription": True,
    "featuresLayout": "grid-2",
    "buttonTarget": "_self",
    "sectionType": "normal",
    "showMap": True,
    "formTitle": "Send us a message",
    "submitButtonText": "Send Message",
}

# Background fields each bgType actually reads.
BACKGROUND_FIELDS: dict[str, tuple[str, ...]] = {
    "image": ("bgImage", "bgImageUrl", "bgImageSize", "bgImageOverlay"),
    "customColor": ("bgColor",),
    "themeColor": ("bgThemeColor",),
    "video": (
        "bgVideoUrl",
        "bgVideoOverlay",
        "bgVideoAutoplay",
        "bgVideoLoop",
        "bgVideoMuted",
        "bgVideoControls",
        "bgVideoShowPlayButton",
        "bgVideoWidth",
    ),
}
ALL_BACKGROUND_FIELDS = frozenset(f for fields in BACKGROUND_FIELDS.values() for f in fields)

CONTACT_FIELDS = frozenset(
    {
        "showMap",
        "mapUrl",
        "contactEmail",
        "contactPhone",
        "contactAddress",
        "formTitle",
        "submitButtonText",
    }
)


def is_empty(value: Any) -> bool:
    return value is None or value == "" or value == []


def section_value(section: dict[str, Any], key: str) -> Any:
    """Stored value of ``key``, or its documented default when absent/empty."""
    value = section.get(key)
    if value is None or value == "":
        return SECTION_DEFAULTS.get(key)
    return value


def has_image(section: dict[str, Any]) -> bool:
    img = section.get("img")
    return isinstance(img, str) and img != ""


def _is_default(key: str, value: Any) -> bool:
    if key not in SECTION_DEFAULTS:
        return False
    default = SECTION_DEFAULTS[key]
    return type(value) is type(default) and value == default


def strip_section(section: dict[str, Any]) -> dict[str, Any]:
    """Drop everything a reader would re-derive from the default table.

    Removes empty values, values equal to their default, background fields the
    current ``bgType`` does not read, contact fields on non-contact sections,
    ``align`` when there is no image and ``textAlign`` when there is one.
    """
    bg_type = section_value(section, "bgType")
    kept_bg = set(BACKGROUND_FIELDS.get(bg_type, ()) if isinstance(bg_type, str) else ())
    is_contact = section_value(section, "sectionType") == "contact"
    with_image = has_image(section)

    cleaned: dict[str, Any] = {}
    for key, value in section.items():
        if is_empty(value) or _is_default(key, value):
            continue
        if key in ALL_BACKGROUND_FIELDS and key not in kept_bg:
            continue
        if key in CONTACT_FIELDS and not is_contact:
            continue
        if key == "align" and not with_image:
            continue
        if key == "textAlign" and with_image:
            continue
        cleaned[key] = value
    return cleaned


def section_with_defaults(section: dict[str, Any]) -> dict[str, Any]:
    """Return a copy with every omitted default field filled in, as the section editor loads it."""
    merged = dict(SECTION_DEFAULTS)
    for key, value in section.items():
        if value is None or value == "":
            continue
        merged[key] = value
    return merged


# ---------------------------------------------------------------------------
# Flattened (pageId-tagged) form
# ---------------------------------------------------------------------------


def page_ids(pages: list[dict[str, Any]]) -> list[str]:
    return [p["id"] for p in pages if isinstance(p, dict) and p.get("id")]


def section_page_id(section: dict[str, Any]) -> str:
    """The ``pageId`` a flattened section is tagged with, ``home`` if missing or not a string."""
    page_id = section.get("pageId")
    return page_id if isinstance(page_id, str) and page_id else DEFAULT_PAGE_ID


def flatten_sections(pages: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """All sections of all pages, in order, each tagged with its ``pageId``."""
    flat: list[dict[str, Any]] = []
    for page in pages:
        if not isinstance(page, dict):
            continue
        for section in page.get("sections") or []:
            if isinstance(section, dict):
                flat.append({**section, "pageId": page.get("id", DEFAULT_PAGE_ID)})
    return flat


def sync_sections_with_pages(
    sections: list[dict[str, Any]], pages: list[dict[str, Any]]
) -> list[dict[str, Any]]:
    """Re-home sections whose page no longer exists. Sections are never dropped."""
    known = page_ids(pages)
    fallback = known[0] if known else DEFAULT_PAGE_ID
    synced = []
    for section in sections:
        page_id = section_page_id(section)
        if page_id not in known:
            page_id = fallback
        synced.append({**section, "pageId": page_id})
    return synced


def group_sections_by_page(sections: list[dict[str, Any]]) -> dict[str, list[dict[str, Any]]]:
    """Group flattened sections by ``pageId`` (default ``home``), stripped for storage."""
    grouped: dict[str, list[dict[str, Any]]] = {}
    for section in sections:
        if not isinstance(section, dict):
            continue
        body = {k: v for k, v in section.items() if k != "pageId"}
        page_id = section_page_id(section)
        grouped.setdefault(page_id, []).append(strip_section(body))
    return grouped


def merge_sections_into_pages(
    pages: list[dict[str, Any]], sections: list[dict[str, Any]]
) -> list[dict[str, Any]]:
    """Store posted sections on their pages.

    Pages that receive entries have their section list replaced; pages without
    entries keep what they had. Entries for unknown pages are appended to the
    first page. With no pages at all a ``home`` page is created to hold them.
    """
    posted = group_sections_by_page(sections)
    known = page_ids(pages)
    orphans: list[dict[str, Any]] = []
    for page_id in list(posted):
        if page_id not in known:
            orphans.extend(posted.pop(page_id))

    if not known:
        if orphans:
            pages.append(
                {
                    "id": DEFAULT_PAGE_ID,
                    "name": "Home",
                    "slug": "/",
                    "title": "Home",
                    "status": "published",
                    "sections": orphans,
                }
            )
        return pages

    if orphans:
        logger.warning("Re-homing %d section(s) with unknown pageId to %r", len(orphans), known[0])
    for page in pages:
        if not isinstance(page, dict):
            continue
        page_id = page.get("id")
        if page_id in posted:
            page["sections"] = posted[page_id]
        if page_id == known[0] and orphans:
            page["sections"] = list(page.get("sections") or []) + orphans
    return pages
