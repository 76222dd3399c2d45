"""Menu trees and the menu editor operations.

Menus are persisted nested (``children`` arrays). The editor works on a flat
arena where every item carries a ``parentId`` (None for top level); sibling
order is the order of the flat list. ``build_tree`` turns the arena back into
the nested form at the persistence boundary.
"""

import logging
import uuid
from typing import Any, Literal

from cms.core.exceptions import ProblemDetailError

logger = logging.getLogger(__name__)


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


# ---------------------------------------------------------------------------
# Nested <-> flat
# ---------------------------------------------------------------------------


def flatten_items(items: list[dict[str, Any]], parent_id: str | None = None) -> list[dict[str, Any]]:
    """Depth-first flatten of a nested item list into ``parentId`` form."""
    flat: list[dict[str, Any]] = []
    for item in items or []:
        if not isinstance(item, dict):
            continue
        node = {k: v for k, v in item.items() if k != "children"}
        node["parentId"] = parent_id
        flat.append(node)
        children = item.get("children")
        if isinstance(children, list) and children:
            flat.extend(flatten_items(children, node.get("id")))
    return flat


def build_tree(flat: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Nest a flat arena. Items whose parent is missing surface at top level."""
    ids = {item.get("id") for item in flat}
    children_of: dict[str | None, list[dict[str, Any]]] = {}
    for item in flat:
        parent = item.get("parentId")
        if parent not in ids or parent == item.get("id"):
            parent = None
        children_of.setdefault(parent, []).append(item)

    seen: set[str | None] = set()

    def _node(item: dict[str, Any]) -> dict[str, Any]:
        seen.add(item.get("id"))
        node = {k: v for k, v in item.items() if k not in ("parentId", "children")}
        kids = [_node(c) for c in children_of.get(item.get("id"), []) if c.get("id") not in seen]
        if kids:
            node["children"] = kids
        return node

    return [_node(item) for item in children_of.get(None, [])]


def _descendant_ids(flat: list[dict[str, Any]], item_id: str) -> set[str]:
    found: set[str] = set()
    frontier = [item_id]
    while frontier:
        current = frontier.pop()
        for item in flat:
            if item.get("parentId") == current and item.get("id") not in found:
                found.add(item["id"])
                frontier.append(item["id"])
    return found


# ---------------------------------------------------------------------------
# Cross-resource maintenance
# ---------------------------------------------------------------------------


def _is_kept_link(url: Any, slugs: set[str]) -> bool:
    if not isinstance(url, str):
        return False
    return url.startswith("http") or url.startswith("#") or url in slugs


def _prune_items(items: list[dict[str, Any]], slugs: set[str]) -> list[dict[str, Any]]:
    kept = []
    for item in items or []:
        if not isinstance(item, dict):
            continue
        if not _is_kept_link(item.get("url"), slugs):
            logger.info("Removing menu item %r pointing at %r", item.get("label"), item.get("url"))
            continue
        item = dict(item)
        if isinstance(item.get("children"), list):
            item["children"] = _prune_items(item["children"], slugs)
            if not item["children"]:
                del item["children"]
        kept.append(item)
    return kept


def validate_menu_references(
    menus: list[dict[str, Any]], pages: list[dict[str, Any]]
) -> list[dict[str, Any]]:
    """Drop internal items (at any depth) whose URL is not a current page slug.

    External links (``http...``) and anchors (``#...``) are always kept.
    """
    slugs = {p.get("slug") for p in pages if isinstance(p, dict) and p.get("slug")}
    return [
        {**menu, "items": _prune_items(menu.get("items") or [], slugs)}
        for menu in menus
        if isinstance(menu, dict)
    ]


def _rename_items(items: list[dict[str, Any]], old: str, new: str) -> list[dict[str, Any]]:
    renamed = []
    for item in items or []:
        if not isinstance(item, dict):
            continue
        item = dict(item)
        if item.get("url") == old:
            item["url"] = new
        if isinstance(item.get("children"), list):
            item["children"] = _rename_items(item["children"], old, new)
        renamed.append(item)
    return renamed


def rename_menu_urls(menus: list[dict[str, Any]], old_slug: str, new_slug: str) -> list[dict[str, Any]]:
    """Point every item linking to ``old_slug`` at ``new_slug``."""
    return [
        {**menu, "items": _rename_items(menu.get("items") or [], old_slug, new_slug)}
        for menu in menus
        if isinstance(menu, dict)
    ]


# ---------------------------------------------------------------------------
# Editor operations (mutate ``menus`` in place)
# ---------------------------------------------------------------------------


def find_menu(menus: list[dict[str, Any]], menu_id: str) -> dict[str, Any]:
    for menu in menus:
        if isinstance(menu, dict) and menu.get("id") == menu_id:
            return menu
    raise ProblemDetailError(404, "Not Found", f"Menu '{menu_id}' not found")


def _flat_items(menu: dict[str, Any]) -> list[dict[str, Any]]:
    return flatten_items(menu.get("items") or [])


def _find_item(flat: list[dict[str, Any]], item_id: str) -> dict[str, Any]:
    for item in flat:
        if item.get("id") == item_id:
            return item
    raise ProblemDetailError(404, "Not Found", f"Menu item '{item_id}' not found")


def create_menu(menus: list[dict[str, Any]], name: str) -> dict[str, Any]:
    if not name.strip():
        raise ProblemDetailError(400, "Bad Request", "Please enter a menu name")
    menu = {"id": new_id("menu"), "name": name.strip(), "items": []}
    menus.append(menu)
    return menu


def delete_menu(menus: list[dict[str, Any]], menu_id: str) -> None:
    """Remove a menu. The first (primary) menu and the last remaining one are protected."""
    find_menu(menus, menu_id)
    if menus[0].get("id") == menu_id:
        raise ProblemDetailError(400, "Bad Request", "Cannot delete the primary menu")
    if len(menus) == 1:
        raise ProblemDetailError(400, "Bad Request", "Cannot delete the last menu")
    menus[:] = [m for m in menus if m.get("id") != menu_id]


def add_item(
    menus: list[dict[str, Any]],
    menu_id: str,
    label: str,
    url: str,
    parent_id: str | None = None,
) -> dict[str, Any]:
    if not label.strip() or not url.strip():
        raise ProblemDetailError(400, "Bad Request", "Please fill in both label and URL")
    menu = find_menu(menus, menu_id)
    flat = _flat_items(menu)
    if parent_id is not None:
        _find_item(flat, parent_id)
    item = {"id": new_id("item"), "label": label.strip(), "url": url.strip(), "parentId": parent_id}
    flat.append(item)
    menu["items"] = build_tree(flat)
    return {k: v for k, v in item.items() if k != "parentId"}


def edit_item(
    menus: list[dict[str, Any]],
    menu_id: str,
    item_id: str,
    label: str | None = None,
    url: str | None = None,
) -> None:
    menu = find_menu(menus, menu_id)
    flat = _flat_items(menu)
    item = _find_item(flat, item_id)
    if label is not None:
        if not label.strip():
            raise ProblemDetailError(400, "Bad Request", "Label cannot be empty")
        item["label"] = label.strip()
    if url is not None:
        if not url.strip():
            raise ProblemDetailError(400, "Bad Request", "URL cannot be empty")
        item["url"] = url.strip()
    menu["items"] = build_tree(flat)


def delete_item(menus: list[dict[str, Any]], menu_id: str, item_id: str) -> None:
    """Remove an item together with all of its descendants."""
    menu = find_menu(menus, menu_id)
    flat = _flat_items(menu)
    _find_item(flat, item_id)
    doomed = _descendant_ids(flat, item_id) | {item_id}
    menu["items"] = build_tree([i for i in flat if i.get("id") not in doomed])


def make_submenu(menus: list[dict[str, Any]], menu_id: str, item_id: str, parent_id: str) -> None:
    menu = find_menu(menus, menu_id)
    flat = _flat_items(menu)
    item = _find_item(flat, item_id)
    _find_item(flat, parent_id)
    if parent_id == item_id or parent_id in _descendant_ids(flat, item_id):
        raise ProblemDetailError(400, "Bad Request", "An item cannot be nested under itself")
    item["parentId"] = parent_id
    menu["items"] = build_tree(flat)


def make_top_level(menus: list[dict[str, Any]], menu_id: str, item_id: str) -> None:
    menu = find_menu(menus, menu_id)
    flat = _flat_items(menu)
    _find_item(flat, item_id)["parentId"] = None
    menu["items"] = build_tree(flat)


def reorder_item(
    menus: list[dict[str, Any]],
    menu_id: str,
    item_id: str,
    target_id: str,
    position: Literal["before", "after"],
) -> None:
    """Move ``item_id`` directly before or after ``target_id`` in sibling order."""
    menu = find_menu(menus, menu_id)
    flat = _flat_items(menu)
    item = _find_item(flat, item_id)
    _find_item(flat, target_id)
    if item_id == target_id:
        return
    flat.remove(item)
    target_index = next(i for i, entry in enumerate(flat) if entry.get("id") == target_id)
    flat.insert(target_index if position == "before" else target_index + 1, item)
    menu["items"] = build_tree(flat)


# ---------------------------------------------------------------------------
# Header menu selection
# ---------------------------------------------------------------------------


def select_header_menu(menus: list[dict[str, Any]], selected_id: str | None) -> dict[str, Any] | None:
    """Menu shown in the site header.

    The configured ``selectedMenuId`` wins; otherwise a menu named like "main",
    then the first menu with items, then the first menu.
    """
    candidates = [m for m in menus if isinstance(m, dict)]
    if not candidates:
        return None
    if selected_id:
        for menu in candidates:
            if menu.get("id") == selected_id:
                return menu
    for menu in candidates:
        if "main" in str(menu.get("name", "")).lower():
            return menu
    for menu in candidates:
        if menu.get("items"):
            return menu
    return candidates[0]
