"""Dashboard page, section and menu editor endpoints."""

import pytest
from httpx import AsyncClient

from tests.helpers import SAMPLE_DOCUMENT, read_document

pytestmark = pytest.mark.integration

BASE = "/api/v1/dashboard"


def _problem(response, status: int) -> dict:
    assert response.status_code == status
    assert response.headers["content-type"].startswith("application/problem+json")
    return response.json()


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_page(seeded_client: AsyncClient, seeded_store):
    response = await seeded_client.post(
        f"{BASE}/pages", json={"name": "Pricing", "slug": "/pricing", "title": "Plans"}
    )
    assert response.status_code == 201
    page = response.json()
    assert page["id"] == "pricing"
    assert page["status"] == "draft"
    assert page["sections"] == []
    assert read_document(seeded_store)["pages"][-1]["id"] == "pricing"


@pytest.mark.asyncio
async def test_create_page_validation(seeded_client: AsyncClient, seeded_store):
    body = _problem(await seeded_client.post(f"{BASE}/pages", json={"name": "", "slug": "/x"}), 400)
    assert body["error"] == "Please enter a page name"
    body = _problem(
        await seeded_client.post(f"{BASE}/pages", json={"name": "Dup", "slug": "/about"}), 409
    )
    assert "/about" in body["detail"]
    assert read_document(seeded_store)["pages"] == SAMPLE_DOCUMENT["pages"]


@pytest.mark.asyncio
async def test_update_page_slug_updates_menus(seeded_client: AsyncClient, seeded_store):
    response = await seeded_client.put(f"{BASE}/pages/team", json={"slug": "/people"})
    assert response.status_code == 200
    assert response.json()["slug"] == "/people"
    menus = read_document(seeded_store)["menus"]
    assert menus[0]["items"][1]["children"][0]["url"] == "/people"


@pytest.mark.asyncio
async def test_update_page_id_returns_renamed_page(seeded_client: AsyncClient):
    response = await seeded_client.put(f"{BASE}/pages/about", json={"id": "company"})
    assert response.status_code == 200
    assert response.json()["id"] == "company"
    assert response.json()["sections"][0]["heading"] == "Team"


@pytest.mark.asyncio
async def test_update_unknown_page(seeded_client: AsyncClient):
    _problem(await seeded_client.put(f"{BASE}/pages/nope", json={"title": "x"}), 404)


@pytest.mark.asyncio
async def test_delete_page_rehomes_sections(seeded_client: AsyncClient, seeded_store):
    response = await seeded_client.delete(f"{BASE}/pages/about")
    assert response.json() == {"success": True}
    document = read_document(seeded_store)
    assert [p["id"] for p in document["pages"]] == ["home", "team"]
    assert document["pages"][0]["sections"][-1]["heading"] == "Team"
    assert [i["label"] for i in document["menus"][0]["items"]] == ["Home", "Contact"]


@pytest.mark.asyncio
async def test_delete_last_page_refused(client: AsyncClient, store):
    store.replace("pages", [{"id": "home", "slug": "/", "name": "Home", "sections": []}])
    body = _problem(await client.delete(f"{BASE}/pages/home"), 400)
    assert body["error"] == "Cannot delete the last page"


@pytest.mark.asyncio
async def test_preview_page(seeded_client: AsyncClient):
    response = await seeded_client.get(f"{BASE}/pages/home/preview")
    assert response.status_code == 200
    preview = response.json()
    assert [s["heading"] for s in preview["sections"]] == ["Welcome"]
    assert preview["sections"][0]["text_align"] == "center"
    _problem(await seeded_client.get(f"{BASE}/pages/nope/preview"), 404)


@pytest.mark.asyncio
async def test_get_section_fills_editor_defaults(seeded_client: AsyncClient, seeded_store):
    response = await seeded_client.get(f"{BASE}/pages/about/sections/0")
    assert response.status_code == 200
    section = response.json()
    assert section["heading"] == "Team"
    assert section["align"] == "right"
    assert section["imgFit"] == "cover"
    assert section["paddingY"] == "comfortable"
    assert section["hidden"] is False
    assert read_document(seeded_store)["pages"][1]["sections"][0] == {
        "heading": "Team",
        "img": "https://cdn.example.com/team.jpg",
        "align": "right",
    }
    _problem(await seeded_client.get(f"{BASE}/pages/about/sections/3"), 404)


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_section_editor_flow(seeded_client: AsyncClient, seeded_store):
    response = await seeded_client.post(
        f"{BASE}/pages/team/sections",
        json={"heading": "Meet us", "paddingY": "comfortable", "bgType": "none"},
    )
    assert response.status_code == 201
    assert response.json()["sections"] == [{"heading": "Meet us"}]

    response = await seeded_client.put(
        f"{BASE}/pages/team/sections/0", json={"heading": "Meet the team", "paddingY": "spacious"}
    )
    assert response.json()["sections"] == [{"heading": "Meet the team", "paddingY": "spacious"}]

    response = await seeded_client.post(f"{BASE}/pages/team/sections/0/duplicate")
    assert len(response.json()["sections"]) == 2

    response = await seeded_client.post(f"{BASE}/pages/team/sections/1/toggle")
    assert response.json()["sections"][1]["hidden"] is True

    response = await seeded_client.post(
        f"{BASE}/pages/team/sections/move", json={"fromIndex": 1, "toIndex": 0}
    )
    assert response.json()["sections"][0]["hidden"] is True

    response = await seeded_client.delete(f"{BASE}/pages/team/sections/0")
    assert response.json()["sections"] == [{"heading": "Meet the team", "paddingY": "spacious"}]

    team = next(p for p in read_document(seeded_store)["pages"] if p["id"] == "team")
    assert team["sections"] == [{"heading": "Meet the team", "paddingY": "spacious"}]


@pytest.mark.asyncio
async def test_section_requires_heading(seeded_client: AsyncClient):
    body = _problem(await seeded_client.post(f"{BASE}/pages/team/sections", json={"img": "/a.jpg"}), 400)
    assert body["error"] == "Please enter a heading"


@pytest.mark.asyncio
async def test_section_index_out_of_range(seeded_client: AsyncClient):
    _problem(await seeded_client.delete(f"{BASE}/pages/home/sections/9"), 404)
    _problem(
        await seeded_client.post(f"{BASE}/pages/home/sections/move", json={"fromIndex": 0, "toIndex": 9}),
        404,
    )


# ---------------------------------------------------------------------------
# Menus
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_menu_editor_flow(seeded_client: AsyncClient, seeded_store):
    response = await seeded_client.post(f"{BASE}/menus", json={"name": "Sidebar"})
    assert response.status_code == 201
    menu = response.json()
    menu_id = menu["id"]
    assert menu["items"] == []

    response = await seeded_client.post(
        f"{BASE}/menus/{menu_id}/items", json={"label": "Docs", "url": "/docs"}
    )
    assert response.status_code == 201
    docs_id = response.json()["items"][0]["id"]

    response = await seeded_client.post(
        f"{BASE}/menus/{menu_id}/items", json={"label": "API", "url": "/api"}
    )
    api_id = response.json()["items"][1]["id"]

    response = await seeded_client.post(
        f"{BASE}/menus/{menu_id}/items/{api_id}/submenu", json={"parentId": docs_id}
    )
    items = response.json()["items"]
    assert len(items) == 1
    assert items[0]["children"][0]["label"] == "API"

    response = await seeded_client.put(
        f"{BASE}/menus/{menu_id}/items/{api_id}", json={"label": "API reference"}
    )
    assert response.json()["items"][0]["children"][0]["label"] == "API reference"

    response = await seeded_client.post(f"{BASE}/menus/{menu_id}/items/{api_id}/top-level")
    assert [i["label"] for i in response.json()["items"]] == ["Docs", "API reference"]

    response = await seeded_client.post(
        f"{BASE}/menus/{menu_id}/items/{api_id}/reorder",
        json={"targetId": docs_id, "position": "before"},
    )
    assert [i["label"] for i in response.json()["items"]] == ["API reference", "Docs"]

    response = await seeded_client.delete(f"{BASE}/menus/{menu_id}/items/{docs_id}")
    assert [i["label"] for i in response.json()["items"]] == ["API reference"]

    response = await seeded_client.delete(f"{BASE}/menus/{menu_id}")
    assert response.json() == {"success": True}
    assert [m["id"] for m in read_document(seeded_store)["menus"]] == ["main", "footer-links"]


@pytest.mark.asyncio
async def test_menu_editor_errors(seeded_client: AsyncClient):
    body = _problem(await seeded_client.post(f"{BASE}/menus", json={"name": "  "}), 400)
    assert body["error"] == "Please enter a menu name"
    _problem(await seeded_client.delete(f"{BASE}/menus/main"), 400)
    _problem(await seeded_client.delete(f"{BASE}/menus/missing"), 404)
    _problem(await seeded_client.post(f"{BASE}/menus/main/items", json={"label": "X"}), 400)
    _problem(
        await seeded_client.post(f"{BASE}/menus/main/items/i-about/submenu", json={"parentId": "i-team"}),
        400,
    )
    _problem(await seeded_client.put(f"{BASE}/menus/main/items/nope", json={"label": "X"}), 404)


@pytest.mark.asyncio
async def test_set_header_menu(seeded_client: AsyncClient, seeded_store):
    response = await seeded_client.post(f"{BASE}/menus/footer-links/header")
    assert response.json() == {"success": True, "selectedMenuId": "footer-links"}
    settings = read_document(seeded_store)["settings"]
    assert settings["selectedMenuId"] == "footer-links"
    assert settings["siteTitle"] == "Acme Studio"
    _problem(await seeded_client.post(f"{BASE}/menus/missing/header"), 404)
