"""Server-rendered public pages and the JSON render endpoint."""

from datetime import date

import pytest
from httpx import AsyncClient

from cms.rendering.site import find_page_by_slug, load_settings, resolve_footer
from cms.schemas.content import FooterSettings, Logo
from tests.helpers import sample_document

pytestmark = pytest.mark.integration


@pytest.mark.asyncio
async def test_home_page(seeded_client: AsyncClient):
    response = await seeded_client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    html = response.text
    assert "<title>Welcome to Acme</title>" in html
    assert 'id="section-0"' in html
    assert "Welcome" in html
    assert "Hidden section" not in html
    assert "text-center" in html
    assert 'href="/theme.css"' in html
    assert "30000" in html


@pytest.mark.asyncio
async def test_header_navigation(seeded_client: AsyncClient):
    html = (await seeded_client.get("/")).text
    assert 'src="https://cdn.example.com/logo.png"' in html
    assert 'alt="Acme Studio"' in html
    assert 'class="submenu"' in html
    assert 'href="https://blog.example.com"' in html
    assert "header-background" in html


@pytest.mark.asyncio
async def test_slug_page_with_image(seeded_client: AsyncClient):
    response = await seeded_client.get("/about")
    assert response.status_code == 200
    html = response.text
    assert "image-right" in html
    assert 'src="https://cdn.example.com/team.jpg"' in html
    assert "height: 320px" in html
    assert "min-height: 500px" in html


@pytest.mark.asyncio
async def test_page_without_sections(seeded_client: AsyncClient):
    html = (await seeded_client.get("/team")).text
    assert "No sections added yet" in html


@pytest.mark.asyncio
async def test_unknown_slug_renders_not_found(seeded_client: AsyncClient):
    response = await seeded_client.get("/nowhere")
    assert response.status_code == 404
    assert "/nowhere could not be found" in response.text


@pytest.mark.asyncio
async def test_home_without_pages_is_not_found(client: AsyncClient):
    assert (await client.get("/")).status_code == 404


@pytest.mark.asyncio
async def test_dark_mode_rendering(seeded_client: AsyncClient):
    await seeded_client.post("/api/v1/settings", json={"enableDarkMode": True})
    html = (await seeded_client.get("/")).text
    assert '<html lang="en" class="dark">' in html
    assert "background-color: #1a1a1a" in html


@pytest.mark.asyncio
async def test_footer_rendering(seeded_client: AsyncClient):
    html = (await seeded_client.get("/")).text
    assert "site-footer" not in html

    footer = {"enabled": True, "selectedMenu": "footer-links", "companyName": "Acme Inc"}
    await seeded_client.post("/api/v1/settings", json={"footer": footer})
    html = (await seeded_client.get("/")).text
    assert "site-footer" in html
    assert "Quick Links" in html
    assert "About us" in html
    assert "Acme Inc" in html


@pytest.mark.asyncio
async def test_invalid_footer_keeps_other_settings(seeded_client: AsyncClient, seeded_store):
    def _break_footer(document):
        document["settings"]["enableDarkMode"] = True
        document["settings"]["footer"] = {"enabled": True, "layout": "layout9"}

    seeded_store.update(_break_footer)
    response = await seeded_client.get("/")
    assert response.status_code == 200
    html = response.text
    assert 'alt="Acme Studio"' in html
    assert '<html lang="en" class="dark">' in html
    assert "site-footer" not in html


@pytest.mark.asyncio
async def test_section_color_overrides_are_emitted(client: AsyncClient, store):
    store.replace(
        "pages",
        [{"id": "home", "slug": "/", "name": "Home", "sections": [{"heading": "Hi", "customHeadingColor": "#ff0000"}]}],
    )
    html = (await client.get("/")).text
    assert "#section-0 .section-heading { color: #ff0000 !important; }" in html


@pytest.mark.asyncio
async def test_render_endpoint(seeded_client: AsyncClient):
    home = (await seeded_client.get("/api/v1/render/home")).json()
    assert home["id"] == "home"
    assert [s["index"] for s in home["sections"]] == [0]

    about = (await seeded_client.get("/api/v1/render/about")).json()
    section = about["sections"][0]
    assert section["layout"] == "with_image"
    assert section["image"]["position"] == "right"
    assert section["spacing"]["min_height"] == 500

    response = await seeded_client.get("/api/v1/render/nowhere")
    assert response.status_code == 404
    assert response.json()["error"] == "Page not found"


@pytest.mark.asyncio
async def test_drafts_are_still_served(seeded_client: AsyncClient):
    assert (await seeded_client.get("/team")).status_code == 200


# ---------------------------------------------------------------------------
# Page lookup and footer resolution
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize("slug", ["about", "/about", "about/"])
def test_find_page_by_slug_normalizes(slug):
    assert find_page_by_slug(sample_document()["pages"], slug)["id"] == "about"


@pytest.mark.unit
def test_footer_disabled_is_none():
    menus = sample_document()["menus"]
    assert resolve_footer(None, menus, Logo()) is None
    assert resolve_footer(FooterSettings(), menus, Logo()) is None


@pytest.mark.unit
def test_footer_columns_follow_menu_count():
    menus = sample_document()["menus"]
    footer = FooterSettings(
        enabled=True,
        menuCount=2,
        selectedMenu="main",
        selectedMenu2="footer-links",
        selectedMenu3="main",
    )
    resolved = resolve_footer(footer, menus, Logo(url="/logo.png"))
    assert [c.title for c in resolved.columns] == ["Quick Links", "More Links"]
    assert resolved.logo_url == "/logo.png"
    assert resolved.style == {"background-color": "#1F2937"}


@pytest.mark.unit
def test_footer_custom_logo_and_colors():
    footer = FooterSettings(
        enabled=True,
        useCustomFooterLogo=True,
        footerLogo=Logo(url="/footer.png"),
        bgType="customColor",
        bgColor="#000000",
        textColor="#EEEEEE",
    )
    resolved = resolve_footer(footer, [], Logo(url="/logo.png"))
    assert resolved.logo_url == "/footer.png"
    assert resolved.style == {"background-color": "#000000"}
    assert resolved.text_color == "#EEEEEE"

    dark = resolve_footer(footer, [], Logo(url="/logo.png"), dark_mode=True)
    assert dark.style == {"background-color": "#1F2937"}
    assert dark.text_color == "#FFFFFF"


@pytest.mark.unit
def test_footer_copyright_defaults_to_current_year():
    assert FooterSettings().copyright == f"© {date.today().year} All rights reserved."


@pytest.mark.unit
def test_load_settings_falls_back_per_key(store):
    store.replace(
        "settings",
        {"siteTitle": "Acme", "enableDarkMode": "sometimes", "footer": {"layout": "layout9"}, "theme": "x"},
    )
    loaded = load_settings(store)
    assert loaded.siteTitle == "Acme"
    assert loaded.enableDarkMode is False
    assert loaded.footer is None
    assert loaded.model_extra == {"theme": "x"}
