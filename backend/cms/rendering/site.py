"""Site chrome for the public renderers: page lookup, header and footer."""

import logging
from typing import Any

from pydantic import ValidationError

from cms.schemas.content import FooterSettings, HeaderVariation, Logo, SiteSettings
from cms.schemas.render import FooterColumn, NavItem, SiteFooter, SiteHeader
from cms.services.content_store import ContentStore
from cms.services.menus import select_header_menu

logger = logging.getLogger(__name__)

FOOTER_DEFAULTS = FooterSettings()


def load_settings(store: ContentStore) -> SiteSettings:
    """Stored settings over the defaults. Invalid stored values fall back per key."""
    raw = store.get("settings", {})
    if not isinstance(raw, dict):
        return SiteSettings()
    valid = {}
    for key, value in raw.items():
        try:
            SiteSettings.model_validate({key: value})
        except ValidationError as exc:
            logger.warning("Ignoring invalid stored setting %s (%d errors)", key, exc.error_count())
            continue
        valid[key] = value
    return SiteSettings.model_validate(valid)


def load_logo(store: ContentStore) -> Logo:
    raw = store.get("logo", {})
    try:
        return Logo.model_validate(raw if isinstance(raw, dict) else {})
    except ValidationError:
        logger.warning("Stored logo is invalid, using the default logo")
        return Logo()


def load_header_variation(store: ContentStore) -> str:
    try:
        return HeaderVariation(variation=store.get("headerVariation", "background")).variation
    except ValidationError:
        logger.warning("Stored header variation is invalid, using 'background'")
        return "background"


def find_home_page(pages: list[dict[str, Any]]) -> dict[str, Any] | None:
    for page in pages:
        if isinstance(page, dict) and (page.get("slug") == "/" or page.get("id") == "home"):
            return page
    return None


def find_page_by_slug(pages: list[dict[str, Any]], slug: str) -> dict[str, Any] | None:
    path = "/" + slug.strip("/")
    for page in pages:
        if isinstance(page, dict) and page.get("slug") == path:
            return page
    return None


def _nav_items(items: Any) -> list[NavItem]:
    nav = []
    for item in items or []:
        if not isinstance(item, dict):
            continue
        nav.append(
            NavItem(
                label=str(item.get("label", "")),
                url=str(item.get("url", "#")),
                children=_nav_items(item.get("children")),
            )
        )
    return nav


def resolve_header(
    menus: list[dict[str, Any]], settings: SiteSettings, logo: Logo, variation: str
) -> SiteHeader:
    menu = select_header_menu(menus, settings.selectedMenuId)
    return SiteHeader(
        site_title=settings.siteTitle,
        variation=variation,
        logo_url=logo.url,
        logo_width=str(logo.width),
        logo_height=str(logo.height),
        menu_id=menu.get("id") if menu else None,
        items=_nav_items(menu.get("items")) if menu else [],
    )


def resolve_footer(
    footer: FooterSettings | None,
    menus: list[dict[str, Any]],
    logo: Logo,
    dark_mode: bool = False,
) -> SiteFooter | None:
    """Footer description, or None when the footer is disabled."""
    if footer is None or not footer.enabled:
        return None

    by_id = {m.get("id"): m for m in menus if isinstance(m, dict)}
    columns = []
    for number in range(1, footer.menuCount + 1):
        menu_key = "selectedMenu" if number == 1 else f"selectedMenu{number}"
        menu = by_id.get(getattr(footer, menu_key))
        if menu is None:
            continue
        columns.append(
            FooterColumn(
                title=getattr(footer, f"menuTitle{number}"),
                items=_nav_items(menu.get("items")),
            )
        )

    footer_logo = logo
    if footer.useCustomFooterLogo and footer.footerLogo.url:
        footer_logo = footer.footerLogo

    text_color = footer.textColor
    secondary = footer.secondaryTextColor
    style: dict[str, str] = {"background-color": FOOTER_DEFAULTS.bgColor}
    if dark_mode:
        text_color = FOOTER_DEFAULTS.textColor
        secondary = FOOTER_DEFAULTS.secondaryTextColor
    elif footer.bgType == "customColor" and footer.bgColor:
        style = {"background-color": footer.bgColor}
    if footer.bgType == "image" and footer.bgImage:
        style = {
            "background-image": f"url('{footer.bgImage}')",
            "background-size": "cover",
            "background-position": "center",
        }

    return SiteFooter(
        layout=footer.layout,
        company_name=footer.companyName,
        company_description=footer.companyDescription,
        email=footer.email,
        phone=footer.phone,
        address=footer.address,
        social_links=[link.model_dump() for link in footer.socialLinks if link.url],
        copyright=footer.copyright,
        logo_url=footer_logo.url,
        logo_width=str(footer_logo.width),
        logo_height=str(footer_logo.height),
        columns=columns,
        style=style,
        text_color=text_color,
        secondary_text_color=secondary,
    )
