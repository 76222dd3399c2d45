"""Content store request/response schemas."""

import re
from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")

HeaderVariationName = Literal[
    "transparent",
    "background",
    "center",
    "floating",
    "leftside",
    "fullscreen",
]

FooterLayout = Literal["layout1", "layout2", "layout3", "layout4", "layout5"]


# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------


class ThemeColors(BaseModel):
    """Globally shared color palette. Missing keys take the stock palette."""

    heading: str = "#1A1A1A"
    subheading: str = "#424242"
    body: str = "#FFFFFF"
    background: str = "#F5F5F5"
    text: str = "#212121"
    button: str = "#2196F3"
    buttonText: str = "#FFFFFF"
    primary: str = "#2196F3"
    accent: str = "#42A5F5"

    @field_validator("*")
    @classmethod
    def validate_hex_color(cls, v: str) -> str:
        if not _HEX_COLOR_RE.match(v):
            raise ValueError("Must be a hex color in #RGB, #RRGGBB or #RRGGBBAA format")
        return v


class ThemeUpdate(BaseModel):
    colors: ThemeColors


class TypographyRole(BaseModel):
    family: str = ""
    size: str = ""
    weight: str = ""


class Typography(BaseModel):
    heading: TypographyRole | None = None
    subheading: TypographyRole | None = None
    text: TypographyRole | None = None


DEFAULT_TYPOGRAPHY = Typography(
    heading=TypographyRole(family="Arial, sans-serif", size="32px", weight="700"),
    subheading=TypographyRole(family="Arial, sans-serif", size="24px", weight="600"),
    text=TypographyRole(family="Arial, sans-serif", size="16px", weight="400"),
)


class TypographyUpdate(BaseModel):
    """POST body: a replacement typography set, or ``{"action": "delete"}``."""

    typography: Typography | None = None
    action: Literal["delete"] | None = None

    @model_validator(mode="after")
    def _typography_or_delete(self) -> "TypographyUpdate":
        if self.action is None and self.typography is None:
            raise ValueError("typography is required unless action is 'delete'")
        return self


# ---------------------------------------------------------------------------
# Branding
# ---------------------------------------------------------------------------


class Logo(BaseModel):
    url: str = ""
    width: str | int = "150"
    height: str | int = "auto"


class LogoUpdate(BaseModel):
    logo: Logo


class HeaderVariation(BaseModel):
    variation: HeaderVariationName = "background"


# ---------------------------------------------------------------------------
# Menus
# ---------------------------------------------------------------------------


class MenuItem(BaseModel):
    id: str = Field(..., min_length=1)
    label: str
    url: str
    children: list["MenuItem"] | None = None


class Menu(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    items: list[MenuItem] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------


class Page(BaseModel):
    """A page and its ordered sections. Sections are sparse free-form records."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1)
    name: str = ""
    slug: str = ""
    title: str = ""
    status: Literal["draft", "published"] = "draft"
    sections: list[dict[str, Any]] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class SocialLink(BaseModel):
    platform: str = "facebook"
    url: str = ""


def _default_copyright() -> str:
    return f"© {date.today().year} All rights reserved."


class FooterSettings(BaseModel):
    model_config = ConfigDict(extra="allow")

    enabled: bool = False
    layout: FooterLayout = "layout1"
    selectedMenu: str = ""
    selectedMenu2: str = ""
    selectedMenu3: str = ""
    selectedMenu4: str = ""
    menuTitle1: str = "Quick Links"
    menuTitle2: str = "More Links"
    menuTitle3: str = "Resources"
    menuTitle4: str = "Support"
    menuCount: int = Field(2, ge=1, le=4)
    companyName: str = ""
    companyDescription: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    socialLinks: list[SocialLink] = Field(default_factory=list)
    copyright: str = Field(default_factory=_default_copyright)
    footerLogo: Logo = Field(default_factory=Logo)
    useCustomFooterLogo: bool = False
    bgType: Literal["default", "customColor", "image"] = "default"
    bgColor: str = "#1F2937"
    bgImage: str = ""
    textColor: str = "#FFFFFF"
    secondaryTextColor: str = "#9CA3AF"


class SiteSettings(BaseModel):
    model_config = ConfigDict(extra="allow")

    siteTitle: str = ""
    tagline: str = ""
    favicon: str = ""
    url: str = ""
    email: str = ""
    contactNumber: str = ""
    address: str = ""
    googleMapLink: str = ""
    enableDarkMode: bool = False
    selectedMenuId: str = ""
    footer: FooterSettings | None = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class SuccessResponse(BaseModel):
    success: bool = True


class LogoResponse(BaseModel):
    logo: Logo


class LogoSavedResponse(BaseModel):
    success: bool = True
    logo: Logo


class ThemeResponse(BaseModel):
    colors: ThemeColors


class TypographyResponse(BaseModel):
    typography: Typography | None = None


class DarkModeResponse(BaseModel):
    enabled: bool = False
