"""Resolved render descriptions produced by the section layout resolver."""

from typing import Literal

from pydantic import BaseModel, Field

BLOCK_ORDER = ("subheading", "heading", "description", "features", "faqs", "button")


class VideoBackground(BaseModel):
    url: str
    autoplay: bool = True
    loop: bool = True
    muted: bool = True
    controls: bool = False
    width: Literal["full", "container"] = "full"
    show_play_button: bool = True


class Background(BaseModel):
    kind: Literal["none", "video", "image", "surface", "custom_color", "theme_color"] = "none"
    css_class: str = ""
    style: dict[str, str] = Field(default_factory=dict)
    image_url: str | None = None
    color: str | None = None
    theme_color: str | None = None
    video: VideoBackground | None = None
    overlay_opacity: float = 0.0
    dark_overlay_opacity: float = 0.0


class Spacing(BaseModel):
    padding_y: int
    padding_class: str
    min_height: int


class ImageColumn(BaseModel):
    src: str
    alt: str
    position: Literal["left", "right"]
    fit: Literal["cover", "contain", "fill", "none"]
    height: int


class Feature(BaseModel):
    icon: str | None = None
    icon_kind: Literal["image", "glyph"] | None = None
    title: str | None = None
    text: str | None = None
    url: str | None = None
    link_target: str | None = None
    link_rel: str | None = None


class FeatureBlock(BaseModel):
    layout: Literal["stacked", "grid-2", "grid-3"]
    columns: int
    items: list[Feature]


class FaqItem(BaseModel):
    key: str
    question: str
    answer: str


class Button(BaseModel):
    label: str
    href: str
    target: str
    rel: str | None = None


class ColorOverrides(BaseModel):
    heading: str
    subheading: str
    text: str
    css: str


class ContactBlock(BaseModel):
    show_map: bool = True
    map_url: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    form_title: str = "Send us a message"
    submit_button_text: str = "Send Message"


class SectionRender(BaseModel):
    index: int
    anchor: str
    layout: Literal["with_image", "without_image"]
    text_align: Literal["left", "center", "right"]
    background: Background
    spacing: Spacing
    style: dict[str, str] = Field(default_factory=dict)
    image: ImageColumn | None = None
    subheading: str | None = None
    heading: str = ""
    description_html: str | None = None
    features: FeatureBlock | None = None
    faqs: list[FaqItem] | None = None
    button: Button | None = None
    contact: ContactBlock | None = None
    color_overrides: ColorOverrides | None = None

    @property
    def blocks(self) -> list[str]:
        """Names of the content sub-blocks present, in render order."""
        present = {
            "subheading": self.subheading is not None,
            "heading": True,
            "description": self.description_html is not None,
            "features": self.features is not None,
            "faqs": self.faqs is not None,
            "button": self.button is not None,
        }
        return [name for name in BLOCK_ORDER if present[name]]


class PageRender(BaseModel):
    id: str
    name: str = ""
    slug: str = ""
    title: str = ""
    dark_mode: bool = False
    sections: list[SectionRender] = Field(default_factory=list)


class NavItem(BaseModel):
    label: str
    url: str
    children: list["NavItem"] = Field(default_factory=list)


class SiteHeader(BaseModel):
    site_title: str = ""
    variation: str = "background"
    logo_url: str = ""
    logo_width: str = "150"
    logo_height: str = "auto"
    menu_id: str | None = None
    items: list[NavItem] = Field(default_factory=list)


class FooterColumn(BaseModel):
    title: str
    items: list[NavItem] = Field(default_factory=list)


class SiteFooter(BaseModel):
    layout: str = "layout1"
    company_name: str = ""
    company_description: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    social_links: list[dict[str, str]] = Field(default_factory=list)
    copyright: str = ""
    logo_url: str = ""
    logo_width: str = "150"
    logo_height: str = "auto"
    columns: list[FooterColumn] = Field(default_factory=list)
    style: dict[str, str] = Field(default_factory=dict)
    text_color: str = "#FFFFFF"
    secondary_text_color: str = "#9CA3AF"
