"""Section layout resolver.

Pure functions from one stored section record, the theme palette and the
dark-mode flag to a ``SectionRender`` description. The dashboard preview, the
home renderer and the slug renderer all go through ``resolve_section``.
"""

import re
from typing import Any

from cms.schemas.content import ThemeColors
from cms.schemas.render import (
    Background,
    Button,
    ColorOverrides,
    ContactBlock,
    FaqItem,
    Feature,
    FeatureBlock,
    ImageColumn,
    PageRender,
    SectionRender,
    Spacing,
    VideoBackground,
)
from cms.services.sections import has_image, section_value

PADDING_SCALE = {"compact": 8, "comfortable": 12, "spacious": 20, "extra-spacious": 32}
DEFAULT_PADDING = 12

MIN_HEIGHT_WITH_IMAGE = 500
MIN_HEIGHT_WITHOUT_IMAGE = 400
DEFAULT_IMAGE_HEIGHT = 320

DARK_SURFACE_COLOR = "#1a1a1a"
DARK_IMAGE_OVERLAY = 0.7

FEATURE_COLUMNS = {"stacked": 1, "grid-2": 2, "grid-3": 3}
IMAGE_FITS = ("cover", "contain", "fill", "none")
TEXT_ALIGNS = ("left", "center", "right")

ASSET_HOST_MARKERS = ("cloudinary.com", "pexels.com", "amazonaws.com")
_IMAGE_EXT_RE = re.compile(r"\.(jpg|jpeg|png|gif|svg|webp)$", re.IGNORECASE)
_CSS_COLOR_RE = re.compile(
    r"^(#[0-9a-fA-F]{3,8}|[a-zA-Z]+|(rgb|rgba|hsl|hsla)\([0-9.,%\s]+\))$"
)


def classify_icon(icon: Any) -> str | None:
    """``"image"`` for URLs and image file names, ``"glyph"`` otherwise, None if empty."""
    if not isinstance(icon, str) or not icon:
        return None
    if icon.startswith(("http://", "https://", "/")):
        return "image"
    if any(marker in icon for marker in ASSET_HOST_MARKERS):
        return "image"
    if _IMAGE_EXT_RE.search(icon):
        return "image"
    return "glyph"


def _text(value: Any) -> str | None:
    if value is None or value == "" or isinstance(value, (dict, list)):
        return None
    return str(value)


def _css_color(value: Any) -> str | None:
    text = _text(value)
    if text is None or not _CSS_COLOR_RE.match(text.strip()):
        return None
    return text.strip()


def _pixels(value: Any) -> int | None:
    if isinstance(value, bool) or value is None or value == "":
        return None
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None
    return number if number > 0 else None


def _opacity(value: Any, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = default
    return max(0.0, min(number, 100.0)) / 100


def _theme_palette(theme: ThemeColors | dict[str, Any] | None) -> dict[str, str]:
    if isinstance(theme, ThemeColors):
        return theme.model_dump()
    palette = ThemeColors().model_dump()
    if isinstance(theme, dict):
        palette.update({k: v for k, v in theme.items() if isinstance(v, str) and v})
    return palette


# ---------------------------------------------------------------------------
# Background
# ---------------------------------------------------------------------------


def resolve_background(
    section: dict[str, Any], palette: dict[str, str], dark_mode: bool = False
) -> Background:
    bg_type = section_value(section, "bgType")
    background = Background()

    video_url = _text(section.get("bgVideoUrl"))
    image_url = _text(section.get("bgImage")) or _text(section.get("bgImageUrl"))
    custom_color = _css_color(section.get("bgColor"))
    theme_color = _text(section.get("bgThemeColor"))

    if bg_type == "video" and video_url:
        width = section_value(section, "bgVideoWidth")
        background = Background(
            kind="video",
            video=VideoBackground(
                url=video_url,
                autoplay=section_value(section, "bgVideoAutoplay") is not False,
                loop=section_value(section, "bgVideoLoop") is not False,
                muted=section_value(section, "bgVideoMuted") is not False,
                controls=section_value(section, "bgVideoControls") is True,
                width="container" if width == "container" else "full",
                show_play_button=section_value(section, "bgVideoShowPlayButton") is not False,
            ),
            overlay_opacity=_opacity(section_value(section, "bgVideoOverlay"), 50),
        )
    elif bg_type == "image" and image_url:
        background = Background(
            kind="image",
            image_url=image_url,
            style={
                "background-image": f"url('{image_url}')",
                "background-size": str(section_value(section, "bgImageSize")),
                "background-position": "center",
                "background-repeat": "no-repeat",
            },
            overlay_opacity=_opacity(section_value(section, "bgImageOverlay"), 0),
        )
    elif bg_type == "image":
        background = Background(kind="surface", css_class="bg-background")
    elif bg_type == "customColor" and custom_color:
        background = Background(
            kind="custom_color",
            color=custom_color,
            style={"background-color": custom_color},
        )
    elif bg_type == "themeColor" and theme_color:
        resolved = palette.get(theme_color)
        background = Background(
            kind="theme_color",
            css_class=f"bg-{theme_color}",
            theme_color=theme_color,
            color=resolved,
            style={"background-color": resolved} if resolved else {},
        )

    if dark_mode:
        if background.kind == "image":
            background.dark_overlay_opacity = DARK_IMAGE_OVERLAY
        elif bg_type in ("none", "customColor", "themeColor") and background.kind != "video":
            background.style = {**background.style, "background-color": DARK_SURFACE_COLOR}
    return background


# ---------------------------------------------------------------------------
# Content blocks
# ---------------------------------------------------------------------------


def _resolve_features(section: dict[str, Any]) -> FeatureBlock | None:
    raw = section.get("features")
    if not isinstance(raw, list):
        return None
    items = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        icon = _text(entry.get("icon"))
        url = _text(entry.get("url"))
        external = url is not None and url.startswith("http")
        items.append(
            Feature(
                icon=icon,
                icon_kind=classify_icon(icon),
                title=_text(entry.get("title")),
                text=_text(entry.get("text")),
                url=url,
                link_target="_blank" if external else None,
                link_rel="noopener noreferrer" if external else None,
            )
        )
    if not items:
        return None
    layout = section_value(section, "featuresLayout")
    if not isinstance(layout, str) or layout not in FEATURE_COLUMNS:
        layout = "grid-2"
    return FeatureBlock(layout=layout, columns=FEATURE_COLUMNS[layout], items=items)


def _resolve_faqs(section: dict[str, Any], index: int) -> list[FaqItem] | None:
    raw = section.get("faqs")
    if not isinstance(raw, list):
        return None
    entries = [entry for entry in raw if isinstance(entry, dict)]
    if not entries:
        return None
    return [
        FaqItem(
            key=f"faq-{index}-{position}",
            question=_text(entry.get("question")) or "",
            answer=_text(entry.get("answer")) or "",
        )
        for position, entry in enumerate(entries)
    ]


def _resolve_button(section: dict[str, Any]) -> Button | None:
    label = _text(section.get("button"))
    if label is None:
        return None
    target = str(section_value(section, "buttonTarget"))
    return Button(
        label=label,
        href=_text(section.get("buttonLink")) or "#",
        target=target,
        rel="noopener noreferrer" if target == "_blank" else None,
    )


def _resolve_contact(section: dict[str, Any]) -> ContactBlock:
    return ContactBlock(
        show_map=section_value(section, "showMap") is not False,
        map_url=_text(section.get("mapUrl")) or "",
        email=_text(section.get("contactEmail")) or "",
        phone=_text(section.get("contactPhone")) or "",
        address=_text(section.get("contactAddress")) or "",
        form_title=str(section_value(section, "formTitle")),
        submit_button_text=str(section_value(section, "submitButtonText")),
    )


def _resolve_color_overrides(section: dict[str, Any], index: int) -> ColorOverrides | None:
    heading = _css_color(section.get("customHeadingColor"))
    subheading = _css_color(section.get("customSubheadingColor"))
    text = _css_color(section.get("customTextColor"))
    if not (heading or subheading or text):
        return None
    heading = heading or "var(--color-heading)"
    subheading = subheading or "var(--color-subheading)"
    text = text or "var(--color-text)"
    scope = f"#section-{index}"
    css = (
        f"{scope} .section-heading {{ color: {heading} !important; }}\n"
        f"{scope} .section-subheading {{ color: {subheading} !important; }}\n"
        f"{scope} .section-text, {scope} .section-text * {{ color: {text} !important; }}"
    )
    return ColorOverrides(heading=heading, subheading=subheading, text=text, css=css)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def resolve_section(
    section: dict[str, Any],
    theme: ThemeColors | dict[str, Any] | None = None,
    dark_mode: bool = False,
    index: int = 0,
) -> SectionRender | None:
    """Resolve one section. Returns None for hidden sections."""
    if section.get("hidden") is True:
        return None

    palette = _theme_palette(theme)
    background = resolve_background(section, palette, dark_mode)

    padding = section_value(section, "paddingY")
    padding_y = PADDING_SCALE.get(padding, DEFAULT_PADDING) if isinstance(padding, str) else DEFAULT_PADDING
    custom_height = _pixels(section.get("customHeight"))
    with_image = has_image(section)
    if custom_height:
        min_height = custom_height
    elif with_image:
        min_height = MIN_HEIGHT_WITH_IMAGE
    else:
        min_height = MIN_HEIGHT_WITHOUT_IMAGE

    image = None
    text_align = "left"
    if with_image:
        fit = section_value(section, "imgFit")
        image = ImageColumn(
            src=section["img"],
            alt=_text(section.get("heading")) or "Section image",
            position="right" if section_value(section, "align") == "right" else "left",
            fit=fit if fit in IMAGE_FITS else "cover",
            height=custom_height or DEFAULT_IMAGE_HEIGHT,
        )
    else:
        align = section_value(section, "textAlign")
        text_align = align if align in TEXT_ALIGNS else "left"

    subheading = None
    if section.get("showSubheading") is not False:
        subheading = _text(section.get("subheading"))
    description = None
    if section.get("showDescription") is not False:
        description = _text(section.get("description"))

    is_contact = section_value(section, "sectionType") == "contact"

    return SectionRender(
        index=index,
        anchor=f"section-{index}",
        layout="with_image" if with_image else "without_image",
        text_align=text_align,
        background=background,
        spacing=Spacing(
            padding_y=padding_y,
            padding_class=f"py-{padding_y}",
            min_height=min_height,
        ),
        style={**background.style, "min-height": f"{min_height}px"},
        image=image,
        subheading=subheading,
        heading=_text(section.get("heading")) or "",
        description_html=description,
        features=None if is_contact else _resolve_features(section),
        faqs=None if is_contact else _resolve_faqs(section, index),
        button=None if is_contact else _resolve_button(section),
        contact=_resolve_contact(section) if is_contact else None,
        color_overrides=_resolve_color_overrides(section, index),
    )


def resolve_page(
    page: dict[str, Any],
    theme: ThemeColors | dict[str, Any] | None = None,
    dark_mode: bool = False,
) -> PageRender:
    """Resolve every visible section of ``page``; indexes follow stored order."""
    sections = page.get("sections")
    resolved = []
    if isinstance(sections, list):
        for index, section in enumerate(sections):
            if not isinstance(section, dict):
                continue
            render = resolve_section(section, theme, dark_mode, index)
            if render is not None:
                resolved.append(render)
    return PageRender(
        id=str(page.get("id") or ""),
        name=_text(page.get("name")) or "",
        slug=_text(page.get("slug")) or "",
        title=_text(page.get("title")) or "",
        dark_mode=dark_mode,
        sections=resolved,
    )
