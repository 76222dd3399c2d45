"""Theme palette/typography reads and the generated site stylesheet."""

import logging
import re
from typing import Any

from pydantic import ValidationError

from cms.schemas.content import DEFAULT_TYPOGRAPHY, ThemeColors, Typography
from cms.services.content_store import ContentStore

logger = logging.getLogger(__name__)

_CSS_VAR_NAME_RE = re.compile(r"(?<!^)(?=[A-Z])")
_UNSAFE_CSS_RE = re.compile(r"[;{}<>]")


def load_colors(store: ContentStore) -> ThemeColors:
    """Stored palette over the defaults. Invalid stored values fall back per key."""
    raw = store.get("colors", {})
    if not isinstance(raw, dict):
        return ThemeColors()
    valid = {}
    for key, value in raw.items():
        if key not in ThemeColors.model_fields:
            continue
        try:
            ThemeColors.model_validate({key: value})
        except ValidationError:
            logger.warning("Ignoring invalid stored theme color %s=%r", key, value)
            continue
        valid[key] = value
    return ThemeColors.model_validate(valid)


def load_typography(store: ContentStore) -> Typography | None:
    """Stored typography, or None when the slice is absent or unreadable."""
    raw = store.get("typography")
    if raw is None:
        return None
    try:
        return Typography.model_validate(raw)
    except ValidationError:
        logger.warning("Stored typography is invalid, using the default stylesheet")
        return None


def css_var_name(key: str) -> str:
    """``buttonText`` -> ``--color-button-text``."""
    return "--color-" + _CSS_VAR_NAME_RE.sub("-", key).lower()


def _css_value(value: Any) -> str:
    return _UNSAFE_CSS_RE.sub("", str(value)).strip()


def build_theme_css(colors: ThemeColors, typography: Typography | None = None) -> str:
    """CSS custom properties plus the heading/subheading/text typography rules."""
    fonts = typography or DEFAULT_TYPOGRAPHY
    lines = [":root {"]
    for key, value in colors.model_dump().items():
        lines.append(f"  {css_var_name(key)}: {value};")
    for role in ("heading", "subheading", "text"):
        font = getattr(fonts, role) or getattr(DEFAULT_TYPOGRAPHY, role)
        default = getattr(DEFAULT_TYPOGRAPHY, role)
        lines.append(f"  --font-{role}-family: {_css_value(font.family or default.family)};")
        lines.append(f"  --font-{role}-size: {_css_value(font.size or default.size)};")
        lines.append(f"  --font-{role}-weight: {_css_value(font.weight or default.weight)};")
    lines.append("}")

    lines.append("body { background-color: var(--color-body); color: var(--color-text); }")
    lines.append(".bg-background { background-color: var(--color-background); }")
    for key in colors.model_dump():
        lines.append(f".bg-{key} {{ background-color: var({css_var_name(key)}); }}")
    for role, selector in (
        ("heading", ".section-heading"),
        ("subheading", ".section-subheading"),
        ("text", ".section-text"),
    ):
        lines.append(
            f"{selector} {{ color: var({css_var_name(role)}); "
            f"font-family: var(--font-{role}-family); "
            f"font-size: var(--font-{role}-size); "
            f"font-weight: var(--font-{role}-weight); }}"
        )
    lines.append(
        ".section-button { background-color: var(--color-button); "
        "color: var(--color-button-text); }"
    )
    return "\n".join(lines) + "\n"
