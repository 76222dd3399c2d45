"""
Jinja2 environment for the public site pages.

Templates live in ``cms/templates``; the environment is a lazy module-level
singleton.
"""

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from cms import __version__
from cms.core.config import settings

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


def _style_filter(value: Any) -> str:
    """Render a ``{property: value}`` mapping as an inline style string."""
    if not value:
        return ""
    return "; ".join(f"{prop}: {val}" for prop, val in value.items())


def create_jinja_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.globals["cms_version"] = __version__
    env.filters["style"] = _style_filter
    return env


_env: Environment | None = None


def get_jinja_env() -> Environment:
    """Get the shared Jinja2 environment (lazy singleton)."""
    global _env
    if _env is None:
        _env = create_jinja_env()
    return _env


def render_site_page(template_name: str, **context: Any) -> str:
    """Render a public page template with the poll interval injected."""
    context.setdefault("theme_poll_interval", settings.THEME_POLL_INTERVAL)
    template = get_jinja_env().get_template(template_name)
    return template.render(**context)
