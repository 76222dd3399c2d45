"""FastAPI dependencies: content store access and the demo-mode write guard."""

from cms.core.config import settings
from cms.core.exceptions import DemoModeError
from cms.services.content_store import ContentStore


def get_store() -> ContentStore:
    """Return the content store configured for this process."""
    return ContentStore(settings.CONTENT_STORE_PATH)


def require_writable() -> None:
    """Refuse writes while the site is deployed as a read-only showcase."""
    if settings.DEMO_MODE:
        raise DemoModeError()
