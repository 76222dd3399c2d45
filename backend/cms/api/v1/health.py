"""Health check endpoint."""

import json

from fastapi import APIRouter, Depends

from cms import __version__
from cms.core.config import settings
from cms.core.dependencies import get_store
from cms.services.content_store import ContentStore

router = APIRouter()


@router.get("/health")
def health_check(store: ContentStore = Depends(get_store)):
    """Check the content store and report which integrations are configured."""
    store_status = "ok"
    try:
        json.loads(store.path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        store_status = "missing"
    except (OSError, ValueError):
        store_status = "error"

    return {
        "status": "degraded" if store_status == "error" else "ok",
        "store": store_status,
        "media": "configured" if settings.S3_BUCKET else "unconfigured",
        "stock_photos": "configured" if settings.PEXELS_API_KEY else "unconfigured",
        "demo_mode": settings.DEMO_MODE,
        "version": __version__,
    }
