"""Pexels stock-photo search."""

import logging
from typing import Any

import httpx

from cms.core.config import settings

logger = logging.getLogger(__name__)

PER_PAGE = 15
DEFAULT_QUERY = "nature"


def _get_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT)


async def search_photos(query: str = DEFAULT_QUERY, page: int = 1) -> dict[str, Any]:
    """Proxy a Pexels search. Failures come back as ``{photos: [], error}``."""
    params = {"query": query or DEFAULT_QUERY, "per_page": PER_PAGE, "page": page}
    headers = {"Authorization": settings.PEXELS_API_KEY}
    try:
        async with _get_http_client() as client:
            response = await client.get(settings.PEXELS_API_URL, params=params, headers=headers)
            response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as exc:
        error = f"Pexels API error: {exc.response.status_code}"
    except (httpx.HTTPError, ValueError) as exc:
        error = str(exc)
    logger.warning("Stock photo search for %r failed: %s", query, error)
    return {"photos": [], "error": error}
