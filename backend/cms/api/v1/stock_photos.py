"""Stock-photo search proxy."""

from fastapi import APIRouter, Query

from cms.services.stock_photos import DEFAULT_QUERY, search_photos

router = APIRouter()


@router.get("/search")
async def search_stock_photos(
    query: str = Query(DEFAULT_QUERY),
    page: int = Query(1, ge=1),
):
    """Pexels search results; on failure ``{"photos": [], "error": ...}`` with 200."""
    return await search_photos(query, page)
