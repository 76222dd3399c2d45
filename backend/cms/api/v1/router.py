"""Aggregate all v1 sub-routers."""

from fastapi import APIRouter

from cms.api.v1.branding import router as branding_router
from cms.api.v1.dashboard import router as dashboard_router
from cms.api.v1.health import router as health_router
from cms.api.v1.media import router as media_router
from cms.api.v1.menus import router as menus_router
from cms.api.v1.pages import router as pages_router
from cms.api.v1.render import router as render_router
from cms.api.v1.sections import router as sections_router
from cms.api.v1.settings import router as settings_router
from cms.api.v1.stock_photos import router as stock_photos_router
from cms.api.v1.theme import router as theme_router

api_v1_router = APIRouter()

api_v1_router.include_router(health_router, tags=["health"])
api_v1_router.include_router(pages_router, tags=["pages"])
api_v1_router.include_router(sections_router, tags=["sections"])
api_v1_router.include_router(menus_router, tags=["menus"])
api_v1_router.include_router(settings_router, tags=["settings"])
api_v1_router.include_router(theme_router, tags=["theme"])
api_v1_router.include_router(branding_router, tags=["branding"])
api_v1_router.include_router(media_router, prefix="/media", tags=["media"])
api_v1_router.include_router(
    stock_photos_router, prefix="/stock-photos", tags=["stock-photos"]
)
api_v1_router.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])
api_v1_router.include_router(render_router, prefix="/render", tags=["render"])
