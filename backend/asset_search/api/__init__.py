"""API router composition for the backend.

The module assembles individual route groups into a single `api_router` that can be mounted on the app.
"""

from fastapi import APIRouter

from asset_search.api.routes import agency_router, assets_router, creator_router, search_router

api_router = APIRouter()
api_router.include_router(agency_router)
api_router.include_router(creator_router)
api_router.include_router(assets_router)
api_router.include_router(search_router)

__all__ = ["api_router"]
