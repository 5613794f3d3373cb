"""Route exports for the API layer.

Re-exports each router so callers can include all endpoints with a single import.
"""

from .agency import router as agency_router
from .assets import router as assets_router
from .creator import router as creator_router
from .search import router as search_router

__all__ = ["agency_router", "assets_router", "creator_router", "search_router"]
