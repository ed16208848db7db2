"""API endpoints for the subject image index."""

from .search import router as search_router
from .images import router as images_router
from .records import router as records_router
from .health import router as health_router

__all__ = [
    "search_router",
    "images_router",
    "records_router",
    "health_router",
]
