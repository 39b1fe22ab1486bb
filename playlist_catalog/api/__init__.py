"""API routes."""

from .folders import router as folders_router
from .playlists import router as playlists_router
from .search import router as search_router

__all__ = [
    "folders_router",
    "playlists_router",
    "search_router",
]
