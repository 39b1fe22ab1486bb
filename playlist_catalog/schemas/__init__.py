"""Request and response schemas."""

from .folder import FolderCreate, FolderUpdate, FolderResponse, FolderDeleteResponse
from .playlist import (
    PlaylistCreate,
    PlaylistUpdate,
    PlaylistResponse,
    PlaylistDeleteResponse,
    MembershipResponse,
)
from .search import SearchResponse
from .recommendation import RecommendationRequest, RecommendationResponse, RecommendedPlaylist

__all__ = [
    "FolderCreate", "FolderUpdate", "FolderResponse", "FolderDeleteResponse",
    "PlaylistCreate", "PlaylistUpdate", "PlaylistResponse", "PlaylistDeleteResponse",
    "MembershipResponse",
    "SearchResponse",
    "RecommendationRequest", "RecommendationResponse", "RecommendedPlaylist",
]
