"""Business logic services."""

from .folder_service import FolderService
from .membership_service import MembershipService
from .playlist_service import PlaylistService
from .search_service import SearchService
from .recommendation_service import RecommendationService

__all__ = [
    "FolderService",
    "MembershipService",
    "PlaylistService",
    "SearchService",
    "RecommendationService",
]
