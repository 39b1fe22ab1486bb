"""Data access repositories."""

from .base import BaseRepository
from .folder_repository import FolderRepository
from .playlist_repository import PlaylistRepository
from .membership_repository import MembershipRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "FolderRepository",
    "PlaylistRepository",
    "MembershipRepository",
    "UserRepository",
]
