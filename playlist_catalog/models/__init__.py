"""Database models."""

from .folder import Folder
from .playlist import Playlist, PlaylistFolder
from .user import User

__all__ = ["Folder", "Playlist", "PlaylistFolder", "User"]
