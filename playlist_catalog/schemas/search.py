"""Search schemas."""

from typing import List

from pydantic import BaseModel

from .folder import FolderResponse
from .playlist import PlaylistResponse


class SearchResponse(BaseModel):
    """Folders and playlists are matched independently and never interleaved."""
    playlists: List[PlaylistResponse] = []
    folders: List[FolderResponse] = []
