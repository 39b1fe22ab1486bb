"""Playlist and membership schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import field_validator

from .base import CamelModel, normalize_tags


class PlaylistBase(CamelModel):
    """Fields shared by create payloads and responses."""
    name: str
    description: Optional[str] = None
    cover_url: Optional[str] = None
    spotify_url: str
    tags: List[str] = []

    @field_validator("name", "spotify_url")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be empty")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v):
        return normalize_tags(v)


class PlaylistCreate(PlaylistBase):
    """Schema for creating a playlist, optionally filing it into folders."""
    folder_ids: List[int] = []

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Deep House Vibes",
                    "description": "Smooth and groovy deep house tracks",
                    "spotifyUrl": "https://open.spotify.com/playlist/37i9dQZF1DX692WcMwL2yW",
                    "tags": ["Deep House", "Electronic", "Chill"],
                    "folderIds": [5],
                }
            ]
        }
    }


class PlaylistUpdate(CamelModel):
    """Update fields in place.

    When ``folder_ids`` is present it replaces the playlist's complete
    membership set; when absent memberships are left alone.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    cover_url: Optional[str] = None
    spotify_url: Optional[str] = None
    tags: Optional[List[str]] = None
    folder_ids: Optional[List[int]] = None

    @field_validator("name", "spotify_url", "tags", "folder_ids")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("name", "spotify_url")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be empty")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v):
        if v is None:
            return v
        return normalize_tags(v)


class PlaylistResponse(PlaylistBase):
    """Schema for playlist responses."""
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v):
        return list(v or [])


class MembershipResponse(CamelModel):
    """One playlist-folder link."""
    id: int
    playlist_id: int
    folder_id: int


class PlaylistDeleteResponse(CamelModel):
    """Result of a playlist deletion."""
    id: int
    removed_memberships: int
