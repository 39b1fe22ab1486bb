"""Playlist lifecycle: create, update, delete, listing.

Create and update touch two tables (playlists and playlist_folders); both
are written in one transaction and committed once at the end.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..exceptions import DuplicatePlaylistError
from ..models.playlist import Playlist
from ..repositories.membership_repository import MembershipRepository
from ..repositories.playlist_repository import PlaylistRepository
from ..schemas.playlist import PlaylistCreate, PlaylistUpdate
from .membership_service import MembershipService

logger = logging.getLogger(__name__)


class PlaylistService:
    """Deep module for playlist operations."""

    def __init__(self, db: Session):
        self.db = db
        self.playlist_repo = PlaylistRepository(db)
        self.membership_repo = MembershipRepository(db)
        self.membership_service = MembershipService(db)

    def get_playlist(self, playlist_id: int) -> Playlist:
        return self.playlist_repo.get_by_id(playlist_id)

    def list_playlists(self, folder_id: Optional[int] = None) -> List[Playlist]:
        """Playlists filed under *folder_id*, or every playlist when omitted."""
        if folder_id is None:
            return self.playlist_repo.get_all()
        return self.membership_service.list_playlists_in_folder(folder_id)

    def create_playlist(self, data: PlaylistCreate) -> Playlist:
        """Create a playlist and file it into ``data.folder_ids``.

        Raises DuplicatePlaylistError when the Spotify URL is already in the
        catalog and ValidationError for unknown folders, both before any write.
        """
        self._ensure_unique_spotify_url(data.spotify_url)
        folder_ids = self.membership_service.validate_folder_ids(data.folder_ids)

        try:
            playlist = self.playlist_repo.create(
                name=data.name,
                description=data.description,
                cover_url=data.cover_url,
                spotify_url=data.spotify_url,
                tags=data.tags,
            )
            self.membership_service.set_membership(playlist.id, folder_ids, commit=False)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Playlist created",
            extra={"playlist_id": playlist.id, "folder_ids": folder_ids},
        )
        return playlist

    def update_playlist(self, playlist_id: int, data: PlaylistUpdate) -> Playlist:
        """Merge supplied fields; replace memberships wholesale if folder_ids given."""
        self.playlist_repo.get_by_id(playlist_id)
        fields = data.model_dump(exclude_unset=True)
        folder_ids = fields.pop("folder_ids", None)

        if "spotify_url" in fields:
            self._ensure_unique_spotify_url(fields["spotify_url"], exclude_id=playlist_id)
        if folder_ids is not None:
            folder_ids = self.membership_service.validate_folder_ids(folder_ids)

        try:
            playlist = self.playlist_repo.update(playlist_id, fields)
            if folder_ids is not None:
                self.membership_service.set_membership(playlist_id, folder_ids, commit=False)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Playlist updated",
            extra={
                "playlist_id": playlist_id,
                "fields": sorted(fields.keys()),
                "folder_ids": folder_ids,
            },
        )
        return playlist

    def delete_playlist(self, playlist_id: int) -> int:
        """Delete a playlist after removing its links. Returns links removed."""
        self.playlist_repo.get_by_id(playlist_id)
        removed = self.membership_repo.delete_by_playlist(playlist_id)
        self.playlist_repo.delete(playlist_id)
        self.db.commit()
        logger.info(
            "Playlist deleted",
            extra={"playlist_id": playlist_id, "removed_memberships": removed},
        )
        return removed

    def _ensure_unique_spotify_url(self, spotify_url: str, exclude_id: Optional[int] = None) -> None:
        existing = self.playlist_repo.get_by_spotify_url(spotify_url)
        if existing is not None and existing.id != exclude_id:
            raise DuplicatePlaylistError(spotify_url, existing.id)
