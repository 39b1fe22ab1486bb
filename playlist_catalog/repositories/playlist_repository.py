"""Repository for playlist database operations."""

from typing import List, Optional

from ..models.playlist import Playlist
from ..exceptions import PlaylistNotFoundError
from .base import BaseRepository


class PlaylistRepository(BaseRepository[Playlist]):
    """Data access layer for playlists."""

    model_class = Playlist
    not_found_error = PlaylistNotFoundError

    def create(
        self,
        name: str,
        spotify_url: str,
        description: Optional[str] = None,
        cover_url: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> Playlist:
        playlist = Playlist(
            name=name,
            description=description,
            cover_url=cover_url,
            spotify_url=spotify_url,
            tags=list(tags or []),
        )
        self.db.add(playlist)
        self.db.flush()
        self.db.refresh(playlist)
        return playlist

    def get_by_spotify_url(self, spotify_url: str) -> Optional[Playlist]:
        return self._base_query().filter(Playlist.spotify_url == spotify_url).first()

    def get_many(self, playlist_ids: List[int]) -> List[Playlist]:
        """Batch fetch in id order. Unknown ids are skipped."""
        if not playlist_ids:
            return []
        return (
            self._base_query()
            .filter(Playlist.id.in_(playlist_ids))
            .order_by(Playlist.id)
            .all()
        )

    def update(self, playlist_id: int, fields: dict) -> Playlist:
        """Merge *fields* into the playlist. Raises PlaylistNotFoundError."""
        playlist = self.get_by_id(playlist_id)
        return self._apply(playlist, fields)

    def delete(self, playlist_id: int) -> bool:
        playlist = self.get_by_id_optional(playlist_id)
        if playlist is None:
            return False
        self.db.delete(playlist)
        self.db.flush()
        return True
