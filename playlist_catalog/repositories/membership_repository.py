"""Repository for the playlist_folders join table."""

from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.playlist import PlaylistFolder


class MembershipRepository:
    """Row-level access to playlist/folder links. No set semantics here."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, playlist_id: int, folder_id: int) -> PlaylistFolder:
        link = PlaylistFolder(playlist_id=playlist_id, folder_id=folder_id)
        self.db.add(link)
        self.db.flush()
        return link

    def get_link(self, playlist_id: int, folder_id: int) -> Optional[PlaylistFolder]:
        return (
            self.db.query(PlaylistFolder)
            .filter(
                PlaylistFolder.playlist_id == playlist_id,
                PlaylistFolder.folder_id == folder_id,
            )
            .first()
        )

    def list_by_playlist(self, playlist_id: int) -> List[PlaylistFolder]:
        return (
            self.db.query(PlaylistFolder)
            .filter(PlaylistFolder.playlist_id == playlist_id)
            .order_by(PlaylistFolder.id)
            .all()
        )

    def list_by_folder(self, folder_id: int) -> List[PlaylistFolder]:
        return (
            self.db.query(PlaylistFolder)
            .filter(PlaylistFolder.folder_id == folder_id)
            .order_by(PlaylistFolder.id)
            .all()
        )

    def playlist_ids_in_folder(self, folder_id: int) -> List[int]:
        rows = (
            self.db.query(PlaylistFolder.playlist_id)
            .filter(PlaylistFolder.folder_id == folder_id)
            .order_by(PlaylistFolder.id)
            .all()
        )
        return [row[0] for row in rows]

    def delete_by_playlist(self, playlist_id: int) -> int:
        count = (
            self.db.query(PlaylistFolder)
            .filter(PlaylistFolder.playlist_id == playlist_id)
            .delete(synchronize_session="fetch")
        )
        self.db.flush()
        return count

    def delete_by_folder(self, folder_id: int) -> int:
        count = (
            self.db.query(PlaylistFolder)
            .filter(PlaylistFolder.folder_id == folder_id)
            .delete(synchronize_session="fetch")
        )
        self.db.flush()
        return count

    def delete_link(self, playlist_id: int, folder_id: int) -> int:
        """Remove exactly one (playlist, folder) pair."""
        count = (
            self.db.query(PlaylistFolder)
            .filter(
                PlaylistFolder.playlist_id == playlist_id,
                PlaylistFolder.folder_id == folder_id,
            )
            .delete(synchronize_session="fetch")
        )
        self.db.flush()
        return count
