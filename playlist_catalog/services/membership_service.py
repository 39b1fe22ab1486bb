"""Membership manager: keeps playlist <-> folder links consistent.

``set_membership`` is a destructive overwrite: it deletes every link of the
playlist and inserts the requested set inside one transaction, so readers
never observe a half-applied set.
"""

import logging
from typing import Iterable, List

from sqlalchemy.orm import Session

from ..exceptions import ValidationError
from ..models.playlist import Playlist, PlaylistFolder
from ..repositories.folder_repository import FolderRepository
from ..repositories.membership_repository import MembershipRepository
from ..repositories.playlist_repository import PlaylistRepository

logger = logging.getLogger(__name__)


def unique_ids(ids: Iterable[int]) -> List[int]:
    """Drop repeated ids, keeping first-seen order."""
    seen = set()
    result = []
    for value in ids:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


class MembershipService:
    """Link management between playlists and folders."""

    def __init__(self, db: Session):
        self.db = db
        self.membership_repo = MembershipRepository(db)
        self.folder_repo = FolderRepository(db)
        self.playlist_repo = PlaylistRepository(db)

    def validate_folder_ids(self, folder_ids: Iterable[int]) -> List[int]:
        """Deduplicate *folder_ids* and make sure every folder exists.

        Raises ValidationError naming the unknown ids; nothing is written.
        """
        wanted = unique_ids(folder_ids)
        found = {f.id for f in self.folder_repo.get_many(wanted)}
        missing = [fid for fid in wanted if fid not in found]
        if missing:
            raise ValidationError(
                f"Unknown folder id(s): {', '.join(str(m) for m in missing)}",
                field="folder_ids",
            )
        return wanted

    def set_membership(
        self, playlist_id: int, folder_ids: Iterable[int], commit: bool = True
    ) -> List[PlaylistFolder]:
        """Replace the complete folder set of a playlist.

        An empty set leaves the playlist unfiled. With ``commit=False`` the
        caller owns the transaction (used by playlist create/update).
        """
        self.playlist_repo.get_by_id(playlist_id)
        wanted = self.validate_folder_ids(folder_ids)

        try:
            removed = self.membership_repo.delete_by_playlist(playlist_id)
            links = [self.membership_repo.create(playlist_id, fid) for fid in wanted]
            if commit:
                self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.debug(
            "Membership replaced",
            extra={"playlist_id": playlist_id, "removed": removed, "folder_ids": wanted},
        )
        return links

    def add_link(self, playlist_id: int, folder_id: int) -> PlaylistFolder:
        """File a playlist into one more folder. Idempotent."""
        self.playlist_repo.get_by_id(playlist_id)
        self.folder_repo.get_by_id(folder_id)

        existing = self.membership_repo.get_link(playlist_id, folder_id)
        if existing is not None:
            return existing

        link = self.membership_repo.create(playlist_id, folder_id)
        self.db.commit()
        return link

    def remove_link(self, playlist_id: int, folder_id: int) -> bool:
        """Remove one (playlist, folder) pair, leaving other links untouched."""
        self.playlist_repo.get_by_id(playlist_id)
        removed = self.membership_repo.delete_link(playlist_id, folder_id)
        self.db.commit()
        return removed > 0

    def list_memberships(self, playlist_id: int) -> List[PlaylistFolder]:
        self.playlist_repo.get_by_id(playlist_id)
        return self.membership_repo.list_by_playlist(playlist_id)

    def list_playlists_in_folder(self, folder_id: int) -> List[Playlist]:
        """Playlists linked to *folder_id*; empty when nothing is filed there."""
        playlist_ids = self.membership_repo.playlist_ids_in_folder(folder_id)
        return self.playlist_repo.get_many(playlist_ids)
