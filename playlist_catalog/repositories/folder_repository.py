"""Repository for folder database operations."""

from typing import List, Optional

from ..models.folder import Folder
from ..exceptions import FolderNotFoundError
from .base import BaseRepository


class FolderRepository(BaseRepository[Folder]):
    """Data access layer for folders. No hierarchy rules live here."""

    model_class = Folder
    not_found_error = FolderNotFoundError

    def create(
        self,
        name: str,
        image_url: str,
        path: str,
        description: Optional[str] = None,
        parent_id: Optional[int] = None,
        tags: Optional[List[str]] = None,
    ) -> Folder:
        folder = Folder(
            name=name,
            description=description,
            image_url=image_url,
            parent_id=parent_id,
            path=path,
            tags=list(tags or []),
        )
        self.db.add(folder)
        self.db.flush()
        self.db.refresh(folder)
        return folder

    def list_by_parent(self, parent_id: Optional[int]) -> List[Folder]:
        """Exact match on parent_id. ``None`` lists root folders only."""
        query = self._base_query()
        if parent_id is None:
            query = query.filter(Folder.parent_id.is_(None))
        else:
            query = query.filter(Folder.parent_id == parent_id)
        return query.order_by(Folder.id).all()

    def child_ids(self, parent_id: int) -> List[int]:
        rows = (
            self.db.query(Folder.id)
            .filter(Folder.parent_id == parent_id)
            .order_by(Folder.id)
            .all()
        )
        return [row[0] for row in rows]

    def get_many(self, folder_ids: List[int]) -> List[Folder]:
        if not folder_ids:
            return []
        return (
            self._base_query()
            .filter(Folder.id.in_(folder_ids))
            .order_by(Folder.id)
            .all()
        )

    def update(self, folder_id: int, fields: dict) -> Folder:
        """Merge *fields* into the folder. Raises FolderNotFoundError."""
        folder = self.get_by_id(folder_id)
        return self._apply(folder, fields)

    def delete(self, folder_id: int) -> bool:
        folder = self.get_by_id_optional(folder_id)
        if folder is None:
            return False
        self.db.delete(folder)
        self.db.flush()
        return True
