"""Deep module for the folder tree: CRUD, breadcrumbs, and safe deletion.

Callers never touch parent chains, path strings, or membership cleanup
themselves. Every public mutation validates first and commits once, so a
rejected request leaves the tree unchanged.
"""

import logging
from collections import deque
from typing import Callable, Dict, List, Optional, Set

from sqlalchemy.orm import Session

from ..exceptions import FolderCycleError, FolderNotEmptyError, ValidationError
from ..models.folder import Folder
from ..repositories.folder_repository import FolderRepository
from ..repositories.membership_repository import MembershipRepository
from ..schemas.folder import FolderCreate, FolderUpdate

PATH_SEPARATOR = "/"

logger = logging.getLogger(__name__)


def build_path(parent: Optional[Folder], name: str) -> str:
    """Breadcrumb string for a folder called *name* under *parent*."""
    if parent is None:
        return name
    return f"{parent.path}{PATH_SEPARATOR}{name}"


def walk_ancestors(
    folder_id: int,
    lookup: Callable[[int], Optional[Folder]],
    max_steps: int,
) -> List[Folder]:
    """Collect folders from the root down to *folder_id* by following parent_id.

    A missing folder along the way stops the walk and the partial path
    gathered so far is returned. Revisiting a folder, or taking more than
    *max_steps* steps, raises FolderCycleError.
    """
    path: List[Folder] = []
    seen: Set[int] = set()
    current: Optional[int] = folder_id

    while current is not None:
        if current in seen:
            raise FolderCycleError(folder_id, [f.id for f in reversed(path)] + [current])

        folder = lookup(current)
        if folder is None:
            if path:
                logger.warning(
                    "Broken parent reference while resolving path",
                    extra={"folder_id": folder_id, "missing_id": current},
                )
            break

        # A found folder beyond the bound means the chain is longer than the tree.
        if len(path) >= max_steps:
            raise FolderCycleError(folder_id, [f.id for f in reversed(path)] + [current])

        seen.add(current)
        path.insert(0, folder)
        current = folder.parent_id

    return path


class FolderService:
    """All folder tree operations behind a narrow interface.

    Public methods:
        get_folder           -- lookup by id, raises FolderNotFoundError
        list_children        -- exact parent match; None lists roots
        create_folder        -- validates parent, derives path
        update_folder        -- partial merge; rejects cycles, re-paths subtree
        delete_folder_cascade -- drops memberships then the folder; refuses
                                 folders that still have children
        resolve_path         -- breadcrumb list, root first
    """

    def __init__(self, db: Session):
        self.db = db
        self.folder_repo = FolderRepository(db)
        self.membership_repo = MembershipRepository(db)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_folder(self, folder_id: int) -> Folder:
        return self.folder_repo.get_by_id(folder_id)

    def list_children(self, parent_id: Optional[int] = None) -> List[Folder]:
        return self.folder_repo.list_by_parent(parent_id)

    def create_folder(self, data: FolderCreate) -> Folder:
        parent = self._require_parent(data.parent_id)
        path = data.path.strip() if data.path and data.path.strip() else build_path(parent, data.name)

        folder = self.folder_repo.create(
            name=data.name,
            description=data.description,
            image_url=data.image_url,
            parent_id=data.parent_id,
            path=path,
            tags=data.tags,
        )
        self.db.commit()
        logger.info("Folder created", extra={"folder_id": folder.id, "path": folder.path})
        return folder

    def update_folder(self, folder_id: int, data: FolderUpdate) -> Folder:
        """Apply only the fields present in *data*.

        Moving a folder (changing parent_id) is rejected when the new parent
        is the folder itself or one of its descendants. Renaming or moving
        without an explicit path recomputes the path of the whole subtree.
        """
        folder = self.folder_repo.get_by_id(folder_id)
        fields = data.model_dump(exclude_unset=True)

        if "parent_id" in fields:
            new_parent_id = fields["parent_id"]
            if new_parent_id is not None:
                if new_parent_id == folder_id or new_parent_id in self.descendant_ids(folder_id):
                    raise ValidationError(
                        f"Folder {folder_id} cannot be moved under its own subtree",
                        field="parent_id",
                    )
            parent = self._require_parent(new_parent_id)
        else:
            parent = self._require_parent(folder.parent_id, missing_ok=True)

        old_path = folder.path
        if "path" not in fields and ("name" in fields or "parent_id" in fields):
            fields["path"] = build_path(parent, fields.get("name", folder.name))

        updated = self.folder_repo.update(folder_id, fields)
        if updated.path != old_path:
            self._repath_descendants(updated)

        self.db.commit()
        logger.info(
            "Folder updated",
            extra={"folder_id": folder_id, "fields": sorted(fields.keys())},
        )
        return updated

    def delete_folder_cascade(self, folder_id: int) -> int:
        """Delete a leaf folder and all links pointing at it.

        Returns the number of memberships removed. Raises FolderNotEmptyError
        when child folders exist, so no subtree is ever orphaned.
        """
        self.folder_repo.get_by_id(folder_id)

        child_ids = self.folder_repo.child_ids(folder_id)
        if child_ids:
            raise FolderNotEmptyError(folder_id, child_ids)

        removed = self.membership_repo.delete_by_folder(folder_id)
        self.folder_repo.delete(folder_id)
        self.db.commit()
        logger.info(
            "Folder deleted",
            extra={"folder_id": folder_id, "removed_memberships": removed},
        )
        return removed

    def resolve_path(self, folder_id: int) -> List[Folder]:
        """Ancestors of *folder_id* from root to the folder itself."""
        self.folder_repo.get_by_id(folder_id)
        return walk_ancestors(
            folder_id,
            self.folder_repo.get_by_id_optional,
            max_steps=self.folder_repo.count(),
        )

    def descendant_ids(self, folder_id: int) -> Set[int]:
        """Ids of every folder below *folder_id* (not including itself)."""
        children = self._children_index()
        found: Set[int] = set()
        queue = deque(children.get(folder_id, []))
        while queue:
            child_id = queue.popleft()
            if child_id in found or child_id == folder_id:
                continue
            found.add(child_id)
            queue.extend(children.get(child_id, []))
        return found

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _require_parent(self, parent_id: Optional[int], missing_ok: bool = False) -> Optional[Folder]:
        if parent_id is None:
            return None
        parent = self.folder_repo.get_by_id_optional(parent_id)
        if parent is None and not missing_ok:
            raise ValidationError(f"Parent folder not found: {parent_id}", field="parent_id")
        return parent

    def _children_index(self) -> Dict[int, List[int]]:
        index: Dict[int, List[int]] = {}
        for folder in self.folder_repo.get_all():
            if folder.parent_id is not None:
                index.setdefault(folder.parent_id, []).append(folder.id)
        return index

    def _repath_descendants(self, root: Folder) -> None:
        """Rebuild path strings below *root* after its own path changed."""
        by_parent: Dict[int, List[Folder]] = {}
        for folder in self.folder_repo.get_all():
            if folder.parent_id is not None:
                by_parent.setdefault(folder.parent_id, []).append(folder)

        visited: Set[int] = {root.id}
        queue = deque([root])
        while queue:
            parent = queue.popleft()
            for child in by_parent.get(parent.id, []):
                if child.id in visited:
                    continue
                visited.add(child.id)
                child.path = build_path(parent, child.name)
                queue.append(child)
        self.db.flush()
