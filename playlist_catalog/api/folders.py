"""Folder API: CRUD, children listing, and breadcrumb path.

Thin endpoints. FolderService (deep module) owns hierarchy rules.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from ..core.auth import AuthContext, require_auth, require_admin
from ..database import get_db
from ..schemas.folder import FolderCreate, FolderUpdate, FolderResponse, FolderDeleteResponse
from ..services.folder_service import FolderService

router = APIRouter(prefix="/api/folders", tags=["folders"])


@router.get("", response_model=List[FolderResponse])
def list_folders(
    parent_id: Optional[int] = Query(None, alias="parentId"),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """Children of ``parentId``, or the root folders when omitted."""
    return FolderService(db).list_children(parent_id)


@router.post("", response_model=FolderResponse, status_code=201)
def create_folder(
    data: FolderCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    return FolderService(db).create_folder(data)


@router.get("/{folder_id}", response_model=FolderResponse)
def get_folder(
    folder_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    return FolderService(db).get_folder(folder_id)


@router.patch("/{folder_id}", response_model=FolderResponse)
def update_folder(
    folder_id: int,
    data: FolderUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    """Apply only the fields present in the body. Moving or renaming re-paths the subtree."""
    return FolderService(db).update_folder(folder_id, data)


@router.delete("/{folder_id}", response_model=FolderDeleteResponse)
def delete_folder(
    folder_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    """Delete an empty folder and unfile its playlists. 409 if it still has subfolders."""
    removed = FolderService(db).delete_folder_cascade(folder_id)
    return FolderDeleteResponse(id=folder_id, removed_memberships=removed)


@router.get("/{folder_id}/path", response_model=List[FolderResponse])
def get_folder_path(
    folder_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """Breadcrumb from the root down to this folder, inclusive."""
    return FolderService(db).resolve_path(folder_id)
