"""Catalog-wide search and tag listing."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from ..core.auth import AuthContext, require_auth
from ..database import get_db
from ..schemas.folder import FolderResponse
from ..schemas.playlist import PlaylistResponse
from ..schemas.search import SearchResponse
from ..services.search_service import SearchService

router = APIRouter(prefix="/api", tags=["search"])


@router.get("/search", response_model=SearchResponse)
def search_catalog(
    q: Optional[str] = Query(None),
    tag: Optional[str] = Query(None, description="Comma-separated tags, matched exactly"),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """Search folders and playlists.

    Tags narrow by exact match first; ``q`` then filters by substring.
    With neither parameter both lists are empty.
    """
    result = SearchService(db).search(query=q, tag=tag)
    return SearchResponse(
        playlists=[PlaylistResponse.model_validate(p) for p in result.playlists],
        folders=[FolderResponse.model_validate(f) for f in result.folders],
    )


@router.get("/tags", response_model=List[str])
def list_tags(
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """Distinct tags across folders and playlists, sorted."""
    return SearchService(db).list_tags()
