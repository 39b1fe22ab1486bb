"""Playlist API: CRUD, folder links, legacy search, and recommendations.

Literal sub-paths (/search, /recommend) are declared before /{playlist_id}
so they are not captured by the id route.
"""

import logging
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from typing import List, Optional

from ..core.auth import AuthContext, require_auth, require_admin
from ..database import get_db
from ..exceptions import ValidationError
from ..schemas.playlist import (
    PlaylistCreate,
    PlaylistUpdate,
    PlaylistResponse,
    PlaylistDeleteResponse,
    MembershipResponse,
)
from ..schemas.recommendation import (
    RecommendationRequest,
    RecommendationResponse,
    RecommendedPlaylist,
)
from ..services.membership_service import MembershipService
from ..services.playlist_service import PlaylistService
from ..services.recommendation_service import RecommendationService
from ..services.search_service import SearchService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/playlists", tags=["playlists"])


@router.get("", response_model=List[PlaylistResponse])
def list_playlists(
    folder_id: Optional[int] = Query(None, alias="folderId"),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """Playlists filed under ``folderId``, or every playlist when omitted."""
    return PlaylistService(db).list_playlists(folder_id)


@router.get("/search", response_model=List[PlaylistResponse])
def search_playlists(
    q: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """Case-insensitive substring match on playlist name, description and tags."""
    if not q or not q.strip():
        raise ValidationError("Search query is required", field="q")
    return SearchService(db).search_playlists(q)


@router.post("/recommend", response_model=RecommendationResponse)
def recommend_playlists(
    request: RecommendationRequest,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    result = RecommendationService(db).recommend(request.query)
    return RecommendationResponse(
        explanation=result.explanation,
        recommendations=[
            RecommendedPlaylist(
                **PlaylistResponse.model_validate(rec.playlist).model_dump(),
                reason=rec.reason,
            )
            for rec in result.recommendations
        ],
    )


@router.post("", response_model=PlaylistResponse, status_code=201)
def create_playlist(
    data: PlaylistCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    """Create a playlist. 409 if the Spotify URL is already in the catalog."""
    return PlaylistService(db).create_playlist(data)


@router.get("/{playlist_id}", response_model=PlaylistResponse)
def get_playlist(
    playlist_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    return PlaylistService(db).get_playlist(playlist_id)


@router.put("/{playlist_id}", response_model=PlaylistResponse)
def update_playlist(
    playlist_id: int,
    data: PlaylistUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    """Update fields; a ``folderIds`` list replaces the membership set wholesale."""
    return PlaylistService(db).update_playlist(playlist_id, data)


@router.delete("/{playlist_id}", response_model=PlaylistDeleteResponse)
def delete_playlist(
    playlist_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    removed = PlaylistService(db).delete_playlist(playlist_id)
    return PlaylistDeleteResponse(id=playlist_id, removed_memberships=removed)


# -- Folder links ---------------------------------------------------------

@router.get("/{playlist_id}/folders", response_model=List[MembershipResponse])
def list_playlist_folders(
    playlist_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    return MembershipService(db).list_memberships(playlist_id)


@router.put("/{playlist_id}/folders/{folder_id}", response_model=MembershipResponse)
def add_playlist_to_folder(
    playlist_id: int,
    folder_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    """File the playlist into one more folder. Repeating the call is a no-op."""
    return MembershipService(db).add_link(playlist_id, folder_id)


@router.delete("/{playlist_id}/folders/{folder_id}", status_code=204)
def remove_playlist_from_folder(
    playlist_id: int,
    folder_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    """Remove exactly this link. Other folders of the playlist are untouched."""
    if not MembershipService(db).remove_link(playlist_id, folder_id):
        logger.info(
            "No link to remove",
            extra={"playlist_id": playlist_id, "folder_id": folder_id},
        )
    return Response(status_code=204)
