"""Catalog search: free text and tag facets over folders and playlists.

Two matching modes exist side by side and are intentionally not unified:

- ``tag_exact_filter``: the tag filter (``?tag=``) keeps entities whose tag
  list contains the value exactly, case-sensitive.
- ``text_substring_filter``: the text query (``?q=``) is a case-insensitive
  substring match on name and description, and in text-only searches also
  on each tag.

The matching functions are pure and operate on anything with ``id``,
``name``, ``description`` and ``tags`` attributes. SearchService loads a
fresh snapshot from the database on every call; there is no index.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, TypeVar

from sqlalchemy.orm import Session

from ..models.folder import Folder
from ..models.playlist import Playlist
from ..repositories.folder_repository import FolderRepository
from ..repositories.playlist_repository import PlaylistRepository

TAG_SEPARATOR = ","

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT")


@dataclass
class SearchResult:
    playlists: List[Playlist] = field(default_factory=list)
    folders: List[Folder] = field(default_factory=list)


def parse_tag_param(raw: Optional[str]) -> List[str]:
    """Split a comma-separated tag parameter, dropping blank entries."""
    if not raw:
        return []
    return [t.strip() for t in raw.split(TAG_SEPARATOR) if t.strip()]


def dedupe_by_id(entities: Iterable[EntityT]) -> List[EntityT]:
    """First occurrence of each id wins; order of first encounter is kept."""
    seen = set()
    result = []
    for entity in entities:
        if entity.id not in seen:
            seen.add(entity.id)
            result.append(entity)
    return result


def tag_exact_filter(entities: Sequence[EntityT], tags: Sequence[str]) -> List[EntityT]:
    """Union of per-tag exact matches, deduplicated by id."""
    matched: List[EntityT] = []
    for tag in tags:
        matched.extend(e for e in entities if tag in (e.tags or []))
    return dedupe_by_id(matched)


def text_substring_filter(
    entities: Sequence[EntityT], query: str, include_tags: bool = True
) -> List[EntityT]:
    """Case-insensitive substring match on name/description (and tags)."""
    needle = query.lower()

    def matches(entity) -> bool:
        if needle in (entity.name or "").lower():
            return True
        if entity.description and needle in entity.description.lower():
            return True
        if include_tags:
            return any(needle in tag.lower() for tag in (entity.tags or []))
        return False

    return [e for e in entities if matches(e)]


def search_entities(
    entities: Sequence[EntityT], query: str = "", tags: Sequence[str] = ()
) -> List[EntityT]:
    """Apply the search rules to one entity type."""
    if tags:
        results = tag_exact_filter(entities, tags)
        if query:
            # Narrowing filter over the tag union; tags are not text-matched here.
            results = text_substring_filter(results, query, include_tags=False)
        return results
    if query:
        return text_substring_filter(entities, query, include_tags=True)
    return []


def collect_tags(*groups: Iterable) -> List[str]:
    """Distinct tags across every entity in *groups*, sorted."""
    tags = set()
    for group in groups:
        for entity in group:
            tags.update(entity.tags or [])
    return sorted(tags)


class SearchService:
    """Search and tag listing over a fresh catalog snapshot."""

    def __init__(self, db: Session):
        self.db = db
        self.folder_repo = FolderRepository(db)
        self.playlist_repo = PlaylistRepository(db)

    def search(self, query: Optional[str] = None, tag: Optional[str] = None) -> SearchResult:
        """Search folders and playlists independently.

        Returns empty results, never an error, when neither a query nor a
        tag is supplied.
        """
        query = (query or "").strip()
        tags = parse_tag_param(tag)
        if not query and not tags:
            return SearchResult()

        playlists = self.playlist_repo.get_all()
        folders = self.folder_repo.get_all()
        result = SearchResult(
            playlists=search_entities(playlists, query, tags),
            folders=search_entities(folders, query, tags),
        )
        logger.debug(
            "Search executed",
            extra={
                "query": query,
                "tags": tags,
                "playlists": len(result.playlists),
                "folders": len(result.folders),
            },
        )
        return result

    def search_playlists(self, query: str) -> List[Playlist]:
        """Text-only playlist search (name, description, tags)."""
        query = (query or "").strip()
        if not query:
            return []
        return text_substring_filter(self.playlist_repo.get_all(), query, include_tags=True)

    def list_tags(self) -> List[str]:
        return collect_tags(self.playlist_repo.get_all(), self.folder_repo.get_all())
