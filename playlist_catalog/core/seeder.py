"""Seed a sample catalog on first startup.

Loads the bundled JSON fixture of folders and playlists into an empty
database so a fresh install has something to browse. Idempotent: skips
when any folder or playlist already exists.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

_FIXTURE_PATH = Path(__file__).parent.parent / "fixtures" / "sample_catalog.json"


def seed_sample_catalog(db: Session, fixture_path: Optional[Path] = None) -> int:
    """Load sample folders and playlists if the catalog is empty.

    Folders in the fixture name their parent by path ("Electronic"), and
    playlists list the folder paths they are filed under.

    Returns:
        Number of folders plus playlists created (0 if skipped).
    """
    from ..repositories.folder_repository import FolderRepository
    from ..repositories.playlist_repository import PlaylistRepository
    from ..schemas.folder import FolderCreate
    from ..schemas.playlist import PlaylistCreate
    from ..services.folder_service import FolderService
    from ..services.playlist_service import PlaylistService

    if FolderRepository(db).count() or PlaylistRepository(db).count():
        logger.debug("Catalog is not empty, skipping seed")
        return 0

    path = fixture_path or _FIXTURE_PATH
    if not path.exists():
        logger.debug("No seed fixture at %s", path)
        return 0

    try:
        with open(path, encoding="utf-8") as f:
            fixture = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to read seed fixture: %s", e)
        return 0

    folder_service = FolderService(db)
    playlist_service = PlaylistService(db)
    ids_by_path: dict[str, int] = {}
    seeded = 0

    for entry in fixture.get("folders", []):
        parent_path = entry.pop("parent", None)
        if parent_path is not None and parent_path not in ids_by_path:
            logger.warning("Seed folder '%s' skipped: unknown parent '%s'", entry.get("name"), parent_path)
            continue
        entry["parentId"] = ids_by_path.get(parent_path) if parent_path else None
        folder = folder_service.create_folder(FolderCreate(**entry))
        ids_by_path[folder.path] = folder.id
        seeded += 1

    for entry in fixture.get("playlists", []):
        folder_paths = entry.pop("folders", [])
        entry["folderIds"] = [ids_by_path[p] for p in folder_paths if p in ids_by_path]
        playlist_service.create_playlist(PlaylistCreate(**entry))
        seeded += 1

    logger.info("Seeded sample catalog", extra={"entities": seeded})
    return seeded
