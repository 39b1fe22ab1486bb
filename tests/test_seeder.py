"""Tests for first-startup sample catalog seeding."""

import json

from playlist_catalog.core.seeder import seed_sample_catalog
from playlist_catalog.services.folder_service import FolderService
from playlist_catalog.services.playlist_service import PlaylistService


class TestSeedSampleCatalog:

    def test_loads_bundled_fixture(self, db):
        seeded = seed_sample_catalog(db)
        assert seeded == 13

        roots = [f.name for f in FolderService(db).list_children(None)]
        assert roots == ["Electronic", "Rock", "Jazz", "Hip-Hop"]

        electronic = FolderService(db).list_children(None)[0]
        children = FolderService(db).list_children(electronic.id)
        assert [f.path for f in children] == [
            "Electronic/Deep House", "Electronic/Techno", "Electronic/Ambient",
        ]

        in_deep = PlaylistService(db).list_playlists(children[0].id)
        assert [p.name for p in in_deep] == ["Deep House Vibes"]

    def test_skips_non_empty_catalog(self, db, make_playlist):
        make_playlist("Already here")
        assert seed_sample_catalog(db) == 0
        assert len(PlaylistService(db).list_playlists()) == 1

    def test_custom_fixture_with_unknown_parent(self, db, tmp_path):
        fixture = tmp_path / "catalog.json"
        fixture.write_text(json.dumps({
            "folders": [
                {"name": "Jazz", "imageUrl": "https://img/jazz.jpg", "parent": None},
                {"name": "Bebop", "imageUrl": "https://img/bebop.jpg", "parent": "Missing"},
            ],
            "playlists": [
                {"name": "Blue Notes", "spotifyUrl": "https://open.spotify.com/playlist/x",
                 "folders": ["Jazz", "Missing"]},
            ],
        }))

        assert seed_sample_catalog(db, fixture_path=fixture) == 2
        playlist = PlaylistService(db).list_playlists()[0]
        jazz = FolderService(db).list_children(None)[0]
        assert [p.id for p in PlaylistService(db).list_playlists(jazz.id)] == [playlist.id]

    def test_missing_fixture_is_skipped(self, db, tmp_path):
        assert seed_sample_catalog(db, fixture_path=tmp_path / "absent.json") == 0
