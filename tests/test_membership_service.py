"""Tests for MembershipService: replacement, idempotence, precise removal."""

import pytest

from playlist_catalog.exceptions import FolderNotFoundError, PlaylistNotFoundError, ValidationError
from playlist_catalog.repositories.membership_repository import MembershipRepository
from playlist_catalog.services.membership_service import MembershipService, unique_ids
from playlist_catalog.services.playlist_service import PlaylistService


def _folder_ids(db, playlist_id):
    return {link.folder_id for link in MembershipService(db).list_memberships(playlist_id)}


class TestUniqueIds:

    def test_keeps_first_seen_order(self):
        assert unique_ids([3, 1, 3, 2, 1]) == [3, 1, 2]


class TestSetMembership:

    def test_replaces_whole_set(self, db, make_folder, make_playlist):
        a, b, c = make_folder("A"), make_folder("B"), make_folder("C")
        playlist = make_playlist("Mix", folders=[a, b])

        MembershipService(db).set_membership(playlist.id, [c.id])

        assert _folder_ids(db, playlist.id) == {c.id}
        assert PlaylistService(db).list_playlists(a.id) == []

    def test_empty_set_unfiles_playlist(self, db, make_folder, make_playlist):
        a = make_folder("A")
        playlist = make_playlist("Mix", folders=[a])

        MembershipService(db).set_membership(playlist.id, [])

        assert _folder_ids(db, playlist.id) == set()
        assert [p.id for p in PlaylistService(db).list_playlists()] == [playlist.id]

    def test_is_idempotent(self, db, make_folder, make_playlist):
        a, b = make_folder("A"), make_folder("B")
        playlist = make_playlist("Mix")
        service = MembershipService(db)

        service.set_membership(playlist.id, [a.id, b.id])
        first = _folder_ids(db, playlist.id)
        service.set_membership(playlist.id, [a.id, b.id])

        assert _folder_ids(db, playlist.id) == first == {a.id, b.id}
        assert len(service.list_memberships(playlist.id)) == 2

    def test_duplicate_ids_collapse(self, db, make_folder, make_playlist):
        a = make_folder("A")
        playlist = make_playlist("Mix")

        links = MembershipService(db).set_membership(playlist.id, [a.id, a.id])
        assert len(links) == 1

    def test_unknown_folder_leaves_links_untouched(self, db, make_folder, make_playlist):
        a = make_folder("A")
        playlist = make_playlist("Mix", folders=[a])

        with pytest.raises(ValidationError):
            MembershipService(db).set_membership(playlist.id, [a.id, 404])

        assert _folder_ids(db, playlist.id) == {a.id}

    def test_unknown_playlist_raises(self, db, make_folder):
        a = make_folder("A")
        with pytest.raises(PlaylistNotFoundError):
            MembershipService(db).set_membership(999, [a.id])


class TestLinks:

    def test_add_link_is_idempotent(self, db, make_folder, make_playlist):
        a = make_folder("A")
        playlist = make_playlist("Mix")
        service = MembershipService(db)

        first = service.add_link(playlist.id, a.id)
        second = service.add_link(playlist.id, a.id)

        assert first.id == second.id
        assert len(service.list_memberships(playlist.id)) == 1

    def test_add_link_to_unknown_folder_raises(self, db, make_playlist):
        playlist = make_playlist("Mix")
        with pytest.raises(FolderNotFoundError):
            MembershipService(db).add_link(playlist.id, 999)

    def test_remove_link_only_touches_one_pair(self, db, make_folder, make_playlist):
        a, b = make_folder("A"), make_folder("B")
        playlist = make_playlist("Mix", folders=[a, b])
        other = make_playlist("Other", folders=[a])
        service = MembershipService(db)

        assert service.remove_link(playlist.id, a.id) is True
        assert service.remove_link(playlist.id, a.id) is False

        assert _folder_ids(db, playlist.id) == {b.id}
        assert _folder_ids(db, other.id) == {a.id}

    def test_list_playlists_in_unknown_folder_is_empty(self, db):
        assert MembershipService(db).list_playlists_in_folder(12345) == []


class TestPlaylistDeletion:

    def test_delete_removes_all_links(self, db, make_folder, make_playlist):
        a, b = make_folder("A"), make_folder("B")
        playlist = make_playlist("Mix", folders=[a, b])
        keeper = make_playlist("Keeper", folders=[a])

        removed = PlaylistService(db).delete_playlist(playlist.id)

        assert removed == 2
        assert [p.id for p in PlaylistService(db).list_playlists(a.id)] == [keeper.id]
        assert PlaylistService(db).list_playlists(b.id) == []


class TestMembershipRepository:

    def test_list_by_folder(self, db, make_folder, make_playlist):
        a, b = make_folder("A"), make_folder("B")
        first = make_playlist("First", folders=[a])
        second = make_playlist("Second", folders=[a, b])

        links = MembershipRepository(db).list_by_folder(a.id)
        assert [link.playlist_id for link in links] == [first.id, second.id]
