"""Tests for /api/playlists endpoints."""

import logging


class TestPlaylistCrud:

    def test_create_with_folders(self, client, folder_body, playlist_body):
        folder = client.post("/api/folders", json=folder_body("Deep House")).json()

        resp = client.post(
            "/api/playlists",
            json=playlist_body("Deep House Vibes", folderIds=[folder["id"]], tags=["Chill"]),
        )
        assert resp.status_code == 201
        data = resp.json()
        assert data["name"] == "Deep House Vibes"
        assert data["tags"] == ["Chill"]
        assert "spotifyUrl" in data

        in_folder = client.get("/api/playlists", params={"folderId": folder["id"]}).json()
        assert [p["id"] for p in in_folder] == [data["id"]]

    def test_duplicate_spotify_url_is_409_and_not_stored(self, client, playlist_body):
        url = "https://open.spotify.com/playlist/37i9dQZF1DX692WcMwL2yW"
        assert client.post("/api/playlists", json=playlist_body("First", spotifyUrl=url)).status_code == 201

        resp = client.post("/api/playlists", json=playlist_body("Second", spotifyUrl=url))
        assert resp.status_code == 409
        body = resp.json()
        assert body["error"] == "PLAYLIST_ALREADY_EXISTS"
        assert body["message"] == "This playlist already exists in your collection"
        assert len(client.get("/api/playlists").json()) == 1

    def test_unknown_folder_id_creates_nothing(self, client, playlist_body):
        resp = client.post("/api/playlists", json=playlist_body("Lost", folderIds=[999]))
        assert resp.status_code == 400
        assert client.get("/api/playlists").json() == []

    def test_get_missing_playlist_is_404(self, client):
        resp = client.get("/api/playlists/999")
        assert resp.status_code == 404
        assert resp.json()["error"] == "PLAYLIST_NOT_FOUND"

    def test_listing_unknown_folder_is_empty(self, client, playlist_body):
        client.post("/api/playlists", json=playlist_body("Any"))
        assert client.get("/api/playlists", params={"folderId": 999}).json() == []


class TestPlaylistUpdate:

    def test_folder_ids_replace_membership(self, client, folder_body, playlist_body):
        a = client.post("/api/folders", json=folder_body("A")).json()
        b = client.post("/api/folders", json=folder_body("B")).json()
        playlist = client.post("/api/playlists", json=playlist_body("Mix", folderIds=[a["id"]])).json()

        resp = client.put(f"/api/playlists/{playlist['id']}", json={"folderIds": [b["id"]]})
        assert resp.status_code == 200

        links = client.get(f"/api/playlists/{playlist['id']}/folders").json()
        assert [link["folderId"] for link in links] == [b["id"]]
        assert client.get("/api/playlists", params={"folderId": a["id"]}).json() == []

    def test_update_without_folder_ids_keeps_membership(self, client, folder_body, playlist_body):
        a = client.post("/api/folders", json=folder_body("A")).json()
        playlist = client.post("/api/playlists", json=playlist_body("Mix", folderIds=[a["id"]])).json()

        resp = client.put(f"/api/playlists/{playlist['id']}", json={"name": "Renamed"})
        assert resp.json()["name"] == "Renamed"
        links = client.get(f"/api/playlists/{playlist['id']}/folders").json()
        assert [link["folderId"] for link in links] == [a["id"]]

    def test_update_to_taken_spotify_url_is_409(self, client, playlist_body):
        first = client.post("/api/playlists", json=playlist_body("First")).json()
        second = client.post("/api/playlists", json=playlist_body("Second")).json()

        resp = client.put(f"/api/playlists/{second['id']}", json={"spotifyUrl": first["spotifyUrl"]})
        assert resp.status_code == 409

    def test_update_keeping_own_spotify_url_is_ok(self, client, playlist_body):
        playlist = client.post("/api/playlists", json=playlist_body("Same")).json()
        resp = client.put(
            f"/api/playlists/{playlist['id']}",
            json={"spotifyUrl": playlist["spotifyUrl"], "description": "edited"},
        )
        assert resp.status_code == 200


class TestPlaylistLinks:

    def test_add_and_remove_single_link(self, client, folder_body, playlist_body):
        a = client.post("/api/folders", json=folder_body("A")).json()
        b = client.post("/api/folders", json=folder_body("B")).json()
        playlist = client.post("/api/playlists", json=playlist_body("Mix", folderIds=[a["id"]])).json()

        assert client.put(f"/api/playlists/{playlist['id']}/folders/{b['id']}").status_code == 200
        assert client.put(f"/api/playlists/{playlist['id']}/folders/{b['id']}").status_code == 200
        links = client.get(f"/api/playlists/{playlist['id']}/folders").json()
        assert sorted(link["folderId"] for link in links) == sorted([a["id"], b["id"]])

        assert client.delete(f"/api/playlists/{playlist['id']}/folders/{a['id']}").status_code == 204
        links = client.get(f"/api/playlists/{playlist['id']}/folders").json()
        assert [link["folderId"] for link in links] == [b["id"]]

    def test_removing_missing_link_is_204_and_logged(self, client, folder_body, playlist_body, caplog):
        a = client.post("/api/folders", json=folder_body("A")).json()
        playlist = client.post("/api/playlists", json=playlist_body("Mix")).json()

        with caplog.at_level(logging.INFO, logger="playlist_catalog.api.playlists"):
            resp = client.delete(f"/api/playlists/{playlist['id']}/folders/{a['id']}")

        assert resp.status_code == 204
        assert any(r.getMessage() == "No link to remove" for r in caplog.records)


class TestPlaylistDelete:

    def test_delete_cleans_memberships(self, client, folder_body, playlist_body):
        a = client.post("/api/folders", json=folder_body("A")).json()
        playlist = client.post("/api/playlists", json=playlist_body("Mix", folderIds=[a["id"]])).json()

        resp = client.delete(f"/api/playlists/{playlist['id']}")
        assert resp.status_code == 200
        assert resp.json()["removedMemberships"] == 1
        assert client.get("/api/playlists", params={"folderId": a["id"]}).json() == []
        assert client.get(f"/api/playlists/{playlist['id']}").status_code == 404


class TestLegacySearch:

    def test_matches_name_and_tags(self, client, playlist_body):
        client.post("/api/playlists", json=playlist_body("Deep House Vibes", tags=["Chill"]))
        client.post("/api/playlists", json=playlist_body("Techno Underground", tags=["Dark"]))

        names = [p["name"] for p in client.get("/api/playlists/search", params={"q": "chill"}).json()]
        assert names == ["Deep House Vibes"]

    def test_missing_query_is_400(self, client):
        resp = client.get("/api/playlists/search")
        assert resp.status_code == 400
        assert resp.json()["details"]["field"] == "q"
