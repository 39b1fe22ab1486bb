"""Tests for catalog search: tag facets, text queries, tag listing."""

from types import SimpleNamespace

from playlist_catalog.services.search_service import (
    SearchService,
    parse_tag_param,
    search_entities,
    tag_exact_filter,
    text_substring_filter,
)


def _entity(id, name, tags, description=None):
    return SimpleNamespace(id=id, name=name, description=description, tags=tags)


class TestPureFilters:

    def test_parse_tag_param_drops_blanks(self):
        assert parse_tag_param(" Techno , ,Electronic,") == ["Techno", "Electronic"]
        assert parse_tag_param(None) == []

    def test_tag_filter_is_exact_and_case_sensitive(self):
        items = [_entity(1, "A", ["Techno"]), _entity(2, "B", ["techno"]), _entity(3, "C", ["Techno House"])]
        assert [e.id for e in tag_exact_filter(items, ["Techno"])] == [1]

    def test_tag_union_is_deduplicated(self):
        items = [_entity(1, "A", ["Techno", "Dark"]), _entity(2, "B", ["Dark"])]
        assert [e.id for e in tag_exact_filter(items, ["Techno", "Dark"])] == [1, 2]

    def test_text_filter_matches_description_case_insensitive(self):
        items = [_entity(1, "A", [], description="Late NIGHT grooves"), _entity(2, "B", [])]
        assert [e.id for e in text_substring_filter(items, "night")] == [1]

    def test_query_narrows_tag_results_without_tag_text(self):
        items = [
            _entity(1, "Warehouse", ["Techno", "Dark"]),
            _entity(2, "Sunrise", ["Techno"]),
        ]
        # "dark" only appears as a tag, which the narrowing step ignores.
        assert search_entities(items, "dark", ["Techno"]) == []
        assert [e.id for e in search_entities(items, "sun", ["Techno"])] == [2]


class TestSearchService:

    def _seed(self, make_playlist):
        deep = make_playlist("Deep House Vibes", tags=["Deep House", "Electronic", "Chill"])
        techno = make_playlist("Techno Underground", tags=["Techno", "Dark"], description="Driving beats")
        return deep, techno

    def test_text_query(self, db, make_playlist):
        deep, _ = self._seed(make_playlist)
        result = SearchService(db).search(query="deep")
        assert [p.id for p in result.playlists] == [deep.id]

    def test_single_tag(self, db, make_playlist):
        _, techno = self._seed(make_playlist)
        result = SearchService(db).search(tag="Techno")
        assert [p.id for p in result.playlists] == [techno.id]

    def test_tag_union(self, db, make_playlist):
        deep, techno = self._seed(make_playlist)
        result = SearchService(db).search(tag="Techno,Electronic")
        assert {p.id for p in result.playlists} == {deep.id, techno.id}

    def test_no_match_is_empty(self, db, make_playlist):
        self._seed(make_playlist)
        result = SearchService(db).search(query="nomatch")
        assert result.playlists == []
        assert result.folders == []

    def test_no_parameters_is_empty(self, db, make_playlist):
        self._seed(make_playlist)
        result = SearchService(db).search()
        assert result.playlists == []
        assert result.folders == []

    def test_folders_match_independently(self, db, make_folder, make_playlist):
        self._seed(make_playlist)
        electronic = make_folder("Electronic", tags=["Electronic"])
        make_folder("Rock", tags=["Guitar"])

        result = SearchService(db).search(tag="Electronic")
        assert [f.id for f in result.folders] == [electronic.id]
        assert len(result.playlists) == 1

    def test_list_tags_is_distinct_and_sorted(self, db, make_folder, make_playlist):
        self._seed(make_playlist)
        make_folder("Electronic", tags=["Electronic", "Digital"])
        assert SearchService(db).list_tags() == [
            "Chill", "Dark", "Deep House", "Digital", "Electronic", "Techno",
        ]


class TestSearchApi:

    def test_search_endpoint(self, client, make_playlist, make_folder):
        make_playlist("Deep House Vibes", tags=["Deep House", "Electronic"])
        make_folder("Deep Cuts")

        data = client.get("/api/search", params={"q": "deep"}).json()
        assert [p["name"] for p in data["playlists"]] == ["Deep House Vibes"]
        assert [f["name"] for f in data["folders"]] == ["Deep Cuts"]

    def test_tags_endpoint(self, client, make_playlist):
        make_playlist("Mix", tags=["B", "A"])
        assert client.get("/api/tags").json() == ["A", "B"]
