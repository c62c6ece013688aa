"""Tests for the full browse pipeline."""

from __future__ import annotations

import pytest

from mediashelf.browser import (
    BrowseCriteria,
    build_view,
    filter_collection,
    filter_entries,
    search,
    sort,
)
from mediashelf.filters import by_rating
from mediashelf.grouping import DEFAULT_PLACEHOLDERS, group_by_album, group_by_artist
from mediashelf.media import MediaKind
from mediashelf.ratings import MemoryRatingStore
from mediashelf.sorting import sort_albums


@pytest.fixture()
def ratings():
    return MemoryRatingStore({"Beatles/Abbey Road": 5, "Beatles/Revolver": 3})


class TestEndToEnd:
    def test_group_filter_sort(self, beatles_queen, ratings):
        grouped = group_by_artist(beatles_queen)
        result = sort_albums(by_rating(grouped, "3", ratings), "rating-desc", ratings)
        assert list(result) == ["Beatles"]
        assert list(result["Beatles"]) == ["Abbey Road", "Revolver"]
        assert len(result["Beatles"]["Abbey Road"]) == 2
        assert len(result["Beatles"]["Revolver"]) == 1

    def test_build_view_matches_manual_pipeline(self, beatles_queen, ratings):
        view = build_view(
            beatles_queen,
            BrowseCriteria(rating_filter="3", sort_option="rating-desc"),
            ratings,
        )
        assert view.mode == "artist"
        assert [(a, b, len(f)) for a, b, f in view.rows()] == [
            ("Beatles", "Abbey Road", 2),
            ("Beatles", "Revolver", 1),
        ]
        assert view.album_count == 2
        assert view.file_count == 3


class TestBuildView:
    def test_defaults_show_everything(self, beatles_queen):
        view = build_view(beatles_queen, BrowseCriteria())
        assert view.file_count == len(beatles_queen)
        assert [artist for artist, _, _ in view.rows()][0] == "Beatles"

    def test_type_filter_before_grouping(self, beatles_queen, ratings):
        view = build_view(beatles_queen, BrowseCriteria(type_filter="image"), ratings)
        assert [(a, b) for a, b, _ in view.rows()] == [("Beatles", "Abbey Road")]

    def test_search(self, beatles_queen, ratings):
        view = build_view(beatles_queen, BrowseCriteria(term="opera"), ratings)
        assert [b for _, b, _ in view.rows()] == ["A Night at the Opera"]

    def test_album_mode(self, beatles_queen, ratings):
        view = build_view(
            beatles_queen, BrowseCriteria(mode="album", sort_option="rating-asc"), ratings
        )
        assert view.mode == "album"
        assert [(a, b) for a, b, _ in view.rows()] == [
            ("Queen", "A Night at the Opera"),
            ("Beatles", "Revolver"),
            ("Beatles", "Abbey Road"),
        ]

    def test_album_mode_rating_filter(self, beatles_queen, ratings):
        view = build_view(beatles_queen, BrowseCriteria(mode="album", rating_filter="5"), ratings)
        assert list(view.albums) == ["Abbey Road"]

    def test_unknown_mode_uses_artist_view(self, beatles_queen):
        view = build_view(beatles_queen, BrowseCriteria(mode="genre"))
        assert view.mode == "artist"
        assert "Queen" in view.artists

    def test_does_not_modify_criteria(self, beatles_queen):
        criteria = BrowseCriteria(mode="genre")
        build_view(beatles_queen, criteria)
        assert criteria.mode == "genre"

    def test_invalid_entries(self):
        view = build_view(None, BrowseCriteria())
        assert view.album_count == 0
        assert list(view.rows()) == []

    def test_find_album(self, beatles_queen):
        view = build_view(beatles_queen, BrowseCriteria())
        assert len(view.find_album("Beatles", "Abbey Road")) == 2
        assert view.find_album("Queen", "Abbey Road") is None
        album_view = build_view(beatles_queen, BrowseCriteria(mode="album"))
        assert len(album_view.find_album(None, "Revolver")) == 1

    def test_placeholder_rows(self, make_entry):
        view = build_view([make_entry("loose.png", kind=MediaKind.IMAGE)], BrowseCriteria())
        assert [(a, b) for a, b, _ in view.rows()] == [
            (DEFAULT_PLACEHOLDERS.artist, DEFAULT_PLACEHOLDERS.album)
        ]


class TestFacadeFunctions:
    def test_search_and_filter_entries(self, beatles_queen):
        assert search(beatles_queen, "") is beatles_queen
        criteria = BrowseCriteria(term="beatles", type_filter="audio")
        assert [f.name for f in filter_entries(beatles_queen, criteria)] == [
            "come_together.mp3",
            "taxman.mp3",
        ]

    def test_filter_collection_by_mode(self, beatles_queen, ratings):
        grouped = group_by_artist(beatles_queen)
        result = filter_collection(grouped, BrowseCriteria(rating_filter="unrated"), ratings)
        assert list(result) == ["Queen"]

    def test_sort_by_mode(self, beatles_queen, ratings):
        result = sort(group_by_album(beatles_queen), "name-desc", ratings, mode="album")
        assert list(result) == ["Revolver", "Abbey Road", "A Night at the Opera"]
