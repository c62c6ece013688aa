"""Tests for grouping entries by artist and album."""

from __future__ import annotations

from mediashelf.grouping import (
    DEFAULT_PLACEHOLDERS,
    Placeholders,
    album_key,
    group,
    group_by_album,
    group_by_artist,
    group_key,
)


class TestGroupByArtist:
    def test_groups_artist_then_album(self, beatles_queen):
        groups = group_by_artist(beatles_queen)
        assert set(groups) == {"Beatles", "Queen"}
        assert set(groups["Beatles"]) == {"Abbey Road", "Revolver"}
        assert len(groups["Beatles"]["Abbey Road"]) == 2
        assert len(groups["Queen"]["A Night at the Opera"]) == 1

    def test_preserves_order_within_group(self, make_entry):
        files = [make_entry(f"{n}.mp3", "A", "X") for n in ("c", "a", "b")]
        groups = group_by_artist(files)
        assert [f.name for f in groups["A"]["X"]] == ["c.mp3", "a.mp3", "b.mp3"]

    def test_missing_names_use_placeholders(self, make_entry):
        groups = group_by_artist([make_entry("a.mp3"), make_entry("b.mp3", "Solo")])
        assert groups[DEFAULT_PLACEHOLDERS.artist][DEFAULT_PLACEHOLDERS.album][0].name == "a.mp3"
        assert groups["Solo"][DEFAULT_PLACEHOLDERS.album][0].name == "b.mp3"

    def test_custom_placeholders(self, make_entry):
        labels = Placeholders(artist="アーティスト名なし", album="アルバム名なし")
        groups = group_by_artist([make_entry("a.mp3")], labels)
        assert groups == {"アーティスト名なし": {"アルバム名なし": [make_entry("a.mp3")]}}

    def test_skips_none_items(self, make_entry):
        groups = group_by_artist([None, make_entry("a.mp3", "A", "X")])
        assert list(groups) == ["A"]

    def test_invalid_input(self):
        assert group_by_artist(None) == {}
        assert group_by_artist("nope") == {}
        assert group_by_artist({}) == {}
        assert group_by_artist([]) == {}


class TestGroupByAlbum:
    def test_groups_by_album_name(self, beatles_queen):
        groups = group_by_album(beatles_queen)
        assert set(groups) == {"Abbey Road", "Revolver", "A Night at the Opera"}

    def test_merges_same_album_name_across_artists(self, make_entry):
        groups = group_by_album(
            [make_entry("a.mp3", "Weezer", "Weezer"), make_entry("b.mp3", "Other", "Weezer")]
        )
        assert list(groups) == ["Weezer"]
        assert [f.artist for f in groups["Weezer"]] == ["Weezer", "Other"]

    def test_no_entries_lost_or_duplicated(self, beatles_queen, make_entry):
        entries = beatles_queen + [make_entry("x.mp3"), make_entry("y.mp3", "Solo")]
        by_album = group_by_album(entries)
        by_artist = group_by_artist(entries)
        assert sum(len(files) for files in by_album.values()) == len(entries)
        assert sum(
            len(files) for albums in by_artist.values() for files in albums.values()
        ) == len(entries)

    def test_invalid_input(self):
        assert group_by_album(None) == {}
        assert group_by_album(42) == {}


class TestGroupDispatch:
    def test_modes(self, beatles_queen):
        assert group(beatles_queen, "artist") == group_by_artist(beatles_queen)
        assert group(beatles_queen, "album") == group_by_album(beatles_queen)

    def test_unknown_mode_falls_back_to_artist(self, beatles_queen):
        assert group(beatles_queen, "genre") == group_by_artist(beatles_queen)


class TestAlbumKey:
    def test_plain_key(self):
        assert album_key("Beatles", "Abbey Road") == "Beatles/Abbey Road"

    def test_placeholders(self):
        assert album_key(None, None) == (
            f"{DEFAULT_PLACEHOLDERS.artist}/{DEFAULT_PLACEHOLDERS.album}"
        )
        assert album_key("", "X") == f"{DEFAULT_PLACEHOLDERS.artist}/X"

    def test_group_key_uses_first_member_artist(self, make_entry):
        files = [make_entry("a.mp3", "Beatles", "Abbey Road"), make_entry("b.mp3", "Other", "Abbey Road")]
        assert group_key("Abbey Road", files) == "Beatles/Abbey Road"

    def test_group_key_empty_group(self):
        assert group_key("X", []) == f"{DEFAULT_PLACEHOLDERS.artist}/X"
