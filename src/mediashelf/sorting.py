"""Ordering of grouped album collections.

Album-level orderings (within each artist)::

    name-asc / name-desc            album name
    rating-desc / rating-asc        rating, then album name ascending
    filecount-desc / filecount-asc  number of files, then album name ascending

``artist-asc`` / ``artist-desc`` only change the order of the artists; the
albums of each artist are then ordered by name.  Unknown options behave like
``name-asc``.  Sorting never mutates its input: a new dict is returned whose
key order is the display order.
"""

from __future__ import annotations

import unicodedata
from typing import Iterable

from mediashelf.grouping import (
    DEFAULT_PLACEHOLDERS,
    AlbumGroups,
    ArtistCollection,
    Placeholders,
    group_key,
)
from mediashelf.media import MediaEntry
from mediashelf.ratings import RatingStore, lookup

SORT_OPTIONS = [
    ("Name (A → Z)", "name-asc"),
    ("Name (Z → A)", "name-desc"),
    ("Rating (High → Low)", "rating-desc"),
    ("Rating (Low → High)", "rating-asc"),
    ("File Count (Most First)", "filecount-desc"),
    ("File Count (Fewest First)", "filecount-asc"),
    ("Artist (A → Z)", "artist-asc"),
    ("Artist (Z → A)", "artist-desc"),
]

_AlbumItem = tuple[str, list[MediaEntry]]


# Primary weight of a character's general category: spaces, punctuation and
# symbols come before digits, digits before letters.
_CATEGORY_RANK = {"Z": 0, "P": 1, "S": 2, "N": 3}
_LETTER_RANK = 4

_KATAKANA_FIRST = 0x30A1  # ァ
_KATAKANA_LAST = 0x30F6  # ヶ
_KANA_OFFSET = 0x60  # katakana -> hiragana


def _primary_char(char: str) -> tuple[int, str]:
    code = ord(char)
    if _KATAKANA_FIRST <= code <= _KATAKANA_LAST:
        char = chr(code - _KANA_OFFSET)
    rank = _CATEGORY_RANK.get(unicodedata.category(char)[0], _LETTER_RANK)
    return (rank, char)


def collation_key(text: str) -> tuple[tuple[tuple[int, str], ...], str, str]:
    """Sort key approximating root-locale collation.

    The primary level ignores case, accents, character width (full-width
    ``Ｂ`` sorts as ``b``) and the hiragana/katakana distinction, and ranks
    punctuation and symbols ahead of digits and letters.  Ties are broken by
    accents and kana, then lowercase sorts before uppercase.
    """
    if not isinstance(text, str):
        text = ""
    folded = unicodedata.normalize("NFKD", text).casefold()
    primary = tuple(
        _primary_char(char) for char in folded if unicodedata.category(char) != "Mn"
    )
    return (primary, unicodedata.normalize("NFD", text).casefold(), text.swapcase())


def _sort_album_items(
    items: Iterable[_AlbumItem],
    sort_option: str,
    ratings: RatingStore | None,
    placeholders: Placeholders,
) -> list[_AlbumItem]:
    items = list(items)
    if sort_option == "name-desc":
        return sorted(items, key=lambda item: collation_key(item[0]), reverse=True)

    # Album names are unique within one level, so they key the metric.
    if sort_option in ("rating-desc", "rating-asc"):
        metric = {
            album: lookup(ratings, group_key(album, files, placeholders))
            for album, files in items
        }
    elif sort_option in ("filecount-desc", "filecount-asc"):
        metric = {album: len(files) for album, files in items}
    else:
        return sorted(items, key=lambda item: collation_key(item[0]))

    sign = -1 if sort_option.endswith("-desc") else 1
    return sorted(items, key=lambda item: (sign * metric[item[0]], collation_key(item[0])))


def sort_albums(
    collection: ArtistCollection | None,
    sort_option: str,
    ratings: RatingStore | None = None,
    placeholders: Placeholders = DEFAULT_PLACEHOLDERS,
) -> ArtistCollection:
    """Return *collection* reordered by *sort_option* (artist view)."""
    if not isinstance(collection, dict):
        return {}

    by_artist = {
        artist: dict(_sort_album_items(albums.items(), sort_option, ratings, placeholders))
        for artist, albums in collection.items()
    }
    artists = sorted(
        by_artist,
        key=collation_key,
        reverse=sort_option == "artist-desc",
    )
    return {artist: by_artist[artist] for artist in artists}


def sort_album_groups(
    groups: AlbumGroups | None,
    sort_option: str,
    ratings: RatingStore | None = None,
    placeholders: Placeholders = DEFAULT_PLACEHOLDERS,
) -> AlbumGroups:
    """Return *groups* reordered by *sort_option* (album-only view).

    This view has no artist level, so ``artist-*`` options sort by album
    name.
    """
    if not isinstance(groups, dict):
        return {}
    return dict(_sort_album_items(groups.items(), sort_option, ratings, placeholders))
