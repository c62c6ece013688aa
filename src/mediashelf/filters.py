"""Search, type and rating filters.

Search and type filters work on flat entry lists (before grouping); the
rating filters work on grouped collections, looking each album's rating up
once per pass.

Rating filter values::

    "all"       everything
    "unrated"   rating == 0
    "1".."4"    rating >= n
    "5"         rating == 5
"""

from __future__ import annotations

from typing import Sequence

from mediashelf.grouping import (
    DEFAULT_PLACEHOLDERS,
    AlbumGroups,
    ArtistCollection,
    Placeholders,
    group_key,
)
from mediashelf.media import MediaEntry
from mediashelf.ratings import RatingStore, lookup

TYPE_FILTERS = ("all", "image", "video", "audio")
RATING_FILTERS = ("all", "unrated", "1", "2", "3", "4", "5")


def _contains(field: str | None, term: str) -> bool:
    return isinstance(field, str) and term in field.casefold()


def by_search_term(
    entries: Sequence[MediaEntry] | None, term: str | None
) -> Sequence[MediaEntry]:
    """Keep entries whose name, artist or album contains *term* (any case).

    An empty term returns *entries* itself.
    """
    if not isinstance(entries, (list, tuple)):
        return []
    if not term or not isinstance(term, str):
        return entries

    needle = term.casefold()
    return [
        entry
        for entry in entries
        if entry is not None
        and (
            _contains(entry.name, needle)
            or _contains(entry.artist, needle)
            or _contains(entry.album, needle)
        )
    ]


def by_type(
    entries: Sequence[MediaEntry] | None, type_filter: str
) -> Sequence[MediaEntry]:
    """Keep entries of one media kind; ``"all"`` returns *entries* itself."""
    if not isinstance(entries, (list, tuple)):
        return []
    if type_filter == "all":
        return entries
    return [entry for entry in entries if entry is not None and entry.type == type_filter]


def matches_rating(rating: int, rating_filter: str) -> bool:
    """Return whether an album *rating* passes *rating_filter*."""
    if rating_filter == "all":
        return True
    if rating_filter == "unrated":
        return rating == 0
    if rating_filter == "5":
        return rating == 5
    if rating_filter in ("1", "2", "3", "4"):
        return rating >= int(rating_filter)
    return False


def by_rating(
    collection: ArtistCollection | None,
    rating_filter: str,
    ratings: RatingStore | None,
    placeholders: Placeholders = DEFAULT_PLACEHOLDERS,
) -> ArtistCollection:
    """Filter an artist→album collection by album rating.

    Artists left without any album are dropped.
    """
    if not isinstance(collection, dict):
        return {}
    if rating_filter == "all":
        return collection

    filtered: ArtistCollection = {}
    for artist, albums in collection.items():
        kept = {
            album: files
            for album, files in albums.items()
            if matches_rating(
                lookup(ratings, group_key(album, files, placeholders)), rating_filter
            )
        }
        if kept:
            filtered[artist] = kept
    return filtered


def by_album_rating(
    groups: AlbumGroups | None,
    rating_filter: str,
    ratings: RatingStore | None,
    placeholders: Placeholders = DEFAULT_PLACEHOLDERS,
) -> AlbumGroups:
    """Filter an album-only collection by album rating."""
    if not isinstance(groups, dict):
        return {}
    if rating_filter == "all":
        return groups

    return {
        album: files
        for album, files in groups.items()
        if matches_rating(
            lookup(ratings, group_key(album, files, placeholders)), rating_filter
        )
    }
