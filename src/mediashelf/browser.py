"""Library browsing pipeline used by the UI layer.

    scan ──> search ──> type ──> group ──> rating ──> sort ──> LibraryView

Every step takes its inputs explicitly and returns new values, so a view
can be rebuilt from the scanned entries whenever a criterion changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterator, Sequence

from mediashelf import filters, sorting
from mediashelf.grouping import (
    DEFAULT_PLACEHOLDERS,
    AlbumGroups,
    ArtistCollection,
    Placeholders,
    group,
)
from mediashelf.library import scan
from mediashelf.media import MediaEntry
from mediashelf.ratings import RatingStore

__all__ = [
    "BrowseCriteria",
    "LibraryView",
    "build_view",
    "filter_collection",
    "filter_entries",
    "group",
    "scan",
    "search",
    "sort",
]


@dataclass
class BrowseCriteria:
    """Everything the user can change about the current view."""

    term: str = ""
    type_filter: str = "all"
    rating_filter: str = "all"
    sort_option: str = "name-asc"
    mode: str = "artist"


@dataclass
class LibraryView:
    """A filtered, sorted collection ready for display."""

    mode: str
    artists: ArtistCollection = field(default_factory=dict)
    albums: AlbumGroups = field(default_factory=dict)

    def rows(self) -> Iterator[tuple[str | None, str, list[MediaEntry]]]:
        """Yield ``(artist, album, files)`` in display order.

        In album mode the artist is taken from the album's first file and
        may be ``None``.
        """
        if self.mode == "album":
            for album, files in self.albums.items():
                yield (files[0].artist if files else None), album, files
        else:
            for artist, albums in self.artists.items():
                for album, files in albums.items():
                    yield artist, album, files

    @property
    def album_count(self) -> int:
        return sum(1 for _ in self.rows())

    @property
    def file_count(self) -> int:
        return sum(len(files) for _, _, files in self.rows())

    def find_album(self, artist: str | None, album: str) -> list[MediaEntry] | None:
        """Return the files of *album* (by *artist* in artist mode)."""
        if self.mode == "album":
            return self.albums.get(album)
        return self.artists.get(artist or "", {}).get(album)


def search(entries: Sequence[MediaEntry] | None, term: str | None) -> Sequence[MediaEntry]:
    return filters.by_search_term(entries, term)


def filter_entries(
    entries: Sequence[MediaEntry] | None, criteria: BrowseCriteria
) -> Sequence[MediaEntry]:
    """Apply the search and type criteria to flat entries."""
    return filters.by_type(search(entries, criteria.term), criteria.type_filter)


def filter_collection(
    collection: ArtistCollection | AlbumGroups,
    criteria: BrowseCriteria,
    ratings: RatingStore | None,
    placeholders: Placeholders = DEFAULT_PLACEHOLDERS,
) -> ArtistCollection | AlbumGroups:
    """Apply the rating criterion to a grouped collection."""
    if criteria.mode == "album":
        return filters.by_album_rating(collection, criteria.rating_filter, ratings, placeholders)  # type: ignore[arg-type]
    return filters.by_rating(collection, criteria.rating_filter, ratings, placeholders)  # type: ignore[arg-type]


def sort(
    collection: ArtistCollection | AlbumGroups,
    sort_option: str,
    ratings: RatingStore | None,
    mode: str = "artist",
    placeholders: Placeholders = DEFAULT_PLACEHOLDERS,
) -> ArtistCollection | AlbumGroups:
    if mode == "album":
        return sorting.sort_album_groups(collection, sort_option, ratings, placeholders)  # type: ignore[arg-type]
    return sorting.sort_albums(collection, sort_option, ratings, placeholders)  # type: ignore[arg-type]


def build_view(
    entries: Sequence[MediaEntry] | None,
    criteria: BrowseCriteria,
    ratings: RatingStore | None = None,
    placeholders: Placeholders = DEFAULT_PLACEHOLDERS,
) -> LibraryView:
    """Run the whole pipeline from scanned entries to a display view."""
    mode = "album" if criteria.mode == "album" else "artist"
    criteria = replace(criteria, mode=mode)

    grouped = group(list(filter_entries(entries, criteria)), mode, placeholders)
    rated = filter_collection(grouped, criteria, ratings, placeholders)
    ordered = sort(rated, criteria.sort_option, ratings, mode, placeholders)

    if mode == "album":
        return LibraryView(mode=mode, albums=ordered)  # type: ignore[arg-type]
    return LibraryView(mode=mode, artists=ordered)  # type: ignore[arg-type]
