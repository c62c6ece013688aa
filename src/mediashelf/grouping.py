"""Group scanned entries into artist/album collections.

Two views are supported:

- ``artist`` : ``{artist: {album: [entries]}}``
- ``album``  : ``{album: [entries]}`` – albums with the same name by
  different artists are merged into one group.

Missing artist or album names are replaced by :class:`Placeholders` before
grouping so that the displayed label and the rating key always agree.
Within a group, entries keep their input order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from mediashelf.media import MediaEntry

ArtistCollection = dict[str, dict[str, list[MediaEntry]]]
AlbumGroups = dict[str, list[MediaEntry]]

VIEW_MODES = ("artist", "album")


@dataclass(frozen=True)
class Placeholders:
    """Labels used when a file has no artist or album directory."""

    artist: str = "Unknown Artist"
    album: str = "Unknown Album"


DEFAULT_PLACEHOLDERS = Placeholders()


def album_key(
    artist: str | None,
    album: str | None,
    placeholders: Placeholders = DEFAULT_PLACEHOLDERS,
) -> str:
    """Return the ``artist/album`` key under which a rating is stored."""
    return f"{artist or placeholders.artist}/{album or placeholders.album}"


def group_key(
    album_name: str,
    files: Sequence[MediaEntry],
    placeholders: Placeholders = DEFAULT_PLACEHOLDERS,
) -> str:
    """Rating key for an album group, using its first member's artist."""
    first = files[0] if files else None
    artist = first.artist if first is not None else None
    return album_key(artist, album_name, placeholders)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def group_by_artist(
    entries: Sequence[MediaEntry] | None,
    placeholders: Placeholders = DEFAULT_PLACEHOLDERS,
) -> ArtistCollection:
    if not _is_sequence(entries):
        return {}

    groups: ArtistCollection = {}
    for entry in entries:
        if entry is None:
            continue
        artist = entry.artist or placeholders.artist
        album = entry.album or placeholders.album
        groups.setdefault(artist, {}).setdefault(album, []).append(entry)
    return groups


def group_by_album(
    entries: Sequence[MediaEntry] | None,
    placeholders: Placeholders = DEFAULT_PLACEHOLDERS,
) -> AlbumGroups:
    if not _is_sequence(entries):
        return {}

    groups: AlbumGroups = {}
    for entry in entries:
        if entry is None:
            continue
        groups.setdefault(entry.album or placeholders.album, []).append(entry)
    return groups


def group(
    entries: Sequence[MediaEntry] | None,
    mode: str = "artist",
    placeholders: Placeholders = DEFAULT_PLACEHOLDERS,
) -> ArtistCollection | AlbumGroups:
    """Group *entries* for the given view *mode* (``"artist"`` or ``"album"``).

    Unknown modes fall back to the artist view.
    """
    if mode == "album":
        return group_by_album(entries, placeholders)
    return group_by_artist(entries, placeholders)
