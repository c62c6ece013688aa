"""Derive genre/artist/album tags from a file's directory under the scan root.

Two folder layouts are supported; one is chosen per scan::

    artist-album        <root>/Beatles/Abbey Road/01.mp3
    genre-artist-album  <root>/Rock/Beatles/Abbey Road/01.mp3

Segments are taken literally: ``"Beatles//Abbey Road"`` yields an empty
album segment rather than skipping it.  Rating keys are always built from
artist and album only, so switching layouts never changes a stored rating
for a library that has no genre level.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import NamedTuple

_SEPARATORS = re.compile(r"[/\\]")


class HierarchyPolicy(Enum):
    ARTIST_ALBUM = "artist-album"
    GENRE_ARTIST_ALBUM = "genre-artist-album"

    @classmethod
    def from_name(cls, name: str | None) -> HierarchyPolicy:
        """Look up a policy by its config name, defaulting to artist-album."""
        for policy in cls:
            if policy.value == name:
                return policy
        return cls.ARTIST_ALBUM


class Hierarchy(NamedTuple):
    genre: str | None = None
    artist: str | None = None
    album: str | None = None


def parse_hierarchy(
    relative_path: object,
    policy: HierarchyPolicy = HierarchyPolicy.ARTIST_ALBUM,
) -> Hierarchy:
    """Split *relative_path* into a :class:`Hierarchy`.

    Non-string or empty input gives all ``None``.  Missing levels are
    ``None``; present-but-empty segments stay ``""``.
    """
    if not isinstance(relative_path, str) or not relative_path:
        return Hierarchy()

    parts = _SEPARATORS.split(relative_path)

    if policy is HierarchyPolicy.GENRE_ARTIST_ALBUM and len(parts) >= 3:
        return Hierarchy(genre=parts[0], artist=parts[1], album=parts[2])

    return Hierarchy(
        genre=None,
        artist=parts[0],
        album=parts[1] if len(parts) >= 2 else None,
    )
