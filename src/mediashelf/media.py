"""Media kinds and the scanned-file record.

A file's kind is decided purely by its (lower-cased) extension::

    image : .jpg .jpeg .png .gif .bmp .webp
    video : .mp4 .avi .mov .wmv
    audio : .mp3 .wav .flac .m4a

Anything else is ``unknown`` and is skipped by the scanner.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from mediashelf.hierarchy import HierarchyPolicy, parse_hierarchy

IMAGE_EXTENSIONS: frozenset[str] = frozenset(
    {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp"}
)
VIDEO_EXTENSIONS: frozenset[str] = frozenset({".mp4", ".avi", ".mov", ".wmv"})
AUDIO_EXTENSIONS: frozenset[str] = frozenset({".mp3", ".wav", ".flac", ".m4a"})
MEDIA_EXTENSIONS: frozenset[str] = IMAGE_EXTENSIONS | VIDEO_EXTENSIONS | AUDIO_EXTENSIONS


class MediaKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    UNKNOWN = "unknown"


def classify(extension: object) -> MediaKind:
    """Return the media kind for *extension* (e.g. ``".MP3"``).

    Never raises: non-strings, empty strings and extensions without a
    leading dot all map to :attr:`MediaKind.UNKNOWN`.
    """
    if not isinstance(extension, str):
        return MediaKind.UNKNOWN
    ext = extension.lower()
    if ext in IMAGE_EXTENSIONS:
        return MediaKind.IMAGE
    if ext in VIDEO_EXTENSIONS:
        return MediaKind.VIDEO
    if ext in AUDIO_EXTENSIONS:
        return MediaKind.AUDIO
    return MediaKind.UNKNOWN


@dataclass(frozen=True, slots=True)
class MediaEntry:
    """One classified, hierarchy-tagged file found by a scan."""

    name: str
    path: str
    relative_path: str  # directory part under the scan root, "" at the root
    size: int  # bytes
    type: MediaKind
    modified: float  # st_mtime
    genre: str | None = None
    artist: str | None = None
    album: str | None = None

    @classmethod
    def create(
        cls,
        name: str,
        path: str,
        relative_path: str,
        size: int,
        modified: float,
        policy: HierarchyPolicy = HierarchyPolicy.ARTIST_ALBUM,
    ) -> MediaEntry:
        """Build an entry, deriving ``type`` and the tags exactly once."""
        hierarchy = parse_hierarchy(relative_path, policy)
        return cls(
            name=name,
            path=path,
            relative_path=relative_path,
            size=max(int(size), 0),
            type=classify(os.path.splitext(name)[1]),
            modified=modified,
            genre=hierarchy.genre,
            artist=hierarchy.artist,
            album=hierarchy.album,
        )

    @property
    def is_audio(self) -> bool:
        return self.type is MediaKind.AUDIO
