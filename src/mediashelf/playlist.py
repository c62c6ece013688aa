"""Album playlist: a wrapping cursor over an album's audio files.

States
------
- EMPTY      : the album has no audio files.  Navigation returns ``None``.
- POSITIONED : 1..N files, ``current_index`` in ``[0, N)``.

Navigation
----------
    next()            index + 1, wrapping from the last file to the first
    previous()        index - 1, wrapping from the first file to the last
    set_index(i)      jump to i; out-of-range is a no-op returning None
    set_by_path(p)    jump to the file whose path equals p
    reset()           back to index 0

There is no end-of-playlist state: while the playlist is non-empty there is
always a next and a previous file.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Sequence

from mediashelf.media import MediaEntry, MediaKind

logger = logging.getLogger(__name__)


class PlaylistState(Enum):
    EMPTY = auto()
    POSITIONED = auto()


def extract_audio_files(files: Sequence[MediaEntry] | None) -> list[MediaEntry]:
    """Return the audio entries of *files*, keeping their relative order."""
    if not isinstance(files, (list, tuple)):
        return []
    return [f for f in files if f is not None and f.type is MediaKind.AUDIO]


class Playlist:
    """Cursor over a fixed snapshot of audio files."""

    def __init__(self, files: Sequence[MediaEntry] | None = None) -> None:
        if not isinstance(files, (list, tuple)):
            files = ()
        self._files: tuple[MediaEntry, ...] = tuple(f for f in files if f is not None)
        self._current_index: int = 0

    def __len__(self) -> int:
        return len(self._files)

    # -- public properties ---------------------------------------------------

    @property
    def state(self) -> PlaylistState:
        return PlaylistState.POSITIONED if self._files else PlaylistState.EMPTY

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_file(self) -> MediaEntry | None:
        if not self._files:
            return None
        return self._files[self._current_index]

    @property
    def files(self) -> list[MediaEntry]:
        return list(self._files)

    @property
    def has_next(self) -> bool:
        return len(self._files) > 0

    @property
    def has_previous(self) -> bool:
        return len(self._files) > 0

    # -- navigation ----------------------------------------------------------

    def next(self) -> MediaEntry | None:
        """Advance to the next file, wrapping around to the first."""
        if not self._files:
            return None
        self._current_index = (self._current_index + 1) % len(self._files)
        return self._files[self._current_index]

    def previous(self) -> MediaEntry | None:
        """Go back to the previous file, wrapping around to the last."""
        if not self._files:
            return None
        self._current_index = (self._current_index - 1 + len(self._files)) % len(self._files)
        return self._files[self._current_index]

    def set_index(self, index: int) -> MediaEntry | None:
        if (
            not isinstance(index, int)
            or isinstance(index, bool)
            or not 0 <= index < len(self._files)
        ):
            return None
        self._current_index = index
        return self._files[index]

    def find_index_by_path(self, path: str) -> int:
        """Return the index of the file at *path*, or -1."""
        for index, entry in enumerate(self._files):
            if entry.path == path:
                return index
        return -1

    def set_by_path(self, path: str) -> MediaEntry | None:
        index = self.find_index_by_path(path)
        if index == -1:
            return None
        return self.set_index(index)

    def reset(self) -> MediaEntry | None:
        self._current_index = 0
        return self.current_file


def create_album_playlist(album_files: Sequence[MediaEntry] | None) -> Playlist:
    """Build a playlist from the audio files of one album."""
    playlist = Playlist(extract_audio_files(album_files))
    logger.debug("Created playlist with %d tracks", len(playlist))
    return playlist
