"""Album player: drives an audio backend from an album playlist.

States
------
- playing : an album is open and its current track is playing.
- paused  : playback is paused (initial state).

Allowed transitions
-------------------
From *paused*:
    open_album(files)    → playing   (new playlist, starts at the first track)
    play()               → playing   (resumes; requires an open album)
    next_track()         → playing   (requires an open album)
    previous_track()     → playing   (requires an open album)
    select(path)         → playing   (requires an open album)

From *playing*:
    pause()              → paused
    next_track()         → playing   (wraps from the last track to the first)
    previous_track()     → playing   (wraps from the first track to the last)
    open_album(files)    → playing   (replaces the playlist)

End of track:
    on_track_end()       advances to the next track; after the last track
                         the playlist is rewound and the player pauses.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import TYPE_CHECKING, Sequence

from mediashelf.playlist import Playlist, create_album_playlist

if TYPE_CHECKING:
    from mediashelf.audio import AudioPlayer
    from mediashelf.media import MediaEntry

logger = logging.getLogger(__name__)


class State(Enum):
    PLAYING = auto()
    PAUSED = auto()


class InvalidTransitionError(Exception):
    """Raised when a transition is not allowed from the current state."""


class AlbumPlayer:
    """Plays the audio tracks of one album at a time."""

    def __init__(self, audio: AudioPlayer | None = None) -> None:
        self._audio = audio
        self._state: State = State.PAUSED
        self._playlist: Playlist | None = None

        if self._audio is not None:
            self._audio.set_end_callback(self.on_track_end)

    # -- public properties ---------------------------------------------------

    @property
    def state(self) -> State:
        return self._state

    @property
    def playlist(self) -> Playlist | None:
        return self._playlist

    @property
    def current_track(self) -> MediaEntry | None:
        if self._playlist is None:
            return None
        return self._playlist.current_file

    # -- transitions ---------------------------------------------------------

    def open_album(self, album_files: Sequence[MediaEntry]) -> None:
        """Replace the playlist with *album_files*' audio and start playing."""
        playlist = create_album_playlist(album_files)
        if not len(playlist):
            raise ValueError("Album contains no playable audio files.")
        self._playlist = playlist
        self._state = State.PLAYING
        self._play_current()

    def play(self) -> None:
        """Resume playback of the open album."""
        self._require_album("play()")
        if self._audio is not None and self._state is State.PAUSED:
            if self._audio.is_active:
                self._audio.unpause()
            else:
                self._play_current()
        self._state = State.PLAYING

    def pause(self) -> None:
        """Pause playback.  Only allowed from *playing*."""
        if self._state is not State.PLAYING:
            raise InvalidTransitionError(
                f"pause() is only allowed in PLAYING state, "
                f"current state is {self._state.name}."
            )
        if self._audio is not None:
            self._audio.pause()
        self._state = State.PAUSED

    def next_track(self) -> None:
        playlist = self._require_album("next_track()")
        playlist.next()
        self._state = State.PLAYING
        self._play_current()

    def previous_track(self) -> None:
        playlist = self._require_album("previous_track()")
        playlist.previous()
        self._state = State.PLAYING
        self._play_current()

    def select(self, path: str) -> None:
        """Jump to the track at *path*.

        Raises ``ValueError`` if the track is not part of the open album.
        """
        playlist = self._require_album("select()")
        if playlist.set_by_path(path) is None:
            raise ValueError(f"Track '{path}' is not in the current album.")
        self._state = State.PLAYING
        self._play_current()

    def on_track_end(self) -> None:
        """Handle end-of-track from the audio backend."""
        if self._playlist is None:
            return
        if self._playlist.current_index >= len(self._playlist) - 1:
            self._playlist.reset()
            self._state = State.PAUSED
            logger.info("Reached the end of the album")
        else:
            self._playlist.next()
            self._play_current()

    # -- internal helpers ----------------------------------------------------

    def _require_album(self, action: str) -> Playlist:
        if self._playlist is None:
            raise InvalidTransitionError(f"{action} requires an album to be open.")
        return self._playlist

    def _play_current(self) -> None:
        track = self.current_track
        if self._audio is not None and track is not None:
            self._audio.play(track.path)
