"""Audio output for album playback, built on sounddevice and soundfile.

Tracks are decoded by soundfile (mp3/wav/flac; m4a depends on the installed
libsndfile) and streamed block by block to the default PortAudio output on
a worker thread.  The worker never calls back into the caller directly: it
raises a flag that :meth:`AudioPlayer.check_events` turns into the
end-of-track callback on the caller's thread.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Callable

import sounddevice as sd
import soundfile as sf

logger = logging.getLogger(__name__)

# Frames read from the file per write to the output stream.
_BLOCK_SIZE = 2048

# Seconds to wait for a stopped worker to finish.
_JOIN_TIMEOUT = 2.0


class AudioPlayer:
    """Plays one track at a time through the default audio device."""

    def __init__(self) -> None:
        self._end_callback: Callable[[], None] | None = None
        self._resumed = threading.Event()
        self._resumed.set()
        self._stop_event = threading.Event()
        self._track_ended = threading.Event()
        self._worker: threading.Thread | None = None

    @property
    def is_active(self) -> bool:
        """True while a track is streaming (paused or not)."""
        return self._worker is not None and self._worker.is_alive()

    # -- playback controls ---------------------------------------------------

    def play(self, file_path: str | Path) -> None:
        """Stop whatever is playing and start *file_path* from the beginning."""
        self.stop()
        path = os.fspath(file_path)
        for event in (self._stop_event, self._track_ended):
            event.clear()
        self._resumed.set()
        self._worker = threading.Thread(
            target=self._run, args=(path,), name="mediashelf-audio", daemon=True
        )
        self._worker.start()
        logger.debug("Playing %s", path)

    def pause(self) -> None:
        self._resumed.clear()

    def unpause(self) -> None:
        self._resumed.set()

    def stop(self) -> None:
        """Stop playback and wait briefly for the worker to exit."""
        worker, self._worker = self._worker, None
        self._stop_event.set()
        # A paused worker has to wake up to notice the stop.
        self._resumed.set()
        if worker is not None:
            worker.join(timeout=_JOIN_TIMEOUT)

    # -- end-of-track callback -----------------------------------------------

    def set_end_callback(self, callback: Callable[[], None]) -> None:
        self._end_callback = callback

    def check_events(self) -> None:
        """Deliver a pending end-of-track event.

        Call this periodically from the thread that owns the player state.
        """
        if not self._track_ended.is_set():
            return
        self._track_ended.clear()
        if self._end_callback is not None:
            self._end_callback()

    # -- worker thread -------------------------------------------------------

    def _run(self, path: str) -> None:
        try:
            finished = self._stream(path)
        except Exception:
            logger.error("Playback failed for %s", path, exc_info=True)
            return
        if finished:
            self._track_ended.set()

    def _stream(self, path: str) -> bool:
        """Write *path* to the output block by block.

        Returns False when playback was stopped before the last block.
        """
        with sf.SoundFile(path) as track, sd.OutputStream(
            samplerate=track.samplerate, channels=track.channels, dtype="float32"
        ) as output:
            for block in track.blocks(
                blocksize=_BLOCK_SIZE, dtype="float32", always_2d=True
            ):
                self._resumed.wait()
                if self._stop_event.is_set():
                    return False
                output.write(block)
        return not self._stop_event.is_set()
