"""Shared fixtures for the mediashelf tests."""

from __future__ import annotations

import pytest

from mediashelf.media import MediaEntry, MediaKind


def _make_entry(
    name: str,
    artist: str | None = None,
    album: str | None = None,
    kind: MediaKind | str = MediaKind.AUDIO,
    *,
    genre: str | None = None,
    size: int = 1000,
) -> MediaEntry:
    relative = "/".join(part for part in (artist, album) if part)
    return MediaEntry(
        name=name,
        path=f"/music/{relative}/{name}" if relative else f"/music/{name}",
        relative_path=relative,
        size=size,
        type=MediaKind(kind),
        modified=1_700_000_000.0,
        genre=genre,
        artist=artist,
        album=album,
    )


@pytest.fixture()
def make_entry():
    """Factory for MediaEntry records with sensible defaults."""
    return _make_entry


@pytest.fixture()
def beatles_queen(make_entry):
    """The four-file library used across filter/sort scenarios."""
    return [
        make_entry("come_together.mp3", "Beatles", "Abbey Road"),
        make_entry("cover.jpg", "Beatles", "Abbey Road", MediaKind.IMAGE),
        make_entry("taxman.mp3", "Beatles", "Revolver"),
        make_entry("bohemian.mp3", "Queen", "A Night at the Opera"),
    ]
