"""Media library: discovers media files below a root folder.

Expected directory layout (artist-album policy)::

    <root>/
        Artist A/
            Album 1/
                01 - First Track.mp3
                cover.jpg
            Album 2/
                clip.mp4
        loose.png

Every file whose extension classifies as image, video or audio becomes a
:class:`~mediashelf.media.MediaEntry`; artist and album come from the
directory names (see :mod:`mediashelf.hierarchy`).  A directory that cannot
be read is logged and skipped; the rest of the scan carries on.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, NamedTuple, Sequence

from mediashelf.hierarchy import HierarchyPolicy
from mediashelf.media import MEDIA_EXTENSIONS, MediaEntry, MediaKind

logger = logging.getLogger(__name__)


class DirectoryRecord(NamedTuple):
    """One path visited by :func:`walk_directory`."""

    is_directory: bool
    name: str
    relative_dir: str  # directory containing *name*, relative to the root
    size: int
    mtime: float


def walk_directory(root: str | Path) -> Iterator[DirectoryRecord]:
    """Recursively walk *root*, yielding a record for every directory and file.

    Entries are visited in name order, depth first.  Symlinked directories
    are not followed.  Unreadable directories and entries are logged and
    skipped without aborting the walk.
    """
    root = os.fspath(root)
    if not os.path.isdir(root):
        logger.warning("Scan root %s is not a directory", root)
        return
    yield from _walk(root, "")


def _walk(current: str, relative_dir: str) -> Iterator[DirectoryRecord]:
    try:
        with os.scandir(current) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        logger.warning("Error reading directory %s: %s", current, exc)
        return

    for entry in entries:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = not is_dir and entry.is_file()
            stat = entry.stat()
        except OSError as exc:
            logger.warning("Cannot stat %s: %s", entry.path, exc)
            continue

        if is_dir:
            yield DirectoryRecord(True, entry.name, relative_dir, 0, stat.st_mtime)
            sub_dir = os.path.join(relative_dir, entry.name) if relative_dir else entry.name
            yield from _walk(entry.path, sub_dir)
        elif is_file:
            yield DirectoryRecord(
                False, entry.name, relative_dir, stat.st_size, stat.st_mtime
            )


def build_entries(
    records: Iterable[DirectoryRecord] | None,
    root: str | Path,
    policy: HierarchyPolicy = HierarchyPolicy.ARTIST_ALBUM,
) -> list[MediaEntry]:
    """Turn walk records into media entries.

    Directory records and files with an unrecognised extension produce
    nothing.
    """
    if records is None:
        return []
    root = os.fspath(root)
    entries: list[MediaEntry] = []
    for record in records:
        if record.is_directory:
            continue
        if os.path.splitext(record.name)[1].lower() not in MEDIA_EXTENSIONS:
            continue
        entries.append(
            MediaEntry.create(
                name=record.name,
                path=os.path.join(root, record.relative_dir, record.name),
                relative_path=record.relative_dir,
                size=record.size,
                modified=record.mtime,
                policy=policy,
            )
        )
    return entries


def scan(
    root: str | Path | None,
    policy: HierarchyPolicy = HierarchyPolicy.ARTIST_ALBUM,
) -> list[MediaEntry]:
    """Scan *root* and return every media file below it."""
    if not root:
        return []
    entries = build_entries(walk_directory(root), root, policy)
    logger.info("Scanned %s: %d media files", root, len(entries))
    return entries


def album_thumbnail(files: Sequence[MediaEntry] | None) -> MediaEntry | None:
    """Return the first image in *files* (used as album cover), if any."""
    if not isinstance(files, (list, tuple)):
        return None
    for entry in files:
        if entry is not None and entry.type is MediaKind.IMAGE:
            return entry
    return None
