"""Album ratings keyed by ``artist/album``.

Ratings are integers 0–5 where 0 means "unrated".  The filter and sort code
only ever talks to a :class:`RatingStore`; two implementations are provided:

- :class:`MemoryRatingStore` – a plain dict, for tests and ephemeral use.
- :class:`JsonRatingStore`  – a JSON object on disk, e.g.
  ``{"Beatles/Abbey Road": 5, "Beatles/Revolver": 3}``.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Mapping, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

MIN_RATING = 0
MAX_RATING = 5


@runtime_checkable
class RatingStore(Protocol):
    def get(self, key: str) -> int: ...

    def set(self, key: str, value: int) -> None: ...


def _is_rating(value: object) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MIN_RATING <= value <= MAX_RATING
    )


def _check_rating(value: object) -> int:
    if not _is_rating(value):
        raise ValueError(
            f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}, "
            f"got {value!r}."
        )
    return value  # type: ignore[return-value]


def lookup(ratings: RatingStore | None, key: str) -> int:
    """Read *key* from *ratings*, treating anything unusable as unrated."""
    if ratings is None:
        return 0
    value = ratings.get(key)
    return value if _is_rating(value) else 0


class MemoryRatingStore:
    """In-memory rating store."""

    def __init__(self, initial: Mapping[str, int] | None = None) -> None:
        self._ratings: dict[str, int] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> int:
        return self._ratings.get(key, 0)

    def set(self, key: str, value: int) -> None:
        self._ratings[key] = _check_rating(value)

    def as_dict(self) -> dict[str, int]:
        return dict(self._ratings)


class JsonRatingStore:
    """Rating store persisted as a single JSON object.

    The file is read lazily on first access and rewritten atomically on
    every :meth:`set`.  A missing, unreadable or corrupt file behaves like an
    empty store; invalid individual values read as 0.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()
        self._ratings: dict[str, object] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> int:
        value = self._load().get(key, 0)
        return value if _is_rating(value) else 0  # type: ignore[return-value]

    def set(self, key: str, value: int) -> None:
        ratings = self._load()
        ratings[key] = _check_rating(value)
        self._save(ratings)
        logger.info("Saved rating for %s: %d", key, value)

    def as_dict(self) -> dict[str, int]:
        return {k: v for k, v in self._load().items() if _is_rating(v)}  # type: ignore[misc]

    # -- internal ------------------------------------------------------------

    def _load(self) -> dict[str, object]:
        if self._ratings is not None:
            return self._ratings
        self._ratings = {}
        if not self._path.is_file():
            return self._ratings
        try:
            with open(self._path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            logger.warning("Could not load ratings from %s: %s", self._path, exc)
            return self._ratings
        if not isinstance(data, dict):
            logger.warning("Ratings file %s does not contain an object", self._path)
            return self._ratings
        for key, value in data.items():
            if not _is_rating(value):
                logger.warning("Ignoring invalid rating %r for %s in %s", value, key, self._path)
        self._ratings = data
        return self._ratings

    def _save(self, ratings: dict[str, object]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=".ratings-", suffix=".json", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(ratings, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except OSError:
            logger.error("Error saving ratings to %s", self._path, exc_info=True)
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
