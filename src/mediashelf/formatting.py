"""Small display helpers shared by the shell and any other front end."""

from __future__ import annotations

from datetime import datetime

from mediashelf.media import MediaKind
from mediashelf.ratings import MAX_RATING

_ICONS = {
    MediaKind.IMAGE.value: "🖼️",
    MediaKind.VIDEO.value: "🎬",
    MediaKind.AUDIO.value: "🎵",
}
_DEFAULT_ICON = "📄"
_SIZE_UNITS = ("B", "KB", "MB", "GB")


def file_icon(kind: MediaKind | str) -> str:
    return _ICONS.get(getattr(kind, "value", kind), _DEFAULT_ICON)


def format_file_size(size: int) -> str:
    """Format a byte count, e.g. ``1536`` → ``"1.5 KB"``."""
    if size <= 0:
        return "0 B"
    value = float(size)
    exponent = 0
    while value >= 1024 and exponent < len(_SIZE_UNITS) - 1:
        value /= 1024
        exponent += 1
    return f"{round(value, 2):g} {_SIZE_UNITS[exponent]}"


def format_date(timestamp: float | None) -> str:
    """Format a POSIX timestamp as ``YYYY/M/D`` in local time."""
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        return "Invalid Date"
    try:
        moment = datetime.fromtimestamp(timestamp)
    except (OverflowError, OSError, ValueError):
        return "Invalid Date"
    return f"{moment.year}/{moment.month}/{moment.day}"


def format_stars(rating: int) -> str:
    """Render *rating* as filled and empty stars, e.g. ``"★★★☆☆"``."""
    filled = max(0, min(rating, MAX_RATING))
    return "★" * filled + "☆" * (MAX_RATING - filled)
