"""Load mediashelf configuration from a TOML file."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from mediashelf.grouping import DEFAULT_PLACEHOLDERS, Placeholders
from mediashelf.hierarchy import HierarchyPolicy

DEFAULT_CONFIG_PATH = Path("~/.config/mediashelf.toml").expanduser()


@dataclass
class Config:
    """mediashelf configuration."""

    music_dir: str = "~/Music"
    hierarchy: str = HierarchyPolicy.ARTIST_ALBUM.value
    ratings_file: str = "~/.mediashelf/ratings.json"
    view_mode: str = "artist"
    sort: str = "name-asc"
    artist_placeholder: str = DEFAULT_PLACEHOLDERS.artist
    album_placeholder: str = DEFAULT_PLACEHOLDERS.album

    def placeholders(self) -> Placeholders:
        return Placeholders(artist=self.artist_placeholder, album=self.album_placeholder)

    def hierarchy_policy(self) -> HierarchyPolicy:
        return HierarchyPolicy.from_name(self.hierarchy)


def load_config(path: Path | str) -> Config:
    """Load configuration from a TOML file.

    Returns a :class:`Config` with defaults for any missing keys.
    If the file does not exist, returns a default :class:`Config`.
    """
    path = Path(path)
    if not path.is_file():
        return Config()

    with open(path, "rb") as f:
        data = tomllib.load(f)

    placeholders = data.get("placeholders", {})

    return Config(
        music_dir=data.get("music-dir", Config.music_dir),
        hierarchy=data.get("hierarchy", Config.hierarchy),
        ratings_file=data.get("ratings-file", Config.ratings_file),
        view_mode=data.get("view-mode", Config.view_mode),
        sort=data.get("sort", Config.sort),
        artist_placeholder=placeholders.get("artist", Config.artist_placeholder),
        album_placeholder=placeholders.get("album", Config.album_placeholder),
    )
