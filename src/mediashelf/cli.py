"""Terminal shell for browsing and playing a mediashelf library."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from mediashelf.browser import BrowseCriteria, LibraryView, build_view, scan
from mediashelf.config import DEFAULT_CONFIG_PATH, load_config
from mediashelf.filters import RATING_FILTERS, TYPE_FILTERS
from mediashelf.formatting import file_icon, format_date, format_file_size, format_stars
from mediashelf.grouping import VIEW_MODES, Placeholders, group_key
from mediashelf.hierarchy import HierarchyPolicy
from mediashelf.library import album_thumbnail
from mediashelf.media import MediaEntry
from mediashelf.player import AlbumPlayer, InvalidTransitionError
from mediashelf.ratings import JsonRatingStore, RatingStore, lookup
from mediashelf.sorting import SORT_OPTIONS

SORT_VALUES = [value for _label, value in SORT_OPTIONS]


def _print_view(
    view: LibraryView,
    ratings: RatingStore,
    placeholders: Placeholders,
    *,
    show_files: bool = False,
) -> None:
    if not view.album_count:
        print("  (no albums match)")
        return

    last_artist: str | None = None
    for artist, album, files in view.rows():
        rating = lookup(ratings, group_key(album, files, placeholders))
        cover = album_thumbnail(files)
        if view.mode == "album":
            heading = f"  {album}  – {artist or placeholders.artist}"
        else:
            if artist != last_artist:
                print(artist)
                last_artist = artist
            heading = f"  {album}"
        print(
            f"{heading}  {format_stars(rating)}  ({len(files)} files)"
            + (f"  cover: {cover.name}" if cover is not None else "")
        )
        if show_files:
            for entry in files:
                print(
                    f"      {file_icon(entry.type)} {entry.name}"
                    f"  {format_file_size(entry.size)}"
                    f"  {format_date(entry.modified)}"
                )
    print(f"{view.album_count} albums, {view.file_count} files")


def _print_status(player: AlbumPlayer) -> None:
    track = player.current_track
    playlist = player.playlist
    position = f"{playlist.current_index + 1}/{len(playlist)}" if playlist else "–"
    print(
        f"  [{player.state.name}]"
        f"  track: {track.name if track is not None else '–'}"
        f"  ({position})"
    )


def _split_album_ref(ref: str) -> tuple[str | None, str]:
    """Split ``"Artist/Album"`` (or a bare ``"Album"``) into its parts."""
    if "/" in ref:
        artist, album = ref.split("/", 1)
        return artist, album
    return None, ref


def _find_album(view: LibraryView, ref: str) -> tuple[str, list[MediaEntry]]:
    artist, album = _split_album_ref(ref)
    files = view.find_album(artist, album)
    if not files:
        raise ValueError(f"No album '{ref}' in the current view.")
    return album, files


def _run_interactive(
    entries: list[MediaEntry],
    criteria: BrowseCriteria,
    ratings: RatingStore,
    placeholders: Placeholders,
) -> None:
    from mediashelf.audio import AudioPlayer

    audio = AudioPlayer()
    player = AlbumPlayer(audio)

    def _view() -> LibraryView:
        return build_view(entries, criteria, ratings, placeholders)

    print("mediashelf – interactive mode")
    print(
        "Available commands: list, files, search <term>, type <kind>, rating <filter>, "
        "sort <option>, mode <artist|album>, rate <artist/album> <0-5>, "
        "play <artist/album>, pause, resume, next, prev, status, quit"
    )
    print()

    try:
        while True:
            try:
                raw = input("mediashelf> ").strip()
            except (EOFError, KeyboardInterrupt):
                print()
                break

            audio.check_events()

            if not raw:
                continue

            parts = raw.split(maxsplit=1)
            cmd = parts[0].lower()
            arg = parts[1] if len(parts) > 1 else ""

            try:
                if cmd == "quit":
                    break
                elif cmd == "list":
                    _print_view(_view(), ratings, placeholders)
                elif cmd == "files":
                    _print_view(_view(), ratings, placeholders, show_files=True)
                elif cmd == "search":
                    criteria.term = arg
                    _print_view(_view(), ratings, placeholders)
                elif cmd == "type":
                    if arg not in TYPE_FILTERS:
                        raise ValueError(f"Type must be one of {', '.join(TYPE_FILTERS)}.")
                    criteria.type_filter = arg
                    _print_view(_view(), ratings, placeholders)
                elif cmd == "rating":
                    if arg not in RATING_FILTERS:
                        raise ValueError(f"Rating must be one of {', '.join(RATING_FILTERS)}.")
                    criteria.rating_filter = arg
                    _print_view(_view(), ratings, placeholders)
                elif cmd == "sort":
                    if arg not in SORT_VALUES:
                        raise ValueError(f"Sort must be one of {', '.join(SORT_VALUES)}.")
                    criteria.sort_option = arg
                    _print_view(_view(), ratings, placeholders)
                elif cmd == "mode":
                    if arg not in VIEW_MODES:
                        raise ValueError(f"Mode must be one of {', '.join(VIEW_MODES)}.")
                    criteria.mode = arg
                    _print_view(_view(), ratings, placeholders)
                elif cmd == "rate":
                    ref, _, value = arg.rpartition(" ")
                    if not ref or not value.isdigit():
                        raise ValueError("Usage: rate <artist/album> <0-5>")
                    album, files = _find_album(_view(), ref.strip())
                    key = group_key(album, files, placeholders)
                    ratings.set(key, int(value))
                    print(f"  {key}: {format_stars(int(value))}")
                elif cmd == "play":
                    _album, files = _find_album(_view(), arg)
                    player.open_album(files)
                    _print_status(player)
                elif cmd == "pause":
                    player.pause()
                    _print_status(player)
                elif cmd == "resume":
                    player.play()
                    _print_status(player)
                elif cmd == "next":
                    player.next_track()
                    _print_status(player)
                elif cmd == "prev":
                    player.previous_track()
                    _print_status(player)
                elif cmd == "status":
                    _print_status(player)
                else:
                    print(f"  Unknown command: {cmd}")
            except (InvalidTransitionError, ValueError) as exc:
                print(f"  Error: {exc}")
    finally:
        audio.stop()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="mediashelf – browse a folder-based media library",
    )
    parser.add_argument(
        "--config",
        default=str(DEFAULT_CONFIG_PATH),
        help=f"Path to TOML config file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument("--music-dir", default=None, help="Root folder of the library")
    parser.add_argument(
        "--hierarchy",
        default=None,
        choices=[policy.value for policy in HierarchyPolicy],
        help="Folder layout used to derive genre/artist/album",
    )
    parser.add_argument("--ratings-file", default=None, help="JSON file holding album ratings")
    parser.add_argument("--mode", default=None, choices=VIEW_MODES, help="Group by artist or album")
    parser.add_argument("--search", default="", help="Only show files matching this term")
    parser.add_argument("--type", default="all", choices=TYPE_FILTERS, help="Media type filter")
    parser.add_argument("--rating", default="all", choices=RATING_FILTERS, help="Album rating filter")
    parser.add_argument("--sort", default=None, choices=SORT_VALUES, help="Album sort order")
    parser.add_argument("--files", action="store_true", help="List the files of every album")
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Start an interactive shell with album playback",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Load config file (silently skip if not found)
    cfg = load_config(args.config)

    # CLI flags override config values (only when explicitly provided)
    music_dir = args.music_dir if args.music_dir is not None else cfg.music_dir
    if args.hierarchy is not None:
        cfg.hierarchy = args.hierarchy
    ratings_file = args.ratings_file if args.ratings_file is not None else cfg.ratings_file
    mode = args.mode if args.mode is not None else cfg.view_mode
    sort_option = args.sort if args.sort is not None else cfg.sort

    placeholders = cfg.placeholders()
    ratings = JsonRatingStore(ratings_file)
    criteria = BrowseCriteria(
        term=args.search,
        type_filter=args.type,
        rating_filter=args.rating,
        sort_option=sort_option,
        mode=mode,
    )

    root = Path(music_dir).expanduser()
    if not root.is_dir():
        print(f"Music directory not found: {root}")
        sys.exit(1)

    entries = scan(root, cfg.hierarchy_policy())
    if not entries:
        print(f"No media files found in {root}")
        sys.exit(1)

    if args.interactive:
        _run_interactive(entries, criteria, ratings, placeholders)
        return

    _print_view(
        build_view(entries, criteria, ratings, placeholders),
        ratings,
        placeholders,
        show_files=args.files,
    )


if __name__ == "__main__":
    main()
