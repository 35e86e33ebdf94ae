"""
trackline CLI - Entry point

Renders songs through display templates from the command line, which is
handy for trying out a format before putting it in config.toml.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from trackline.core.config import (
    Config,
    create_default_config,
    ensure_directories,
    get_config_path,
    get_log_file_path,
    load_config,
)
from trackline.core.output import echo, log, setup_loguru
from trackline.domain.library import Song, song_from_file, swap_the


def build_song(args: argparse.Namespace) -> Song:
    """Build a song from --file and/or the individual field options."""
    song = song_from_file(args.file) if args.file else Song()

    for field_name in ("artist", "album", "title", "track", "uri", "genre", "date"):
        value = getattr(args, field_name)
        if value is not None:
            setattr(song, field_name, value)
    if args.duration is not None:
        song.duration = args.duration

    return song


def run_render(args: argparse.Namespace, config: Config) -> int:
    template = args.template if args.template is not None else config.display.song_format
    song = build_song(args)
    logger.debug(f"Rendering {song!r} with template {template!r}")
    echo(song.format_string(template))
    return 0


def run_sort_key(args: argparse.Namespace, config: Config) -> int:
    echo(swap_the(args.text))
    return 0


def run_init_config(args: argparse.Namespace, config: Config) -> int:
    config_path = args.config or get_config_path()
    if config_path.exists() and not args.force:
        log(f"Configuration already exists at: {config_path} (use --force to overwrite)", "warning")
        return 1

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        f.write(create_default_config())
    log(f"Wrote default configuration to: {config_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trackline",
        description="Render music track metadata through display templates.",
    )
    parser.add_argument("--config", type=Path, help="Path to config.toml")
    parser.add_argument("--log-level", help="Override the configured log level")

    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Render a song with a template")
    render.add_argument(
        "template", nargs="?", help="Display template (default: display.song_format)"
    )
    render.add_argument("--file", help="Read tags from a local audio file")
    render.add_argument("--artist")
    render.add_argument("--album")
    render.add_argument("--title")
    render.add_argument("--track")
    render.add_argument("--uri")
    render.add_argument("--genre")
    render.add_argument("--date")
    render.add_argument("--duration", type=int, help="Duration in seconds")
    render.set_defaults(handler=run_render)

    sort_key = subparsers.add_parser("sort-key", help='Show the "X, The" sort key')
    sort_key.add_argument("text")
    sort_key.set_defaults(handler=run_sort_key)

    init_config = subparsers.add_parser("init-config", help="Write the default config")
    init_config.add_argument("--force", action="store_true", help="Overwrite existing file")
    init_config.set_defaults(handler=run_init_config)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Run the CLI.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "init-config":
        config = Config()
    else:
        config = load_config(args.config)

    ensure_directories()
    level = (args.log_level or config.logging.level).upper()
    setup_loguru(
        get_log_file_path(config),
        level=level,
        rotation=config.logging.rotation,
        retention=config.logging.retention,
        console_output=config.logging.console_output,
    )

    return args.handler(args, config)


if __name__ == "__main__":
    sys.exit(main())
