"""Executable entrypoint for the terminal firework show."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence
import argparse

from .demo import DEMOS
from .logging_setup import setup_logging
from .settings import LOG_LEVELS, SettingsManager, ShowSettings
from .show import FireworkShow
from .utils import SETTINGS_FILE


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="firework", description="Fireworks in your terminal.")
    parser.add_argument("-d", "--demo", type=int, help=f"demo to run (0-{len(DEMOS) - 1})")
    parser.add_argument("-l", "--looping", action="store_true", default=None, help="restart the show when it ends")
    parser.add_argument(
        "-g",
        "--gradient",
        action="store_true",
        default=None,
        help="fade colours over each particle's life (best on an opaque black background)",
    )
    parser.add_argument("--dynamic", action="store_true", default=None, help="endless random fireworks")
    parser.add_argument("--cjk", action="store_true", default=None, help="draw with double-width glyphs")
    parser.add_argument("--fps", type=int, help="target frames per second")
    parser.add_argument("--settings", type=Path, default=SETTINGS_FILE, help="settings JSON file")
    parser.add_argument("--log-file", type=Path, help="where to write the log")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, help="log verbosity")
    return parser


def resolve_settings(args: argparse.Namespace) -> ShowSettings:
    """Merge command-line flags over the settings file."""
    settings = SettingsManager(args.settings).settings
    overrides = {
        "demo": args.demo,
        "looping": args.looping,
        "gradient": args.gradient,
        "dynamic": args.dynamic,
        "cjk": args.cjk,
        "fps": args.fps,
        "log_file": args.log_file,
        "log_level": args.log_level,
    }
    for name, value in overrides.items():
        if value is not None:
            setattr(settings, name, value)
    if settings.fps <= 0:
        raise ValueError(f"fps must be positive, got {settings.fps}")
    if not settings.dynamic and settings.demo not in DEMOS:
        raise ValueError(f"demo number must be 0-{len(DEMOS) - 1}, got {settings.demo}")
    return settings


def main(argv: Sequence[str] | None = None) -> None:
    """Launch the show."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = resolve_settings(args)
    except ValueError as exc:
        parser.error(str(exc))
    setup_logging(settings.log_file, settings.log_level)
    FireworkShow(settings).run()


if __name__ == "__main__":
    main()
