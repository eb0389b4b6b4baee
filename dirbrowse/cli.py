"""Command-line front door for dirbrowse.

Parses CLI options, configures logging, resolves the starting directory,
and dispatches into the interactive runtime.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .errors import BrowserError
from .runtime import run_browser
from .runtime.config import load_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse a directory in a two-pane terminal view with file previews."
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to open. Defaults to current directory.")
    parser.add_argument("--style", default=None, help="Pygments style name for text previews.")
    parser.add_argument("--no-color", action="store_true", help="Disable syntax highlighting in previews.")
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write diagnostic logs to this file. Logging is off when omitted.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Minimum log level written to --log-file (default: INFO).",
    )
    return parser


def configure_logging(log_file: str | None, level: str) -> None:
    """Send log records to ``log_file``; the screen belongs to the TUI."""
    if log_file is None:
        return
    logging.basicConfig(filename=log_file, level=getattr(logging, level), format=LOG_FORMAT)


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch dirbrowse on a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path).expanduser()
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")

    settings = load_settings()
    style = args.style or settings.style
    try:
        run_browser(path, style, args.no_color, settings)
    except BrowserError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
