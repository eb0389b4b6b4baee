"""Runtime composition layer for dirbrowse.

Builds directory state, the preview engine, and the navigation controller,
wires them to the terminal, and runs the loop until the user quits.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable
from pathlib import Path

from ..file_ops import FileOperationExecutor
from ..input import Keymap
from ..navigation import NavigationController
from ..preview import PreviewEngine
from ..render import PreviewHighlighter, PreviewRenderer
from ..state import DirectoryState
from .config import BrowserSettings
from .loop import RuntimeLoopTiming, run_main_loop
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def build_controller(
    path: Path,
    settings: BrowserSettings,
    highlight: Callable[[str, Path], str | None] | None = None,
) -> NavigationController:
    """Compose a controller for ``path`` using resolved startup settings.

    ``highlight`` colours text previews on the preview workers.

    Raises ``NotADirectoryPathError`` or ``DirectoryListingError`` when the
    starting directory cannot be opened.
    """
    directory = DirectoryState(path, show_hidden=settings.show_hidden)
    engine = PreviewEngine(
        max_bytes=settings.preview_max_bytes,
        max_lines=settings.preview_max_lines,
        highlight=highlight,
    )
    return NavigationController(
        directory,
        engine,
        FileOperationExecutor(),
        text_extensions=settings.text_extensions,
    )


def run_browser(path: Path, style: str, no_color: bool, settings: BrowserSettings) -> None:
    """Run the interactive browser rooted at ``path``."""
    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise SystemExit("dirbrowse needs an interactive terminal.")

    keymap = Keymap.with_overrides(settings.keybindings)
    highlighter = None if no_color else PreviewHighlighter(style)
    controller = build_controller(path, settings, highlighter)
    open_hint = keymap.describe_keys("open") or "open"
    renderer = PreviewRenderer(no_color=no_color, open_hint=open_hint)
    terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())

    logger.info("Starting in %s (pid %d)", controller.current_path, os.getpid())
    try:
        run_main_loop(controller, terminal, keymap, renderer, RuntimeLoopTiming())
    finally:
        controller.preview.shutdown()
        logger.info("Exited from %s", controller.current_path)


__all__ = [
    "build_controller",
    "run_browser",
]
