"""Open a path with the operating system's default handler.

The spawned process is not tracked. Returns an error message string instead
of raising so the caller can show it as status text.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def system_open_command(path: Path) -> list[str]:
    """Return the platform command that opens ``path`` with its default app."""
    if sys.platform == "darwin":
        return ["open", str(path)]
    if os.name == "nt":
        return ["cmd", "/C", "start", "", str(path)]
    return ["xdg-open", str(path)]


def open_with_system(path: Path) -> str | None:
    command = system_open_command(path)
    if os.name != "nt" and shutil.which(command[0]) is None:
        return f"Cannot open: {command[0]} not found."
    try:
        subprocess.Popen(
            command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as exc:
        logger.warning("System open failed for %s: %s", path, exc)
        return f"Failed to open: {exc}"
    logger.info("Opened %s with %s", path, command[0])
    return None


__all__ = [
    "system_open_command",
    "open_with_system",
]
