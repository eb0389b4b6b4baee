"""Snapshot construction for one-directory listings."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

from ..errors import DirectoryListingError
from .fs import list_directory_children
from .types import EntrySnapshot

logger = logging.getLogger(__name__)


def build_entry_snapshot(
    directory: Path,
    show_hidden: bool = True,
    clock: Callable[[], float] = time.monotonic,
) -> EntrySnapshot:
    """Read ``directory`` fully and return a fresh immutable snapshot.

    Raises ``DirectoryListingError`` when the directory cannot be enumerated.
    """
    directory = directory.resolve()
    children, scan_error = list_directory_children(directory, show_hidden=show_hidden)
    if scan_error is not None:
        logger.warning("Cannot list %s: %s", directory, scan_error)
        raise DirectoryListingError(f"Cannot read {directory}: {scan_error}") from scan_error
    return EntrySnapshot(
        directory_path=directory,
        entries=tuple(children),
        taken_at=clock(),
    )


__all__ = [
    "build_entry_snapshot",
]
