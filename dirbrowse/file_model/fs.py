"""Filesystem scanning helpers for directory listings."""

from __future__ import annotations

import os
from pathlib import Path

from .types import Entry


def entry_sort_key(entry: Entry) -> tuple[bool, str, str]:
    """Directories first, then case-insensitive name, then exact name."""
    return (not entry.is_directory, entry.name.casefold(), entry.name)


def list_directory_children(
    directory: Path,
    show_hidden: bool = True,
) -> tuple[list[Entry], Exception | None]:
    """List children of ``directory`` with stat metadata, sorted.

    Returns ``(children, scan_error)``. ``scan_error`` is set when the
    directory cannot be scanned; per-child stat failures only blank that
    child's size and mtime.
    """
    children: list[Entry] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                name = child.name
                if not show_hidden and name.startswith("."):
                    continue

                try:
                    is_dir = child.is_dir()
                except OSError:
                    is_dir = False

                size: int | None = None
                modified_at: float | None = None
                try:
                    stat = child.stat(follow_symlinks=False)
                    modified_at = float(stat.st_mtime)
                    if not is_dir:
                        size = int(stat.st_size)
                except OSError:
                    pass

                children.append(
                    Entry(
                        name=name,
                        is_directory=is_dir,
                        size=size,
                        modified_at=modified_at,
                    )
                )
    except OSError as exc:
        return [], exc

    children.sort(key=entry_sort_key)
    return children, None


__all__ = [
    "entry_sort_key",
    "list_directory_children",
]
