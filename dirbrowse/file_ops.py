"""Destructive filesystem operations: delete, rename, copy, move.

``FileOperationExecutor`` keeps no state. Each method works on the paths it
is given and raises ``InvalidNameError`` or ``OperationFailedError``; callers
refresh their listing afterwards whatever the outcome.

Collision policy: copy overwrites files and merges into existing
directories; rename and move refuse an existing destination.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from .errors import InvalidNameError, OperationFailedError

logger = logging.getLogger(__name__)


def _describe(exc: OSError) -> str:
    if exc.filename:
        return f"{exc.strerror or exc}: {exc.filename}"
    return str(exc.strerror or exc)


def validate_new_name(new_name: str) -> str:
    """Return ``new_name`` stripped, or raise ``InvalidNameError``."""
    stripped = new_name.strip()
    if not stripped:
        raise InvalidNameError("Name must not be empty.")
    if stripped in {".", ".."}:
        raise InvalidNameError(f"Invalid name: {stripped}")
    separators = {os.sep}
    if os.altsep:
        separators.add(os.altsep)
    if any(sep in stripped for sep in separators):
        raise InvalidNameError(f"Name must not contain a path separator: {stripped}")
    return stripped


def _copy_file(source: Path, destination: Path) -> None:
    """Copy bytes and fsync so a later read never sees a short file."""
    if destination.exists() and os.path.samefile(source, destination):
        raise OperationFailedError("Copy failed: source and destination are the same file")
    destination.parent.mkdir(parents=True, exist_ok=True)
    with source.open("rb") as src, destination.open("wb") as dst:
        shutil.copyfileobj(src, dst)
        dst.flush()
        os.fsync(dst.fileno())
    shutil.copymode(source, destination)


def _copy_symlink(source: Path, destination: Path) -> None:
    link_target = os.readlink(source)
    if destination.is_symlink() or destination.is_file():
        destination.unlink()
    destination.parent.mkdir(parents=True, exist_ok=True)
    os.symlink(link_target, destination)


def _copy_tree(source: Path, destination: Path) -> None:
    destination.mkdir(parents=True, exist_ok=True)
    with os.scandir(source) as entries:
        children = sorted(entries, key=lambda item: item.name)
    for child in children:
        child_source = Path(child.path)
        child_destination = destination / child.name
        if child.is_symlink():
            _copy_symlink(child_source, child_destination)
        elif child.is_dir(follow_symlinks=False):
            _copy_tree(child_source, child_destination)
        else:
            _copy_file(child_source, child_destination)


class FileOperationExecutor:
    """Stateless executor for file-mutating operations."""

    def delete(self, path: Path) -> None:
        """Remove ``path`` recursively.

        A failure part-way through a tree leaves the already-removed children
        gone and is reported as ``OperationFailedError``.
        """
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as exc:
            logger.warning("Delete failed for %s: %s", path, exc)
            raise OperationFailedError(f"Delete failed: {_describe(exc)}") from exc
        logger.info("Deleted %s", path)

    def rename(self, old_path: Path, new_name: str) -> Path:
        """Rename ``old_path`` within its directory and return the new path."""
        name = validate_new_name(new_name)
        new_path = old_path.parent / name
        if new_path == old_path:
            return new_path
        if os.path.lexists(new_path):
            raise OperationFailedError(f"Rename failed: {name} already exists")
        try:
            os.rename(old_path, new_path)
        except OSError as exc:
            logger.warning("Rename failed for %s -> %s: %s", old_path, new_path, exc)
            raise OperationFailedError(f"Rename failed: {_describe(exc)}") from exc
        logger.info("Renamed %s -> %s", old_path, new_path)
        return new_path

    def copy(self, source_path: Path, destination_path: Path) -> None:
        """Copy a file or directory tree to ``destination_path``.

        Existing destination files are overwritten and existing destination
        directories are merged into. Entries copied before a failure stay.
        """
        try:
            if source_path.is_dir():
                resolved_source = source_path.resolve()
                resolved_destination = destination_path.resolve()
                if resolved_destination == resolved_source or resolved_destination.is_relative_to(resolved_source):
                    raise OperationFailedError("Copy failed: destination is inside the source directory")
                _copy_tree(source_path, destination_path)
            elif source_path.exists():
                _copy_file(source_path, destination_path)
            else:
                raise FileNotFoundError(2, "No such file or directory", str(source_path))
        except OSError as exc:
            logger.warning("Copy failed for %s -> %s: %s", source_path, destination_path, exc)
            raise OperationFailedError(f"Copy failed: {_describe(exc)}") from exc
        logger.info("Copied %s -> %s", source_path, destination_path)

    def move(self, source_path: Path, destination_path: Path) -> None:
        """Rename ``source_path`` to ``destination_path`` on the same volume.

        Cross-volume moves are not emulated with copy+delete; they fail.
        """
        if os.path.lexists(destination_path):
            raise OperationFailedError(f"Move failed: {destination_path} already exists")
        try:
            os.rename(source_path, destination_path)
        except OSError as exc:
            logger.warning("Move failed for %s -> %s: %s", source_path, destination_path, exc)
            raise OperationFailedError(f"Move failed: {_describe(exc)}") from exc
        logger.info("Moved %s -> %s", source_path, destination_path)


__all__ = [
    "FileOperationExecutor",
    "validate_new_name",
]
