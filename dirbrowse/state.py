"""Current-directory state: listing, search filter, and bookmarks.

``DirectoryState`` is owned by the control path. The current path and its
snapshot live together in one immutable ``DirectoryView`` so they are always
replaced by a single assignment.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .errors import NotADirectoryPathError
from .file_model import EntrySnapshot, build_entry_snapshot

logger = logging.getLogger(__name__)

PARENT_LABEL = ".."


@dataclass(frozen=True)
class DirectoryView:
    """Current path paired with the snapshot that was read for it."""

    path: Path
    snapshot: EntrySnapshot


@dataclass(frozen=True)
class VisibleEntry:
    """One renderable row of the file list."""

    label: str
    path: Path
    is_directory: bool
    is_parent: bool = False
    size: int | None = None
    modified_at: float | None = None


def parent_of(path: Path) -> Path | None:
    """Return the parent directory or ``None`` at the filesystem root."""
    parent = path.parent
    if parent == path:
        return None
    return parent


def filter_matches(name: str, search_filter: str) -> bool:
    if not search_filter:
        return True
    return search_filter.casefold() in name.casefold()


class DirectoryState:
    """Owns the current directory, its snapshot, filter, and bookmarks."""

    def __init__(
        self,
        initial_path: Path,
        *,
        show_hidden: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.show_hidden = show_hidden
        self._clock = clock
        self.search_filter = ""
        self._bookmarks: list[Path] = []
        target = self._validated_directory(initial_path)
        self._view = DirectoryView(path=target, snapshot=self.load(target))

    @property
    def current_path(self) -> Path:
        return self._view.path

    @property
    def snapshot(self) -> EntrySnapshot:
        return self._view.snapshot

    @property
    def bookmarks(self) -> tuple[Path, ...]:
        return tuple(self._bookmarks)

    @staticmethod
    def _validated_directory(path: Path) -> Path:
        try:
            resolved = Path(path).expanduser().resolve()
        except (OSError, RuntimeError) as exc:
            raise NotADirectoryPathError(f"Not a directory: {path}") from exc
        if not resolved.is_dir():
            raise NotADirectoryPathError(f"Not a directory: {path}")
        return resolved

    def load(self, path: Path) -> EntrySnapshot:
        """Read ``path`` into a new snapshot without touching current state."""
        return build_entry_snapshot(path, show_hidden=self.show_hidden, clock=self._clock)

    def change_directory(self, path: Path) -> None:
        """Switch to ``path``, replacing path and snapshot together.

        Raises ``NotADirectoryPathError`` for invalid targets and
        ``DirectoryListingError`` for unreadable ones; state is unchanged in
        both cases.
        """
        target = self._validated_directory(path)
        snapshot = self.load(target)
        self._view = DirectoryView(path=target, snapshot=snapshot)
        self.search_filter = ""
        logger.debug("Changed directory to %s (%d entries)", target, len(snapshot.entries))

    def refresh(self) -> None:
        """Re-read the current directory and swap in the new snapshot."""
        current = self._view.path
        self._view = DirectoryView(path=current, snapshot=self.load(current))

    def set_filter(self, text: str) -> None:
        self.search_filter = text

    def toggle_bookmark(self, path: Path) -> bool:
        """Remove ``path`` if bookmarked, else append it.

        Returns whether ``path`` is bookmarked afterwards.
        """
        if path in self._bookmarks:
            self._bookmarks.remove(path)
            return False
        self._bookmarks.append(path)
        return True

    def visible_entries(self) -> list[VisibleEntry]:
        """Return the parent row plus snapshot entries passing the filter."""
        view = self._view
        rows: list[VisibleEntry] = []
        parent = parent_of(view.path)
        if parent is not None:
            rows.append(
                VisibleEntry(
                    label=PARENT_LABEL,
                    path=parent,
                    is_directory=True,
                    is_parent=True,
                )
            )
        search_filter = self.search_filter
        for entry in view.snapshot.entries:
            if not filter_matches(entry.name, search_filter):
                continue
            rows.append(
                VisibleEntry(
                    label=entry.name,
                    path=view.path / entry.name,
                    is_directory=entry.is_directory,
                    size=entry.size,
                    modified_at=entry.modified_at,
                )
            )
        return rows


__all__ = [
    "PARENT_LABEL",
    "DirectoryView",
    "VisibleEntry",
    "DirectoryState",
    "parent_of",
    "filter_matches",
]
