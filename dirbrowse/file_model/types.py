"""Domain datatypes for one-directory listings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Entry:
    """One directory child with metadata observed at scan time."""

    name: str
    is_directory: bool
    size: int | None = None
    modified_at: float | None = None


@dataclass(frozen=True)
class EntrySnapshot:
    """Immutable listing of one directory taken at ``taken_at``.

    ``entries`` is sorted directories-first, then case-insensitively by name.
    Refreshes build a new snapshot; an existing one is never edited.
    """

    directory_path: Path
    entries: tuple[Entry, ...]
    taken_at: float

    def names(self) -> tuple[str, ...]:
        return tuple(entry.name for entry in self.entries)

    def find(self, name: str) -> Entry | None:
        """Return the entry called ``name`` or ``None``."""
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None


__all__ = [
    "Entry",
    "EntrySnapshot",
]
