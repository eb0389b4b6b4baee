"""Domain model for one-directory listings.

This package contains non-UI listing primitives:
- entry and snapshot datatypes
- filesystem scanning with sorted children
- snapshot construction that raises on unreadable directories
"""

from __future__ import annotations

from .types import Entry, EntrySnapshot
from .fs import entry_sort_key, list_directory_children
from .snapshot import build_entry_snapshot

__all__ = [
    "Entry",
    "EntrySnapshot",
    "entry_sort_key",
    "list_directory_children",
    "build_entry_snapshot",
]
