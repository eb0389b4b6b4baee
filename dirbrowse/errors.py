"""Exception hierarchy for dirbrowse.

Lower layers raise these; only the navigation controller turns them into
status text for the user.
"""

from __future__ import annotations


class BrowserError(Exception):
    """Base exception for all dirbrowse errors."""


class DirectoryListingError(BrowserError):
    """A directory could not be enumerated."""


class NotADirectoryPathError(BrowserError):
    """A navigation target is missing or is not a directory."""


class InvalidNameError(BrowserError):
    """A rename target name was rejected before touching the filesystem."""


class OperationFailedError(BrowserError):
    """A delete/rename/copy/move failed in the underlying filesystem call."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


__all__ = [
    "BrowserError",
    "DirectoryListingError",
    "NotADirectoryPathError",
    "InvalidNameError",
    "OperationFailedError",
]
