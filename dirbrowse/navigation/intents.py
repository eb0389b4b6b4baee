"""User intents accepted by ``NavigationController.dispatch``.

The presentation layer translates raw input into these values; the core
never sees key symbols.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SelectIndex:
    """Move the cursor to visible row ``index`` and preview it."""

    index: int


@dataclass(frozen=True)
class MoveSelection:
    delta: int


@dataclass(frozen=True)
class Activate:
    """Enter the selected directory, or preview the selected file."""


@dataclass(frozen=True)
class GoUp:
    pass


@dataclass(frozen=True)
class InitiateDelete:
    pass


@dataclass(frozen=True)
class InitiateRename:
    pass


@dataclass(frozen=True)
class InitiateCopy:
    pass


@dataclass(frozen=True)
class InitiateMove:
    pass


@dataclass(frozen=True)
class InitiateSearch:
    pass


@dataclass(frozen=True)
class ClearFilter:
    pass


@dataclass(frozen=True)
class Confirm:
    accepted: bool


@dataclass(frozen=True)
class SubmitText:
    text: str


@dataclass(frozen=True)
class Cancel:
    pass


@dataclass(frozen=True)
class ToggleBookmark:
    pass


@dataclass(frozen=True)
class OpenBookmarks:
    pass


@dataclass(frozen=True)
class MoveBookmarkSelection:
    delta: int


@dataclass(frozen=True)
class SelectBookmark:
    """Jump to bookmark ``index``; ``None`` means the highlighted one."""

    index: int | None = None


@dataclass(frozen=True)
class OpenHelp:
    pass


@dataclass(frozen=True)
class Dismiss:
    pass


@dataclass(frozen=True)
class OpenWithSystem:
    pass


@dataclass(frozen=True)
class Refresh:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Intent = (
    SelectIndex
    | MoveSelection
    | Activate
    | GoUp
    | InitiateDelete
    | InitiateRename
    | InitiateCopy
    | InitiateMove
    | InitiateSearch
    | ClearFilter
    | Confirm
    | SubmitText
    | Cancel
    | ToggleBookmark
    | OpenBookmarks
    | MoveBookmarkSelection
    | SelectBookmark
    | OpenHelp
    | Dismiss
    | OpenWithSystem
    | Refresh
    | Quit
)


__all__ = [
    "SelectIndex",
    "MoveSelection",
    "Activate",
    "GoUp",
    "InitiateDelete",
    "InitiateRename",
    "InitiateCopy",
    "InitiateMove",
    "InitiateSearch",
    "ClearFilter",
    "Confirm",
    "SubmitText",
    "Cancel",
    "ToggleBookmark",
    "OpenBookmarks",
    "MoveBookmarkSelection",
    "SelectBookmark",
    "OpenHelp",
    "Dismiss",
    "OpenWithSystem",
    "Refresh",
    "Quit",
    "Intent",
]
