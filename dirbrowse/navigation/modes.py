"""Interaction modes of the navigation state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ModeTag(Enum):
    BROWSING = "browsing"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    AWAITING_TEXT_INPUT = "awaiting_text_input"
    SHOWING_BOOKMARKS = "showing_bookmarks"
    SHOWING_HELP = "showing_help"
    TERMINATED = "terminated"


class OperationKind(Enum):
    DELETE = "delete"
    RENAME = "rename"
    COPY = "copy"
    MOVE = "move"


class TextInputKind(Enum):
    RENAME = "rename"
    COPY = "copy"
    MOVE = "move"
    SEARCH = "search"


@dataclass(frozen=True)
class PendingOperation:
    """Destructive action staged until the user confirms or cancels."""

    kind: OperationKind
    source_path: Path
    destination_path: Path | None = None
    new_name: str | None = None


@dataclass(frozen=True)
class Browsing:
    tag: ModeTag = ModeTag.BROWSING


@dataclass(frozen=True)
class AwaitingConfirmation:
    pending: PendingOperation
    tag: ModeTag = ModeTag.AWAITING_CONFIRMATION


@dataclass(frozen=True)
class AwaitingTextInput:
    """Prompt for text; ``pending`` names the operation the text completes."""

    kind: TextInputKind
    initial_text: str
    pending: PendingOperation | None = None
    tag: ModeTag = ModeTag.AWAITING_TEXT_INPUT


@dataclass(frozen=True)
class ShowingBookmarks:
    selected: int = 0
    tag: ModeTag = ModeTag.SHOWING_BOOKMARKS


@dataclass(frozen=True)
class ShowingHelp:
    tag: ModeTag = ModeTag.SHOWING_HELP


@dataclass(frozen=True)
class Terminated:
    tag: ModeTag = ModeTag.TERMINATED


Mode = Browsing | AwaitingConfirmation | AwaitingTextInput | ShowingBookmarks | ShowingHelp | Terminated


__all__ = [
    "ModeTag",
    "OperationKind",
    "TextInputKind",
    "PendingOperation",
    "Browsing",
    "AwaitingConfirmation",
    "AwaitingTextInput",
    "ShowingBookmarks",
    "ShowingHelp",
    "Terminated",
    "Mode",
]
