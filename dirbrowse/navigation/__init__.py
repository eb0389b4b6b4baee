"""Navigation controller, interaction modes, and user intents."""

from __future__ import annotations

from . import intents
from .controller import COPY_SUFFIX, NavigationController, clamp_index
from .modes import (
    AwaitingConfirmation,
    AwaitingTextInput,
    Browsing,
    Mode,
    ModeTag,
    OperationKind,
    PendingOperation,
    ShowingBookmarks,
    ShowingHelp,
    Terminated,
    TextInputKind,
)

__all__ = [
    "intents",
    "COPY_SUFFIX",
    "NavigationController",
    "clamp_index",
    "AwaitingConfirmation",
    "AwaitingTextInput",
    "Browsing",
    "Mode",
    "ModeTag",
    "OperationKind",
    "PendingOperation",
    "ShowingBookmarks",
    "ShowingHelp",
    "Terminated",
    "TextInputKind",
]
