"""Mode-aware translation of key tokens into controller intents."""

from __future__ import annotations

from ..navigation import intents
from ..navigation.intents import Intent
from .key_registry import KeyComboBinding, KeyComboRegistry
from .keymap import Keymap


class BrowsingKeyHandler:
    """Translate browsing-mode keys using the resolved keymap."""

    def __init__(self, keymap: Keymap) -> None:
        self.list_length = 0
        self.page_rows = 10
        factories = {
            "move_up": lambda: intents.MoveSelection(-1),
            "move_down": lambda: intents.MoveSelection(1),
            "page_up": lambda: intents.MoveSelection(-self.page_rows),
            "page_down": lambda: intents.MoveSelection(self.page_rows),
            "first": lambda: intents.SelectIndex(0),
            "last": lambda: intents.SelectIndex(max(0, self.list_length - 1)),
            "activate": intents.Activate,
            "go_up": intents.GoUp,
            "open": intents.OpenWithSystem,
            "delete": intents.InitiateDelete,
            "rename": intents.InitiateRename,
            "copy": intents.InitiateCopy,
            "move": intents.InitiateMove,
            "toggle_bookmark": intents.ToggleBookmark,
            "list_bookmarks": intents.OpenBookmarks,
            "search": intents.InitiateSearch,
            "clear_filter": intents.ClearFilter,
            "refresh": intents.Refresh,
            "help": intents.OpenHelp,
            "quit": intents.Quit,
        }
        self._registry = KeyComboRegistry().register_bindings(
            *(KeyComboBinding(keymap.keys_for(action), factory) for action, factory in factories.items())
        )

    def handle_key(self, key: str, *, list_length: int, page_rows: int) -> Intent | None:
        self.list_length = list_length
        self.page_rows = max(1, page_rows)
        return self._registry.dispatch(key)


def confirmation_intent(key: str) -> Intent | None:
    if key in {"y", "Y", "ENTER"}:
        return intents.Confirm(accepted=True)
    if key in {"n", "N", "ESC", "q"}:
        return intents.Confirm(accepted=False)
    if key == "CTRL_C":
        return intents.Quit()
    return None


def bookmarks_intent(key: str) -> Intent | None:
    if key in {"UP", "k"}:
        return intents.MoveBookmarkSelection(-1)
    if key in {"DOWN", "j"}:
        return intents.MoveBookmarkSelection(1)
    if key in {"ENTER", "RIGHT"}:
        return intents.SelectBookmark()
    if key in {"ESC", "q", "B"}:
        return intents.Dismiss()
    if key == "CTRL_C":
        return intents.Quit()
    return None


def help_intent(key: str) -> Intent | None:
    if key == "CTRL_C":
        return intents.Quit()
    if key:
        return intents.Dismiss()
    return None


class TextInputBuffer:
    """Single-line editor backing the text-input prompt."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.cursor = len(text)

    def reset(self, text: str) -> None:
        self.text = text
        self.cursor = len(text)

    def handle_key(self, key: str) -> Intent | None:
        """Apply an editing key; return an intent for submit/cancel keys."""
        if key == "ENTER":
            return intents.SubmitText(self.text)
        if key == "ESC":
            return intents.Cancel()
        if key == "CTRL_C":
            return intents.Quit()
        if key == "BACKSPACE":
            if self.cursor > 0:
                self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
                self.cursor -= 1
        elif key == "DELETE":
            self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]
        elif key == "LEFT":
            self.cursor = max(0, self.cursor - 1)
        elif key == "RIGHT":
            self.cursor = min(len(self.text), self.cursor + 1)
        elif key == "HOME":
            self.cursor = 0
        elif key == "END":
            self.cursor = len(self.text)
        elif key == "CTRL_U":
            self.text = ""
            self.cursor = 0
        elif len(key) == 1 and key.isprintable():
            self.text = self.text[: self.cursor] + key + self.text[self.cursor :]
            self.cursor += 1
        return None


__all__ = [
    "BrowsingKeyHandler",
    "confirmation_intent",
    "bookmarks_intent",
    "help_intent",
    "TextInputBuffer",
]
