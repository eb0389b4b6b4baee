"""Logical browser actions and the key tokens that trigger them.

The keymap is resolved once at startup from defaults plus config overrides.
Only the input layer knows key tokens; the controller sees intents.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

logger = logging.getLogger(__name__)

DEFAULT_KEYBINDINGS: dict[str, tuple[str, ...]] = {
    "move_up": ("UP", "k"),
    "move_down": ("DOWN", "j"),
    "page_up": ("PAGE_UP",),
    "page_down": ("PAGE_DOWN",),
    "first": ("HOME", "g"),
    "last": ("END", "G"),
    "activate": ("ENTER", "RIGHT", "l"),
    "go_up": ("BACKSPACE", "LEFT"),
    "open": ("o",),
    "delete": ("d",),
    "rename": ("r",),
    "copy": ("c",),
    "move": ("m",),
    "toggle_bookmark": ("b",),
    "list_bookmarks": ("B",),
    "search": ("/",),
    "clear_filter": ("ESC",),
    "refresh": ("CTRL_L",),
    "help": ("h", "?"),
    "quit": ("q", "CTRL_C"),
}

ACTION_DESCRIPTIONS: dict[str, str] = {
    "move_up": "Move up",
    "move_down": "Move down",
    "page_up": "Page up",
    "page_down": "Page down",
    "first": "First entry",
    "last": "Last entry",
    "activate": "Open directory / preview file",
    "go_up": "Go up",
    "open": "Open with system default",
    "delete": "Delete",
    "rename": "Rename",
    "copy": "Copy",
    "move": "Move",
    "toggle_bookmark": "Bookmark toggle",
    "list_bookmarks": "List bookmarks",
    "search": "Search",
    "clear_filter": "Clear search filter",
    "refresh": "Refresh listing",
    "help": "Help",
    "quit": "Quit",
}


class Keymap:
    """Resolved action-to-keys table with reverse lookup."""

    def __init__(self, bindings: Mapping[str, tuple[str, ...]]) -> None:
        self._bindings = {action: tuple(keys) for action, keys in bindings.items()}

    @classmethod
    def with_overrides(cls, overrides: Mapping[str, tuple[str, ...]]) -> Keymap:
        """Merge config overrides over defaults; unknown actions are dropped."""
        merged = dict(DEFAULT_KEYBINDINGS)
        overridden: dict[str, tuple[str, ...]] = {}
        for action, keys in overrides.items():
            if action not in DEFAULT_KEYBINDINGS:
                logger.warning("Ignoring keybinding for unknown action %r", action)
                continue
            overridden[action] = tuple(keys)
        # Overridden keys win over any default that used the same token.
        claimed = {key for keys in overridden.values() for key in keys}
        for action, keys in merged.items():
            if action in overridden:
                merged[action] = overridden[action]
            else:
                merged[action] = tuple(key for key in keys if key not in claimed)
        return cls(merged)

    def keys_for(self, action: str) -> tuple[str, ...]:
        return self._bindings.get(action, ())

    def actions(self) -> tuple[str, ...]:
        return tuple(self._bindings)

    def describe_keys(self, action: str) -> str:
        return "/".join(_key_label(key) for key in self.keys_for(action))


def _key_label(key: str) -> str:
    labels = {
        "UP": "Up",
        "DOWN": "Down",
        "LEFT": "Left",
        "RIGHT": "Right",
        "ENTER": "Enter",
        "BACKSPACE": "Backspace",
        "ESC": "Esc",
        "PAGE_UP": "PgUp",
        "PAGE_DOWN": "PgDn",
        "HOME": "Home",
        "END": "End",
        "CTRL_L": "Ctrl+L",
        "CTRL_C": "Ctrl+C",
        "CTRL_U": "Ctrl+U",
    }
    return labels.get(key, key)


__all__ = [
    "DEFAULT_KEYBINDINGS",
    "ACTION_DESCRIPTIONS",
    "Keymap",
]
