"""Input-layer public API for key decoding and intent translation.

Exports are split between low-level terminal decoding (`read_key`) and the
mode handlers the runtime loop uses to turn keys into intents.
"""

from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key
from .key_registry import KeyComboBinding, KeyComboRegistry
from .keymap import ACTION_DESCRIPTIONS, DEFAULT_KEYBINDINGS, Keymap
from .keys import (
    BrowsingKeyHandler,
    TextInputBuffer,
    bookmarks_intent,
    confirmation_intent,
    help_intent,
)

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "ACTION_DESCRIPTIONS",
    "DEFAULT_KEYBINDINGS",
    "Keymap",
    "BrowsingKeyHandler",
    "TextInputBuffer",
    "bookmarks_intent",
    "confirmation_intent",
    "help_intent",
]
