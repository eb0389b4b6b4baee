"""Read-only JSON config helpers.

Holds keybinding overrides, preview limits, hidden-file preference, extra
text extensions, and the preview highlight style. All access is defensive:
malformed or missing config falls back to defaults. Nothing is written back;
bookmarks are kept in memory only.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

from ..preview import PREVIEW_MAX_BYTES, PREVIEW_MAX_LINES

logger = logging.getLogger(__name__)

APP_NAME = "dirbrowse"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH
DEFAULT_STYLE = "monokai"


@dataclass(frozen=True)
class BrowserSettings:
    """Startup settings resolved once from config."""

    preview_max_bytes: int = PREVIEW_MAX_BYTES
    preview_max_lines: int = PREVIEW_MAX_LINES
    show_hidden: bool = True
    style: str = DEFAULT_STYLE
    text_extensions: tuple[str, ...] = ()
    keybindings: dict[str, tuple[str, ...]] = field(default_factory=dict)


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_positive_int(value: object, default: int) -> int:
    """Booleans, non-integers, and values below 1 fall back to ``default``."""
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value if value > 0 else default


def _coerce_extensions(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    out: list[str] = []
    for item in value:
        if not isinstance(item, str) or not item.strip():
            continue
        ext = item.strip().lower()
        out.append(ext if ext.startswith(".") else f".{ext}")
    return tuple(out)


def _coerce_keybindings(value: object) -> dict[str, tuple[str, ...]]:
    """Keep ``{action: [key, ...]}`` pairs whose keys are non-empty strings."""
    if not isinstance(value, dict):
        return {}
    bindings: dict[str, tuple[str, ...]] = {}
    for action, raw_keys in value.items():
        if not isinstance(action, str):
            continue
        if isinstance(raw_keys, str):
            raw_keys = [raw_keys]
        if not isinstance(raw_keys, list):
            continue
        keys = tuple(key for key in raw_keys if isinstance(key, str) and key)
        if keys:
            bindings[action] = keys
    return bindings


def load_settings() -> BrowserSettings:
    """Resolve all startup settings from the config file."""
    data = load_config()
    show_hidden = data.get("show_hidden")
    style = data.get("style")
    return BrowserSettings(
        preview_max_bytes=_coerce_positive_int(data.get("preview_max_bytes"), PREVIEW_MAX_BYTES),
        preview_max_lines=_coerce_positive_int(data.get("preview_max_lines"), PREVIEW_MAX_LINES),
        show_hidden=show_hidden if isinstance(show_hidden, bool) else True,
        style=style.strip() if isinstance(style, str) and style.strip() else DEFAULT_STYLE,
        text_extensions=_coerce_extensions(data.get("text_extensions")),
        keybindings=_coerce_keybindings(data.get("keybindings")),
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_STYLE",
    "BrowserSettings",
    "load_config",
    "load_settings",
]
