"""Preview text sanitization and syntax highlighting.

Highlighting runs on preview worker threads through ``PreviewHighlighter``;
the render path only picks up the finished ANSI text. Terminal control bytes
in file content are escaped before display.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

DEFAULT_STYLE = "monokai"


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


class PreviewHighlighter:
    """Callable that turns preview text into 256-colour ANSI for one style.

    Pygments is imported when the highlighter is built, not when this module
    is imported. Unknown styles fall back to ``DEFAULT_STYLE``. Files without
    a matching lexer are left uncoloured so plain text skips Pygments.
    """

    def __init__(self, style: str = DEFAULT_STYLE) -> None:
        from pygments import highlight
        from pygments.formatters import Terminal256Formatter
        from pygments.lexers import get_lexer_for_filename
        from pygments.styles import get_style_by_name
        from pygments.util import ClassNotFound

        self._highlight = highlight
        self._lexer_for_filename = get_lexer_for_filename
        self._class_not_found = ClassNotFound
        try:
            get_style_by_name(style)
        except ClassNotFound:
            logger.warning("Unknown Pygments style %r; using %s", style, DEFAULT_STYLE)
            style = DEFAULT_STYLE
        self.style = style
        self._formatter = Terminal256Formatter(style=style)

    def __call__(self, text: str, path: Path) -> str | None:
        """Return sanitized, highlighted ``text`` or ``None`` when not colourable."""
        try:
            lexer = self._lexer_for_filename(path.name, stripnl=False)
        except self._class_not_found:
            return None
        try:
            return self._highlight(sanitize_terminal_text(text), lexer, self._formatter)
        except Exception as exc:
            logger.debug("Highlighting failed for %s: %s", path, exc)
            return None


__all__ = [
    "DEFAULT_STYLE",
    "sanitize_terminal_text",
    "PreviewHighlighter",
]
