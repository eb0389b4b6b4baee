"""Presentation helpers: frame composition, overlays, and highlighting."""

from __future__ import annotations

from .frame import (
    PreviewRenderer,
    adjust_list_start,
    build_frame,
    entry_label,
    format_mtime,
    format_size,
)
from .help import draw_modal, help_lines
from .highlight import PreviewHighlighter, sanitize_terminal_text

__all__ = [
    "PreviewRenderer",
    "adjust_list_start",
    "build_frame",
    "entry_label",
    "format_mtime",
    "format_size",
    "draw_modal",
    "help_lines",
    "PreviewHighlighter",
    "sanitize_terminal_text",
]
