"""Two-pane frame composition and mode overlays.

``build_frame`` is a pure function of the controller's published view state
plus presentation-only inputs (scroll offset, text-input buffer, keymap). It
returns one string of cursor-positioned output for the terminal.
"""

from __future__ import annotations

import time
from pathlib import Path

from ..input.keymap import Keymap
from ..input.keys import TextInputBuffer
from ..navigation import (
    AwaitingConfirmation,
    AwaitingTextInput,
    NavigationController,
    ShowingBookmarks,
    ShowingHelp,
    TextInputKind,
)
from ..preview import LoadingPreview, MetadataPreview, PreviewContent, TextPreview, Unavailable
from ..state import VisibleEntry
from .ansi import fit_ansi_line
from .help import draw_modal, help_lines
from .highlight import sanitize_terminal_text

SELECTED_STYLE = "\033[7m"
DIR_STYLE = "\033[1;38;5;75m"
HEADER_STYLE = "\033[1;38;5;81m"
STATUS_STYLE = "\033[48;5;236;38;5;252m"
STATUS_DIR_STYLE = "\033[48;5;236;38;5;221m"
SEPARATOR = "\033[38;5;240m│\033[0m"
RESET = "\033[0m"

TEXT_INPUT_TITLES: dict[TextInputKind, tuple[str, str]] = {
    TextInputKind.RENAME: ("Rename", "New name:"),
    TextInputKind.COPY: ("Copy to", "Destination path:"),
    TextInputKind.MOVE: ("Move to", "Destination path:"),
    TextInputKind.SEARCH: ("Search", "Filter filenames:"),
}


def format_size(n: int) -> str:
    """Human-readable byte count (B, KB, MB, GB)."""
    if n < 1024:
        return f"{n} B"
    value = n / 1024.0
    for unit in ("KB", "MB"):
        if value < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024.0
    return f"{value:.1f} GB"


def format_mtime(timestamp: float | None) -> str:
    if timestamp is None:
        return "unknown"
    return time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(timestamp))


def adjust_list_start(selected: int | None, start: int, visible_rows: int, total: int) -> int:
    """Scroll offset keeping ``selected`` inside a ``visible_rows`` window."""
    visible_rows = max(1, visible_rows)
    if selected is not None:
        if selected < start:
            start = selected
        elif selected >= start + visible_rows:
            start = selected - visible_rows + 1
    return max(0, min(start, max(0, total - visible_rows)))


def entry_label(entry: VisibleEntry, width: int) -> str:
    """Plain-text label for one list row, with the file size right-aligned."""
    if entry.is_parent:
        return "[..] Go up"
    if entry.is_directory:
        return f"[DIR] {entry.label}"
    if entry.size is None:
        return entry.label
    size_text = format_size(entry.size)
    gap = width - len(entry.label) - len(size_text)
    if gap < 2:
        return entry.label
    return f"{entry.label}{' ' * gap}{size_text}"


class PreviewRenderer:
    """Turn preview content into display lines, caching the last result.

    Text is never highlighted here; colour comes from the ``highlighted``
    field filled in by the preview worker.
    """

    def __init__(self, no_color: bool = False, open_hint: str = "o") -> None:
        self.no_color = no_color
        self.open_hint = open_hint
        # The cached content object is held so its id() cannot be reused.
        self._cache_key: tuple[int, Path | None] | None = None
        self._cache_content: object | None = None
        self._cache_lines: list[str] = []

    def lines_for(self, content: PreviewContent | LoadingPreview, path: Path | None) -> list[str]:
        key = (id(content), path)
        if key == self._cache_key:
            return self._cache_lines
        lines = self._build(content, path)
        self._cache_key = key
        self._cache_content = content
        self._cache_lines = lines
        return lines

    def _build(self, content: PreviewContent | LoadingPreview, path: Path | None) -> list[str]:
        if isinstance(content, LoadingPreview):
            return ["Loading preview..."]
        if isinstance(content, Unavailable):
            return [f"({content.reason})"]
        if isinstance(content, MetadataPreview):
            name = path.name if path is not None else ""
            if content.is_directory:
                return [
                    f"[DIR] {name}",
                    "",
                    f"Modified: {format_mtime(content.modified_at)}",
                ]
            size = format_size(content.size) if content.size is not None else "unknown"
            return [
                name,
                f"Size: {size}",
                f"Modified: {format_mtime(content.modified_at)}",
                "",
                f"(No text preview available. Press '{self.open_hint}' to open with system default.)",
            ]
        if isinstance(content, TextPreview):
            if content.highlighted and not self.no_color:
                text = content.highlighted
            else:
                text = sanitize_terminal_text(content.content)
            return text.splitlines() or [""]
        return []


def _overlay(controller: NavigationController, width: int, height: int, keymap: Keymap, buffer: TextInputBuffer) -> str:
    mode = controller.mode
    if isinstance(mode, AwaitingConfirmation):
        name = mode.pending.source_path.name
        return draw_modal(
            width,
            height,
            "Confirm",
            [f"Delete '{name}'? This cannot be undone."],
            footer="y/Enter: yes   n/Esc: no",
        )
    if isinstance(mode, AwaitingTextInput):
        title, label = TEXT_INPUT_TITLES[mode.kind]
        before = buffer.text[: buffer.cursor]
        at = buffer.text[buffer.cursor : buffer.cursor + 1] or " "
        after = buffer.text[buffer.cursor + 1 :]
        return draw_modal(
            width,
            height,
            title,
            [label, f"{before}{SELECTED_STYLE}{at}{RESET}{after}"],
            footer="Enter: OK   Esc: cancel",
            min_width=min(70, max(40, width - 10)),
        )
    if isinstance(mode, ShowingBookmarks):
        lines = []
        for idx, path in enumerate(controller.bookmarks):
            if idx == mode.selected:
                lines.append(f"{SELECTED_STYLE}> {path}{RESET}")
            else:
                lines.append(f"  {path}")
        return draw_modal(width, height, "Bookmarks", lines, footer="Enter: go   Esc: close")
    if isinstance(mode, ShowingHelp):
        return draw_modal(width, height, "dirbrowse help", help_lines(keymap), footer="Press any key to close")
    return ""


def build_frame(
    controller: NavigationController,
    width: int,
    height: int,
    *,
    list_start: int,
    preview_renderer: PreviewRenderer,
    keymap: Keymap,
    input_buffer: TextInputBuffer,
) -> str:
    """Compose the full screen for the controller's current view state."""
    width = max(20, width)
    height = max(4, height)
    left_w = max(12, (width * 3) // 8)
    right_w = max(1, width - left_w - 1)
    body_rows = height - 2

    rows = controller.current_visible_list()
    selected = controller.selected_index
    selected_entry = controller.selected_entry()
    preview_path = selected_entry.path if selected_entry is not None else None
    preview_lines = preview_renderer.lines_for(controller.current_preview_content(), preview_path)

    filter_text = controller.directory.search_filter
    files_title = f"Files [/{filter_text}]" if filter_text else "Files"
    preview_title = f"Preview: {preview_path.name}" if preview_path is not None else "Preview"

    out: list[str] = ["\033[H"]
    header = (
        fit_ansi_line(f"{HEADER_STYLE}{files_title}{RESET}", left_w)
        + SEPARATOR
        + fit_ansi_line(f"{HEADER_STYLE}{preview_title}{RESET}", right_w)
    )
    out.append(f"\033[1;1H{header}")

    for row in range(body_rows):
        idx = list_start + row
        left = ""
        if idx < len(rows):
            entry = rows[idx]
            label = entry_label(entry, left_w - 1)
            if idx == selected:
                left = f"{SELECTED_STYLE}{label}{RESET}"
            elif entry.is_directory:
                left = f"{DIR_STYLE}{label}{RESET}"
            else:
                left = label
        right = preview_lines[row] if row < len(preview_lines) else ""
        line = fit_ansi_line(left, left_w) + SEPARATOR + fit_ansi_line(right, right_w)
        out.append(f"\033[{row + 2};1H{line}")

    status = (
        f"{STATUS_DIR_STYLE} Dir:{STATUS_STYLE} {controller.current_path}  |  {controller.status_message()}"
    )
    out.append(f"\033[{height};1H{fit_ansi_line(status, width)}{RESET}")
    out.append(_overlay(controller, width, height, keymap, input_buffer))
    return "".join(out)


__all__ = [
    "TEXT_INPUT_TITLES",
    "format_size",
    "format_mtime",
    "adjust_list_start",
    "entry_label",
    "PreviewRenderer",
    "build_frame",
]
