"""Help content and centered modal drawing.

Help lines are built from the resolved keymap so overridden keys show up.
Rendering helpers here are presentation-only and side-effect free.
"""

from __future__ import annotations

from ..input.keymap import ACTION_DESCRIPTIONS, Keymap
from .ansi import clip_ansi_line, display_width

KEY_STYLE = "\033[38;5;229m"
HEADING_STYLE = "\033[1;38;5;81m"
FRAME_STYLE = "\033[38;5;45m"
TITLE_STYLE = "\033[1;38;5;45m"
DIM_STYLE = "\033[2;38;5;250m"
RESET = "\033[0m"

HELP_SECTIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Navigation", ("move_up", "move_down", "page_up", "page_down", "first", "last", "activate", "go_up")),
    ("Files", ("open", "delete", "rename", "copy", "move", "refresh")),
    ("Bookmarks + search", ("toggle_bookmark", "list_bookmarks", "search", "clear_filter")),
    ("General", ("help", "quit")),
)


def help_lines(keymap: Keymap) -> list[str]:
    """Return styled help rows grouped by section."""
    lines: list[str] = []
    for heading, actions in HELP_SECTIONS:
        if lines:
            lines.append("")
        lines.append(f"{HEADING_STYLE}{heading}{RESET}")
        for action in actions:
            keys = keymap.describe_keys(action)
            if not keys:
                continue
            lines.append(f"  {KEY_STYLE}{keys}{RESET}  {ACTION_DESCRIPTIONS[action]}")
    return lines


def draw_modal(
    width: int,
    height: int,
    title: str,
    lines: list[str],
    footer: str = "",
    *,
    min_width: int = 40,
    max_width: int = 84,
) -> str:
    """Return cursor-positioned output drawing a rounded modal box."""
    body = list(lines)
    if footer:
        body.extend(["", f"{DIM_STYLE}{footer}{RESET}"])
    content_w = max([display_width(line) for line in body] + [display_width(title) + 2])
    modal_w = min(max_width, max(min_width, content_w + 4), max(4, width))
    modal_h = min(len(body) + 3, max(3, height))
    x = max(0, (width - modal_w) // 2)
    y = max(0, (height - modal_h) // 2)
    inner_w = max(1, modal_w - 2)
    inner_h = max(1, modal_h - 2)

    out: list[str] = []
    out.append(f"\033[{y + 1};{x + 1}H{FRAME_STYLE}╭")
    out.append("─" * inner_w)
    out.append(f"╮{RESET}")
    for i in range(inner_h):
        out.append(f"\033[{y + 2 + i};{x + 1}H{FRAME_STYLE}│{RESET}")
        out.append(" " * inner_w)
        out.append(f"{FRAME_STYLE}│{RESET}")
    out.append(f"\033[{y + modal_h};{x + 1}H{FRAME_STYLE}╰")
    out.append("─" * inner_w)
    out.append(f"╯{RESET}")

    title_x = x + max(2, (modal_w - display_width(title)) // 2)
    out.append(f"\033[{y + 1};{title_x + 1}H{TITLE_STYLE}{clip_ansi_line(title, inner_w - 2)}{RESET}")

    body_rows = min(len(body), max(0, inner_h - 1))
    for i in range(body_rows):
        text = clip_ansi_line(body[i], inner_w - 2)
        out.append(f"\033[{y + 3 + i};{x + 3}H")
        out.append(text)
        out.append(RESET)
    return "".join(out)


__all__ = [
    "HELP_SECTIONS",
    "help_lines",
    "draw_modal",
]
