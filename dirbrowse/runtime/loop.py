"""Main interactive event loop for the terminal UI.

Each iteration drains the preview mailbox, redraws when the controller asked
for it, reads one key with a short timeout, and dispatches the resulting
intent. Intents are processed strictly one at a time on this thread.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass

from ..input import (
    BrowsingKeyHandler,
    Keymap,
    TextInputBuffer,
    bookmarks_intent,
    confirmation_intent,
    help_intent,
    read_key,
)
from ..navigation import (
    AwaitingConfirmation,
    AwaitingTextInput,
    Mode,
    ModeTag,
    NavigationController,
    ShowingBookmarks,
    ShowingHelp,
)
from ..navigation.intents import Intent
from ..render import PreviewRenderer, adjust_list_start, build_frame
from .terminal import TerminalController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_poll_ms: int = 50


def key_to_intent(
    mode: Mode,
    key: str,
    browsing_keys: BrowsingKeyHandler,
    input_buffer: TextInputBuffer,
    *,
    list_length: int,
    page_rows: int,
) -> Intent | None:
    """Translate ``key`` into an intent for the current ``mode``."""
    if isinstance(mode, AwaitingConfirmation):
        return confirmation_intent(key)
    if isinstance(mode, AwaitingTextInput):
        return input_buffer.handle_key(key)
    if isinstance(mode, ShowingBookmarks):
        return bookmarks_intent(key)
    if isinstance(mode, ShowingHelp):
        return help_intent(key)
    return browsing_keys.handle_key(key, list_length=list_length, page_rows=page_rows)


def run_main_loop(
    controller: NavigationController,
    terminal: TerminalController,
    keymap: Keymap,
    preview_renderer: PreviewRenderer,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
) -> None:
    """Run the interactive loop until the controller reaches ``Terminated``."""
    browsing_keys = BrowsingKeyHandler(keymap)
    input_buffer = TextInputBuffer()
    list_start = 0
    last_size: tuple[int, int] | None = None
    last_text_mode: AwaitingTextInput | None = None

    with terminal.raw_mode():
        while controller.current_mode() is not ModeTag.TERMINATED:
            term = shutil.get_terminal_size((80, 24))
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                terminal.clear()
                controller.redraw_requested = True

            controller.poll()

            mode = controller.mode
            if isinstance(mode, AwaitingTextInput):
                if mode is not last_text_mode:
                    input_buffer.reset(mode.initial_text)
                    last_text_mode = mode
            else:
                last_text_mode = None

            visible_rows = max(1, term.lines - 2)
            list_length = len(controller.current_visible_list())
            new_start = adjust_list_start(controller.selected_index, list_start, visible_rows, list_length)
            if new_start != list_start:
                list_start = new_start
                controller.redraw_requested = True

            if controller.consume_redraw():
                frame = build_frame(
                    controller,
                    term.columns,
                    term.lines,
                    list_start=list_start,
                    preview_renderer=preview_renderer,
                    keymap=keymap,
                    input_buffer=input_buffer,
                )
                os.write(terminal.stdout_fd, frame.encode("utf-8", errors="replace"))

            key = read_key(terminal.stdin_fd, timeout_ms=timing.key_poll_ms)
            if not key:
                continue

            intent = key_to_intent(
                mode,
                key,
                browsing_keys,
                input_buffer,
                list_length=list_length,
                page_rows=visible_rows,
            )
            if intent is None:
                if isinstance(mode, AwaitingTextInput):
                    # Buffer edits are presentation-only but still need a repaint.
                    controller.redraw_requested = True
                continue
            logger.debug("Key %r -> %s", key, type(intent).__name__)
            controller.dispatch(intent)


__all__ = [
    "RuntimeLoopTiming",
    "key_to_intent",
    "run_main_loop",
]
