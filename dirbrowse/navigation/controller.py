"""Navigation controller: intent dispatch and the interaction-mode machine.

The controller is the single writer of directory state, selection, mode, and
status text. It runs on the control path only; background preview results
reach it through ``PreviewEngine.take_result`` when ``poll`` is called.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from ..errors import DirectoryListingError, InvalidNameError, NotADirectoryPathError, OperationFailedError
from ..file_ops import FileOperationExecutor
from ..launcher import open_with_system
from ..preview import LoadingPreview, PreviewContent, PreviewEngine, Unavailable, is_likely_text
from ..state import DirectoryState, VisibleEntry, parent_of
from . import intents
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

logger = logging.getLogger(__name__)

COPY_SUFFIX = ".copy"


def clamp_index(index: int, count: int) -> int | None:
    """Clamp ``index`` into ``[0, count - 1]``; ``None`` for an empty list."""
    if count <= 0:
        return None
    return max(0, min(index, count - 1))


class NavigationController:
    """Orchestrates directory state, previews, and file operations."""

    def __init__(
        self,
        directory: DirectoryState,
        preview: PreviewEngine,
        executor: FileOperationExecutor | None = None,
        *,
        text_extensions: Iterable[str] = (),
        open_path: Callable[[Path], str | None] = open_with_system,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.directory = directory
        self.preview = preview
        self.executor = executor if executor is not None else FileOperationExecutor()
        self.text_extensions = tuple(text_extensions)
        self._open_path = open_path
        self._on_change = on_change
        self._mode: Mode = Browsing()
        self._status = "Ready"
        self.selected_index: int | None = None
        self._preview_sequence: int | None = None
        self._preview_content: PreviewContent | LoadingPreview | None = None
        self.redraw_requested = True
        self._select_default_entry()
        self._request_selection_preview()

    # Published view state.

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def current_path(self) -> Path:
        return self.directory.current_path

    @property
    def bookmarks(self) -> tuple[Path, ...]:
        return self.directory.bookmarks

    def current_mode(self) -> ModeTag:
        return self._mode.tag

    def current_visible_list(self) -> list[VisibleEntry]:
        return self.directory.visible_entries()

    def current_preview_content(self) -> PreviewContent | LoadingPreview:
        if self._preview_content is None:
            return Unavailable(reason="Nothing selected")
        return self._preview_content

    def status_message(self) -> str:
        return self._status

    def selected_entry(self) -> VisibleEntry | None:
        rows = self.current_visible_list()
        index = clamp_index(self.selected_index if self.selected_index is not None else 0, len(rows))
        if index is None:
            return None
        return rows[index]

    def consume_redraw(self) -> bool:
        """Return whether a redraw was requested and clear the request."""
        requested = self.redraw_requested
        self.redraw_requested = False
        return requested

    def _changed(self) -> None:
        self.redraw_requested = True
        if self._on_change is not None:
            self._on_change()

    # Control-path entry points.

    def poll(self) -> bool:
        """Drain the preview mailbox; return whether the preview changed."""
        result = self.preview.take_result()
        if result is None:
            return False
        if self._preview_sequence is None or result.sequence != self._preview_sequence:
            logger.debug("Ignoring preview #%d (waiting for %s)", result.sequence, self._preview_sequence)
            return False
        self._preview_content = result.content
        self._changed()
        return True

    def dispatch(self, intent: intents.Intent) -> bool:
        """Apply one user intent; return whether it changed anything."""
        mode = self._mode
        if isinstance(mode, Terminated):
            return False
        if isinstance(intent, intents.Quit):
            self._mode = Terminated()
            self._changed()
            return True

        if isinstance(mode, Browsing):
            handled = self._dispatch_browsing(intent)
        elif isinstance(mode, AwaitingConfirmation):
            handled = self._dispatch_confirmation(mode, intent)
        elif isinstance(mode, AwaitingTextInput):
            handled = self._dispatch_text_input(mode, intent)
        elif isinstance(mode, ShowingBookmarks):
            handled = self._dispatch_bookmarks(mode, intent)
        else:
            handled = self._dispatch_help(intent)

        if handled:
            self._changed()
        else:
            logger.debug("Ignoring %s in %s mode", type(intent).__name__, mode.tag.value)
        return handled

    # Mode handlers.

    def _dispatch_browsing(self, intent: intents.Intent) -> bool:
        if isinstance(intent, intents.SelectIndex):
            return self._select(intent.index)
        if isinstance(intent, intents.MoveSelection):
            current = self.selected_index if self.selected_index is not None else 0
            return self._select(current + intent.delta)
        if isinstance(intent, intents.Activate):
            return self._activate()
        if isinstance(intent, intents.GoUp):
            return self._go_up()
        if isinstance(intent, intents.InitiateDelete):
            return self._initiate_operation(OperationKind.DELETE)
        if isinstance(intent, intents.InitiateRename):
            return self._initiate_operation(OperationKind.RENAME)
        if isinstance(intent, intents.InitiateCopy):
            return self._initiate_operation(OperationKind.COPY)
        if isinstance(intent, intents.InitiateMove):
            return self._initiate_operation(OperationKind.MOVE)
        if isinstance(intent, intents.InitiateSearch):
            self._mode = AwaitingTextInput(
                kind=TextInputKind.SEARCH,
                initial_text=self.directory.search_filter,
            )
            return True
        if isinstance(intent, intents.ClearFilter):
            if not self.directory.search_filter:
                return False
            self._apply_filter("")
            return True
        if isinstance(intent, intents.ToggleBookmark):
            path = self.directory.current_path
            if self.directory.toggle_bookmark(path):
                self._status = f"Bookmarked: {path}"
            else:
                self._status = f"Removed bookmark: {path}"
            return True
        if isinstance(intent, intents.OpenBookmarks):
            if not self.directory.bookmarks:
                self._status = "No bookmarks set"
                return True
            self._mode = ShowingBookmarks(selected=0)
            return True
        if isinstance(intent, intents.OpenHelp):
            self._mode = ShowingHelp()
            return True
        if isinstance(intent, intents.OpenWithSystem):
            entry = self._selected_real_entry()
            if entry is None:
                return False
            error = self._open_path(entry.path)
            self._status = error if error is not None else f"Opened: {entry.label}"
            return True
        if isinstance(intent, intents.Refresh):
            self._refresh_listing()
            return True
        return False

    def _dispatch_confirmation(self, mode: AwaitingConfirmation, intent: intents.Intent) -> bool:
        if isinstance(intent, (intents.Cancel, intents.Dismiss)):
            intent = intents.Confirm(accepted=False)
        if not isinstance(intent, intents.Confirm):
            return False
        self._mode = Browsing()
        if not intent.accepted:
            self._status = "Cancelled"
            return True
        self._execute(mode.pending)
        return True

    def _dispatch_text_input(self, mode: AwaitingTextInput, intent: intents.Intent) -> bool:
        if isinstance(intent, (intents.Cancel, intents.Dismiss)):
            self._mode = Browsing()
            self._status = "Cancelled"
            return True
        if not isinstance(intent, intents.SubmitText):
            return False

        self._mode = Browsing()
        if mode.kind is TextInputKind.SEARCH:
            self._apply_filter(intent.text)
            return True

        pending = mode.pending
        if pending is None:
            return True
        text = intent.text
        if pending.kind is OperationKind.RENAME:
            self._execute(PendingOperation(kind=pending.kind, source_path=pending.source_path, new_name=text))
            return True

        if not text.strip():
            self._status = f"{pending.kind.value.capitalize()} cancelled: empty destination"
            return True
        destination = self._resolve_destination(text)
        self._execute(
            PendingOperation(kind=pending.kind, source_path=pending.source_path, destination_path=destination)
        )
        return True

    def _dispatch_bookmarks(self, mode: ShowingBookmarks, intent: intents.Intent) -> bool:
        bookmarks = self.directory.bookmarks
        if isinstance(intent, (intents.Cancel, intents.Dismiss)):
            self._mode = Browsing()
            return True
        if isinstance(intent, intents.MoveBookmarkSelection):
            selected = clamp_index(mode.selected + intent.delta, len(bookmarks))
            self._mode = ShowingBookmarks(selected=selected or 0)
            return True
        if isinstance(intent, intents.SelectBookmark):
            index = mode.selected if intent.index is None else intent.index
            self._mode = Browsing()
            if not 0 <= index < len(bookmarks):
                self._status = "No such bookmark"
                return True
            self._change_directory(bookmarks[index])
            return True
        return False

    def _dispatch_help(self, intent: intents.Intent) -> bool:
        if isinstance(intent, (intents.Cancel, intents.Dismiss)):
            self._mode = Browsing()
            return True
        return False

    # Browsing helpers.

    def _select(self, index: int) -> bool:
        rows = self.current_visible_list()
        selected = clamp_index(index, len(rows))
        if selected is None or selected == self.selected_index:
            return False
        self.selected_index = selected
        self._request_selection_preview()
        return True

    def _selected_real_entry(self) -> VisibleEntry | None:
        entry = self.selected_entry()
        if entry is None or entry.is_parent:
            self._status = "Nothing selected"
            return None
        return entry

    def _activate(self) -> bool:
        entry = self.selected_entry()
        if entry is None:
            return False
        if entry.is_parent:
            return self._go_up()
        if entry.is_directory:
            self._change_directory(entry.path)
            return True
        self._request_selection_preview()
        return True

    def _go_up(self) -> bool:
        previous = self.directory.current_path
        parent = parent_of(previous)
        if parent is None:
            return False
        if self._change_directory(parent):
            self._select_path(previous)
        return True

    def _initiate_operation(self, kind: OperationKind) -> bool:
        entry = self._selected_real_entry()
        if entry is None:
            return True
        current = self.directory.current_path
        if kind is OperationKind.DELETE:
            self._mode = AwaitingConfirmation(pending=PendingOperation(kind=kind, source_path=entry.path))
            return True
        if kind is OperationKind.RENAME:
            initial_text = entry.label
            input_kind = TextInputKind.RENAME
        elif kind is OperationKind.COPY:
            initial_text = str(current / f"{entry.label}{COPY_SUFFIX}")
            input_kind = TextInputKind.COPY
        else:
            initial_text = str(current / entry.label)
            input_kind = TextInputKind.MOVE
        self._mode = AwaitingTextInput(
            kind=input_kind,
            initial_text=initial_text,
            pending=PendingOperation(kind=kind, source_path=entry.path),
        )
        return True

    def _resolve_destination(self, text: str) -> Path:
        destination = Path(text.strip()).expanduser()
        if not destination.is_absolute():
            destination = self.directory.current_path / destination
        return destination

    def _apply_filter(self, text: str) -> None:
        self.directory.set_filter(text)
        self._select_default_entry()
        self._request_selection_preview()
        self._status = f"Filter: {text}" if text else "Filter cleared"

    def _execute(self, pending: PendingOperation) -> None:
        """Run ``pending`` and refresh the listing whatever the outcome."""
        source = pending.source_path
        keep_name: str | None = source.name
        try:
            if pending.kind is OperationKind.DELETE:
                self.executor.delete(source)
                self._status = f"Deleted: {source.name}"
            elif pending.kind is OperationKind.RENAME:
                new_path = self.executor.rename(source, pending.new_name or "")
                keep_name = new_path.name
                self._status = f"Renamed to: {new_path.name}"
            else:
                destination = pending.destination_path
                verb = "Copy" if pending.kind is OperationKind.COPY else "Move"
                if destination is None:
                    raise OperationFailedError(f"{verb} failed: no destination given")
                if pending.kind is OperationKind.COPY:
                    self.executor.copy(source, destination)
                    self._status = f"Copied to: {destination}"
                else:
                    self.executor.move(source, destination)
                    self._status = f"Moved to: {destination}"
        except InvalidNameError as exc:
            self._status = str(exc)
            return
        except OperationFailedError as exc:
            self._status = exc.reason
        self._refresh_listing(keep_name=keep_name, keep_status=True)

    # Directory helpers.

    def _change_directory(self, path: Path) -> bool:
        try:
            self.directory.change_directory(path)
        except (NotADirectoryPathError, DirectoryListingError) as exc:
            self._status = str(exc)
            return False
        self._status = "Ready"
        self._select_default_entry()
        self._request_selection_preview()
        return True

    def _refresh_listing(self, keep_name: str | None = None, keep_status: bool = False) -> None:
        previous = self.selected_entry()
        if keep_name is None and previous is not None and not previous.is_parent:
            keep_name = previous.label
        try:
            self.directory.refresh()
        except DirectoryListingError as exc:
            self._status = str(exc)
        else:
            if not keep_status:
                self._status = "Refreshed"

        rows = self.current_visible_list()
        if keep_name is not None:
            for idx, row in enumerate(rows):
                if not row.is_parent and row.label == keep_name:
                    self.selected_index = idx
                    break
            else:
                self.selected_index = clamp_index(self.selected_index or 0, len(rows))
        else:
            self.selected_index = clamp_index(self.selected_index or 0, len(rows))
        self._request_selection_preview()

    def _select_default_entry(self) -> None:
        rows = self.current_visible_list()
        if len(rows) > 1 and rows[0].is_parent:
            self.selected_index = 1
        else:
            self.selected_index = clamp_index(0, len(rows))

    def _select_path(self, path: Path) -> None:
        for idx, row in enumerate(self.current_visible_list()):
            if not row.is_parent and row.path == path:
                if idx != self.selected_index:
                    self.selected_index = idx
                    self._request_selection_preview()
                return

    def _request_selection_preview(self) -> None:
        entry = self.selected_entry() if self.selected_index is not None else None
        if entry is None:
            self._preview_sequence = None
            self._preview_content = None
            return
        text_like = not entry.is_directory and is_likely_text(entry.label, self.text_extensions)
        self._preview_content = LoadingPreview(path=entry.path)
        self._preview_sequence = self.preview.request_preview(entry.path, text_like)
        self.poll()


__all__ = [
    "COPY_SUFFIX",
    "clamp_index",
    "NavigationController",
]
