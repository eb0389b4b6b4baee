"""Asynchronous preview loading with latest-request-wins delivery.

Every request gets a sequence number. Metadata previews are resolved on the
caller's thread; text previews are read, and optionally highlighted, on a
worker pool. Completed results land in a single-slot mailbox that keeps
only the newest sequence, so the control path never sees a stale preview
overwrite a fresher one.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from pathlib import Path

from .reader import PREVIEW_MAX_BYTES, PREVIEW_MAX_LINES, metadata_preview, read_text_preview
from .types import PreviewContent, PreviewRequest, PreviewResult, TextPreview, Unavailable

logger = logging.getLogger(__name__)

PREVIEW_WORKERS = 2


class PreviewEngine:
    """Produce previews off the control path and hand back only the latest."""

    def __init__(
        self,
        *,
        max_bytes: int = PREVIEW_MAX_BYTES,
        max_lines: int = PREVIEW_MAX_LINES,
        read_text: Callable[[Path, int, int], PreviewContent] = read_text_preview,
        read_metadata: Callable[[Path], PreviewContent] = metadata_preview,
        on_result: Callable[[], None] | None = None,
        highlight: Callable[[str, Path], str | None] | None = None,
        max_workers: int = PREVIEW_WORKERS,
    ) -> None:
        self.max_bytes = max_bytes
        self.max_lines = max_lines
        self._read_text = read_text
        self._read_metadata = read_metadata
        self._on_result = on_result
        self.highlight = highlight
        self._lock = threading.Lock()
        self._next_sequence = 1
        self._latest_sequence = 0
        self._slot: PreviewResult | None = None
        self._pool = ThreadPoolExecutor(
            max_workers=max(1, max_workers),
            thread_name_prefix="dirbrowse-preview",
        )

    @property
    def latest_sequence(self) -> int:
        """Highest sequence number issued so far (0 before any request)."""
        with self._lock:
            return self._latest_sequence

    def request_preview(self, path: Path, is_likely_text: bool) -> int:
        """Issue a preview request for ``path`` and return its sequence number.

        Directories and non-text files are answered immediately; text files
        are read on a worker thread.
        """
        with self._lock:
            sequence = self._next_sequence
            self._next_sequence += 1
            self._latest_sequence = sequence
        request = PreviewRequest(sequence=sequence, path=path, is_likely_text=is_likely_text)

        if not is_likely_text or path.is_dir():
            self._post(PreviewResult(sequence=sequence, path=path, content=self._read_metadata(path)))
            return sequence

        try:
            self._pool.submit(self._run, request)
        except RuntimeError as exc:
            # Pool already shut down.
            self._post(PreviewResult(sequence=sequence, path=path, content=Unavailable(reason=str(exc))))
        return sequence

    def _run(self, request: PreviewRequest) -> None:
        try:
            content = self._read_text(request.path, self.max_bytes, self.max_lines)
        except Exception as exc:
            logger.warning("Preview read failed for %s: %s", request.path, exc)
            content = Unavailable(reason=f"Preview failed: {exc}")
        if self.highlight is not None and isinstance(content, TextPreview):
            if request.sequence < self.latest_sequence:
                logger.debug("Skipping highlight of superseded preview #%d", request.sequence)
                return
            try:
                highlighted = self.highlight(content.content, request.path)
            except Exception as exc:
                logger.warning("Highlighting failed for %s: %s", request.path, exc)
                highlighted = None
            content = replace(content, highlighted=highlighted)
        self._post(PreviewResult(sequence=request.sequence, path=request.path, content=content))

    def _post(self, result: PreviewResult) -> None:
        """Store ``result`` in the mailbox unless a newer request supersedes it."""
        with self._lock:
            if result.sequence < self._latest_sequence:
                logger.debug("Dropping stale preview #%d for %s", result.sequence, result.path)
                return
            if self._slot is not None and self._slot.sequence > result.sequence:
                return
            self._slot = result
        if self._on_result is not None:
            self._on_result()

    def take_result(self) -> PreviewResult | None:
        """Remove and return the pending result, if any."""
        with self._lock:
            result = self._slot
            self._slot = None
            return result

    def shutdown(self, wait: bool = False) -> None:
        """Stop accepting work; queued reads are cancelled, in-flight ones discarded."""
        self._pool.shutdown(wait=wait, cancel_futures=True)


__all__ = [
    "PREVIEW_WORKERS",
    "PreviewEngine",
]
