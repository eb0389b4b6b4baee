"""Bounded file reads and metadata lookups that produce preview payloads.

Everything here is safe to call from a worker thread: no shared state is
touched and failures come back as ``Unavailable`` values instead of raising.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from .types import MetadataPreview, PreviewContent, TextPreview, Unavailable

PREVIEW_MAX_BYTES = 200 * 1024
PREVIEW_MAX_LINES = 1000
BINARY_SNIFF_BYTES = 4_096
TRUNCATION_MARKER = "... (truncated"

TEXT_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".txt", ".md", ".rst", ".go", ".py", ".java", ".c", ".h", ".cpp", ".hpp",
        ".rs", ".js", ".ts", ".json", ".yaml", ".yml", ".toml", ".ini", ".cfg",
        ".xml", ".html", ".css", ".sh", ".csv", ".log",
    }
)
TEXT_FILENAMES: frozenset[str] = frozenset(
    {"makefile", "dockerfile", "readme", "license", "changelog"}
)


def is_likely_text(name: str, extra_extensions: Iterable[str] = ()) -> bool:
    """Classify ``name`` as previewable text from its extension or basename."""
    suffix = os.path.splitext(name)[1].lower()
    if suffix in TEXT_EXTENSIONS:
        return True
    if suffix and suffix in {ext.lower() for ext in extra_extensions}:
        return True
    return name.lower() in TEXT_FILENAMES


def truncation_marker(truncated_by: str, max_bytes: int, max_lines: int) -> str:
    if truncated_by == "bytes":
        return f"{TRUNCATION_MARKER}: preview limited to {max_bytes // 1024} KiB)"
    return f"{TRUNCATION_MARKER}: preview limited to {max_lines} lines)"


def decode_preview_bytes(data: bytes) -> str:
    """Decode a bounded read, tolerating a multi-byte char cut at the end."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        if exc.reason == "unexpected end of data" and exc.start >= len(data) - 3:
            try:
                return data[: exc.start].decode("utf-8-sig")
            except UnicodeDecodeError:
                pass
    return data.decode("latin-1")


def metadata_preview(path: Path) -> PreviewContent:
    """Return size/mtime for ``path`` or ``Unavailable`` when stat fails."""
    try:
        stat = path.stat()
    except OSError as exc:
        return Unavailable(reason=f"Unable to stat {path.name}: {exc.strerror or exc}")
    is_directory = path.is_dir()
    return MetadataPreview(
        size=None if is_directory else int(stat.st_size),
        modified_at=float(stat.st_mtime),
        is_directory=is_directory,
    )


def read_text_preview(
    path: Path,
    max_bytes: int = PREVIEW_MAX_BYTES,
    max_lines: int = PREVIEW_MAX_LINES,
) -> PreviewContent:
    """Read at most ``max_bytes`` and ``max_lines`` of ``path``.

    Whichever ceiling is reached first stops the read. A cut-short preview is
    flagged ``truncated`` with ``truncated_by`` naming the ceiling and ends
    with a marker line. Files with a NUL byte in the first
    ``BINARY_SNIFF_BYTES`` are reported as metadata instead.
    """
    buf = bytearray()
    line_count = 0
    truncated_by: str | None = None
    try:
        with path.open("rb") as handle:
            while True:
                remaining = max_bytes - len(buf)
                if remaining <= 0:
                    if handle.read(1):
                        truncated_by = "bytes"
                    break
                line = handle.readline(remaining)
                if not line:
                    break
                buf += line
                if line.endswith(b"\n"):
                    line_count += 1
                    if line_count >= max_lines:
                        if handle.read(1):
                            truncated_by = "lines"
                        break
    except OSError as exc:
        return Unavailable(reason=f"Error opening file: {exc.strerror or exc}")

    if b"\x00" in buf[:BINARY_SNIFF_BYTES]:
        return metadata_preview(path)

    text = decode_preview_bytes(bytes(buf))
    if truncated_by is None:
        return TextPreview(content=text)

    if text and not text.endswith("\n"):
        text += "\n"
    text += truncation_marker(truncated_by, max_bytes, max_lines)
    return TextPreview(content=text, truncated=True, truncated_by=truncated_by)


__all__ = [
    "PREVIEW_MAX_BYTES",
    "PREVIEW_MAX_LINES",
    "BINARY_SNIFF_BYTES",
    "TRUNCATION_MARKER",
    "TEXT_EXTENSIONS",
    "is_likely_text",
    "truncation_marker",
    "decode_preview_bytes",
    "metadata_preview",
    "read_text_preview",
]
