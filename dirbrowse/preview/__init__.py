"""Public preview API.

Request/result types, bounded readers, and the background engine that
delivers only the latest preview.
"""

from __future__ import annotations

from .engine import PreviewEngine
from .reader import (
    PREVIEW_MAX_BYTES,
    PREVIEW_MAX_LINES,
    TRUNCATION_MARKER,
    is_likely_text,
    metadata_preview,
    read_text_preview,
)
from .types import (
    LoadingPreview,
    MetadataPreview,
    PreviewContent,
    PreviewRequest,
    PreviewResult,
    TextPreview,
    Unavailable,
)

__all__ = [
    "PreviewEngine",
    "PREVIEW_MAX_BYTES",
    "PREVIEW_MAX_LINES",
    "TRUNCATION_MARKER",
    "is_likely_text",
    "metadata_preview",
    "read_text_preview",
    "LoadingPreview",
    "MetadataPreview",
    "PreviewContent",
    "PreviewRequest",
    "PreviewResult",
    "TextPreview",
    "Unavailable",
]
