"""Preview request/result datatypes."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class PreviewRequest:
    """One preview job tagged with its issue order."""

    sequence: int
    path: Path
    is_likely_text: bool


@dataclass(frozen=True)
class TextPreview:
    """Decoded preview text; ``highlighted`` is its ANSI-coloured form, if any."""

    content: str
    truncated: bool = False
    truncated_by: str | None = None
    highlighted: str | None = None


@dataclass(frozen=True)
class MetadataPreview:
    size: int | None
    modified_at: float | None
    is_directory: bool = False


@dataclass(frozen=True)
class Unavailable:
    reason: str


@dataclass(frozen=True)
class LoadingPreview:
    """Placeholder shown while the latest request is still being read."""

    path: Path


PreviewContent = TextPreview | MetadataPreview | Unavailable


@dataclass(frozen=True)
class PreviewResult:
    """Completed preview payload for request ``sequence``."""

    sequence: int
    path: Path
    content: PreviewContent


__all__ = [
    "PreviewRequest",
    "TextPreview",
    "MetadataPreview",
    "Unavailable",
    "LoadingPreview",
    "PreviewContent",
    "PreviewResult",
]
