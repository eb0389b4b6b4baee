"""Tests for bounded text reads and metadata previews."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from dirbrowse.preview import (
    TRUNCATION_MARKER,
    MetadataPreview,
    TextPreview,
    Unavailable,
    is_likely_text,
    metadata_preview,
    read_text_preview,
)
from dirbrowse.preview.reader import decode_preview_bytes


class ReadTextPreviewTests(unittest.TestCase):
    def test_small_file_is_returned_whole(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "small.txt"
            path.write_text("line one\nline two\n", encoding="utf-8")

            preview = read_text_preview(path)

        self.assertEqual(preview, TextPreview(content="line one\nline two\n"))

    def test_large_file_is_cut_at_byte_ceiling(self) -> None:
        max_bytes = 200 * 1024
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "big.log"
            line = "x" * 99 + "\n"
            path.write_text(line * (500 * 1024 // len(line)), encoding="utf-8")

            preview = read_text_preview(path, max_bytes=max_bytes, max_lines=1_000_000)

        self.assertIsInstance(preview, TextPreview)
        self.assertTrue(preview.truncated)
        self.assertEqual(preview.truncated_by, "bytes")
        body, _, marker = preview.content.rpartition("\n")
        self.assertTrue(marker.startswith(TRUNCATION_MARKER))
        self.assertIn("200 KiB", marker)
        self.assertLessEqual(len(body.encode("utf-8")), max_bytes)

    def test_long_file_is_cut_at_line_ceiling(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "many.txt"
            path.write_text("".join(f"line {idx}\n" for idx in range(1500)), encoding="utf-8")

            preview = read_text_preview(path, max_bytes=10 * 1024 * 1024, max_lines=1000)

        self.assertTrue(preview.truncated)
        self.assertEqual(preview.truncated_by, "lines")
        lines = preview.content.splitlines()
        self.assertEqual(len(lines), 1001)
        self.assertEqual(lines[999], "line 999")
        self.assertTrue(lines[-1].startswith(TRUNCATION_MARKER))

    def test_file_exactly_at_line_ceiling_is_not_truncated(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "exact.txt"
            path.write_text("a\nb\nc\n", encoding="utf-8")

            preview = read_text_preview(path, max_bytes=1024, max_lines=3)

        self.assertFalse(preview.truncated)
        self.assertEqual(preview.content, "a\nb\nc\n")

    def test_nul_bytes_fall_back_to_metadata(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "blob.txt"
            path.write_bytes(b"abc\x00def")

            preview = read_text_preview(path)

        self.assertIsInstance(preview, MetadataPreview)
        self.assertEqual(preview.size, 7)

    def test_missing_file_is_unavailable(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            preview = read_text_preview(Path(tmp) / "gone.txt")

        self.assertIsInstance(preview, Unavailable)
        self.assertIn("Error opening file", preview.reason)


class PreviewHelperTests(unittest.TestCase):
    def test_is_likely_text_uses_extension_and_basename(self) -> None:
        self.assertTrue(is_likely_text("main.go"))
        self.assertTrue(is_likely_text("NOTES.MD"))
        self.assertTrue(is_likely_text("Makefile"))
        self.assertFalse(is_likely_text("photo.png"))
        self.assertFalse(is_likely_text("schema.graphql"))
        self.assertTrue(is_likely_text("schema.graphql", extra_extensions=(".graphql",)))

    def test_decode_drops_multibyte_character_cut_at_end(self) -> None:
        data = "héllo".encode("utf-8") + "é".encode("utf-8")[:1]
        self.assertEqual(decode_preview_bytes(data), "héllo")

    def test_decode_falls_back_to_latin1(self) -> None:
        self.assertEqual(decode_preview_bytes(b"caf\xe9 ok"), "café ok")

    def test_metadata_preview_for_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            preview = metadata_preview(Path(tmp))

        self.assertIsInstance(preview, MetadataPreview)
        self.assertTrue(preview.is_directory)
        self.assertIsNone(preview.size)


if __name__ == "__main__":
    unittest.main()
