"""Frame composition and overlay rendering tests."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from dirbrowse.input import Keymap, TextInputBuffer
from dirbrowse.navigation import NavigationController, intents
from dirbrowse.preview import LoadingPreview, MetadataPreview, PreviewResult, TextPreview, Unavailable
from dirbrowse.render import (
    PreviewRenderer,
    adjust_list_start,
    build_frame,
    entry_label,
    format_size,
)
from dirbrowse.render.ansi import ANSI_ESCAPE_RE
from dirbrowse.state import DirectoryState, VisibleEntry


class _ImmediatePreviewEngine:
    def __init__(self) -> None:
        self.sequence = 0
        self.slot: PreviewResult | None = None

    def request_preview(self, path: Path, is_likely_text: bool) -> int:
        self.sequence += 1
        content = TextPreview(content="first line\nsecond line\n") if is_likely_text else MetadataPreview(
            size=None, modified_at=None, is_directory=True
        )
        self.slot = PreviewResult(sequence=self.sequence, path=path, content=content)
        return self.sequence

    def take_result(self) -> PreviewResult | None:
        result = self.slot
        self.slot = None
        return result


def _plain(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


class BuildFrameTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        (self.root / "sub").mkdir()
        (self.root / "a.txt").write_text("first line\nsecond line\n", encoding="utf-8")
        self.controller = NavigationController(DirectoryState(self.root), _ImmediatePreviewEngine())
        self.keymap = Keymap.with_overrides({})
        self.renderer = PreviewRenderer(no_color=True)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def render(self, buffer: TextInputBuffer | None = None, height: int = 20) -> str:
        return build_frame(
            self.controller,
            100,
            height,
            list_start=0,
            preview_renderer=self.renderer,
            keymap=self.keymap,
            input_buffer=buffer or TextInputBuffer(),
        )

    def test_frame_shows_list_preview_and_status(self) -> None:
        self.controller.dispatch(intents.SelectIndex(2))

        frame = _plain(self.render())

        self.assertIn("[..] Go up", frame)
        self.assertIn("[DIR] sub", frame)
        self.assertIn("a.txt", frame)
        self.assertIn("Preview: a.txt", frame)
        self.assertIn("second line", frame)
        self.assertIn(f"Dir: {self.root}", frame)

    def test_help_overlay_lists_resolved_keys(self) -> None:
        self.controller.dispatch(intents.OpenHelp())

        frame = self.render(height=40)

        self.assertIn("dirbrowse help", frame)
        self.assertIn("\033[38;5;229mCtrl+L\033[0m", frame)
        self.assertIn("Press any key to close", frame)

    def test_confirmation_overlay_names_target(self) -> None:
        self.controller.dispatch(intents.SelectIndex(2))
        self.controller.dispatch(intents.InitiateDelete())

        frame = _plain(self.render())

        self.assertIn("Delete 'a.txt'? This cannot be undone.", frame)

    def test_text_input_overlay_shows_buffer(self) -> None:
        self.controller.dispatch(intents.SelectIndex(2))
        self.controller.dispatch(intents.InitiateRename())

        frame = _plain(self.render(TextInputBuffer("renamed.txt")))

        self.assertIn("New name:", frame)
        self.assertIn("renamed.txt", frame)

    def test_filter_shows_in_list_header(self) -> None:
        self.controller.dispatch(intents.InitiateSearch())
        self.controller.dispatch(intents.SubmitText("a."))

        frame = _plain(self.render())

        self.assertIn("Files [/a.]", frame)
        self.assertIn("Filter: a.", frame)


class FrameHelperTests(unittest.TestCase):
    def test_adjust_list_start_keeps_selection_visible(self) -> None:
        self.assertEqual(adjust_list_start(0, 5, 10, 50), 0)
        self.assertEqual(adjust_list_start(25, 0, 10, 50), 16)
        self.assertEqual(adjust_list_start(12, 10, 10, 50), 10)
        self.assertEqual(adjust_list_start(None, 40, 10, 12), 2)

    def test_entry_label_variants(self) -> None:
        parent = VisibleEntry(label="..", path=Path("/"), is_directory=True, is_parent=True)
        directory = VisibleEntry(label="docs", path=Path("/docs"), is_directory=True)
        file_entry = VisibleEntry(label="a.txt", path=Path("/a.txt"), is_directory=False, size=2048)

        self.assertEqual(entry_label(parent, 30), "[..] Go up")
        self.assertEqual(entry_label(directory, 30), "[DIR] docs")
        label = entry_label(file_entry, 20)
        self.assertEqual(len(label), 20)
        self.assertTrue(label.startswith("a.txt"))
        self.assertTrue(label.endswith("2.0 KB"))
        self.assertEqual(entry_label(file_entry, 8), "a.txt")

    def test_format_size_units(self) -> None:
        self.assertEqual(format_size(512), "512 B")
        self.assertEqual(format_size(1536), "1.5 KB")
        self.assertEqual(format_size(5 * 1024 * 1024), "5.0 MB")
        self.assertEqual(format_size(3 * 1024 ** 3), "3.0 GB")


class PreviewRendererTests(unittest.TestCase):
    def test_placeholder_and_unavailable_lines(self) -> None:
        renderer = PreviewRenderer(no_color=True)

        self.assertEqual(renderer.lines_for(LoadingPreview(Path("/x")), Path("/x")), ["Loading preview..."])
        self.assertEqual(renderer.lines_for(Unavailable("gone"), None), ["(gone)"])

    def test_metadata_lines_mention_open_key(self) -> None:
        renderer = PreviewRenderer(no_color=True, open_hint="o")

        lines = renderer.lines_for(MetadataPreview(size=10, modified_at=None), Path("/tmp/blob.bin"))

        self.assertEqual(lines[0], "blob.bin")
        self.assertEqual(lines[1], "Size: 10 B")
        self.assertIn("Press 'o' to open with system default.", lines[-1])

    def test_text_lines_are_sanitized_and_cached(self) -> None:
        renderer = PreviewRenderer(no_color=True)
        content = TextPreview(content="bell\x07here\nnext\n")

        first = renderer.lines_for(content, Path("/tmp/a.txt"))
        second = renderer.lines_for(content, Path("/tmp/a.txt"))

        self.assertEqual(first, ["bell\\x07here", "next"])
        self.assertIs(first, second)

    def test_color_output_comes_from_worker_highlighting(self) -> None:
        renderer = PreviewRenderer()
        content = TextPreview(content="def f():\n", highlighted="\x1b[38;5;81mdef\x1b[39m f():\n")

        lines = renderer.lines_for(content, Path("/tmp/mod.py"))

        self.assertIn("\x1b[", lines[0])
        self.assertEqual(_plain(lines[0]), "def f():")

    def test_no_color_ignores_highlighted_text(self) -> None:
        renderer = PreviewRenderer(no_color=True)
        content = TextPreview(content="def f():\n", highlighted="\x1b[1mdef\x1b[0m f():\n")

        self.assertEqual(renderer.lines_for(content, Path("/tmp/mod.py")), ["def f():"])

    def test_render_path_never_runs_pygments(self) -> None:
        renderer = PreviewRenderer()
        with mock.patch("pygments.highlight", side_effect=AssertionError("highlighted on render path")), mock.patch(
            "dirbrowse.render.highlight.PreviewHighlighter.__call__",
            side_effect=AssertionError("highlighted on render path"),
        ):
            lines = renderer.lines_for(TextPreview(content="def f():\n    return 1\n"), Path("/tmp/mod.py"))

        self.assertEqual(lines, ["def f():", "    return 1"])


if __name__ == "__main__":
    unittest.main()
