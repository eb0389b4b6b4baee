"""Tests for delete/rename/copy/move filesystem operations."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from dirbrowse.errors import InvalidNameError, OperationFailedError
from dirbrowse.file_ops import FileOperationExecutor, validate_new_name


def _tree_contents(root: Path) -> dict[str, bytes | None]:
    out: dict[str, bytes | None] = {}
    for dirpath, dirnames, filenames in os.walk(root):
        base = Path(dirpath)
        for name in dirnames:
            out[str((base / name).relative_to(root))] = None
        for name in filenames:
            out[str((base / name).relative_to(root))] = (base / name).read_bytes()
    return out


class DeleteTests(unittest.TestCase):
    def test_delete_removes_file_and_directory_tree(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            target_file = root / "a.txt"
            target_file.write_text("a", encoding="utf-8")
            tree = root / "tree"
            (tree / "nested").mkdir(parents=True)
            (tree / "nested" / "b.txt").write_text("b", encoding="utf-8")

            executor = FileOperationExecutor()
            executor.delete(target_file)
            executor.delete(tree)

            self.assertFalse(target_file.exists())
            self.assertFalse(tree.exists())

    def test_delete_missing_path_fails_with_reason(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(OperationFailedError) as ctx:
                FileOperationExecutor().delete(Path(tmp) / "missing")

        self.assertTrue(ctx.exception.reason.startswith("Delete failed"))


class RenameTests(unittest.TestCase):
    def test_rename_within_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "old.txt"
            source.write_text("data", encoding="utf-8")

            new_path = FileOperationExecutor().rename(source, "  new.txt ")

            self.assertEqual(new_path, Path(tmp) / "new.txt")
            self.assertFalse(source.exists())
            self.assertEqual(new_path.read_text(encoding="utf-8"), "data")

    def test_blank_names_are_rejected_before_touching_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "keep.txt"
            source.write_text("data", encoding="utf-8")
            executor = FileOperationExecutor()

            for bad_name in ("", "   "):
                with self.assertRaises(InvalidNameError):
                    executor.rename(source, bad_name)

            self.assertEqual(source.read_text(encoding="utf-8"), "data")
            self.assertEqual(os.listdir(tmp), ["keep.txt"])

    def test_rename_refuses_existing_destination(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "a.txt"
            other = Path(tmp) / "b.txt"
            source.write_text("a", encoding="utf-8")
            other.write_text("b", encoding="utf-8")

            with self.assertRaises(OperationFailedError):
                FileOperationExecutor().rename(source, "b.txt")

            self.assertEqual(other.read_text(encoding="utf-8"), "b")
            self.assertTrue(source.exists())

    def test_validate_new_name_rejects_separators_and_dots(self) -> None:
        for bad_name in ("a/b", ".", ".."):
            with self.assertRaises(InvalidNameError):
                validate_new_name(bad_name)
        self.assertEqual(validate_new_name(" ok.txt "), "ok.txt")


class CopyTests(unittest.TestCase):
    def test_copy_file_duplicates_bytes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "src.bin"
            source.write_bytes(b"\x00\x01payload")
            destination = Path(tmp) / "out" / "dst.bin"

            FileOperationExecutor().copy(source, destination)

            self.assertEqual(destination.read_bytes(), b"\x00\x01payload")
            self.assertTrue(source.exists())

    def test_copy_directory_tree_and_recopy_is_idempotent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            source = root / "project"
            (source / "pkg" / "deep").mkdir(parents=True)
            (source / "README.md").write_text("# hi\n", encoding="utf-8")
            (source / "pkg" / "mod.py").write_text("x = 1\n", encoding="utf-8")
            (source / "pkg" / "deep" / "data.bin").write_bytes(b"\xff\xfe")
            (source / "empty").mkdir()
            destination = root / "backup"
            executor = FileOperationExecutor()

            executor.copy(source, destination)
            first = _tree_contents(destination)
            executor.copy(source, destination)
            second = _tree_contents(destination)

            self.assertEqual(first, _tree_contents(source))
            self.assertEqual(first, second)

    def test_copy_overwrites_existing_destination_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "new.txt"
            destination = Path(tmp) / "old.txt"
            source.write_text("fresh", encoding="utf-8")
            destination.write_text("stale content", encoding="utf-8")

            FileOperationExecutor().copy(source, destination)

            self.assertEqual(destination.read_text(encoding="utf-8"), "fresh")

    def test_copy_tree_recreates_symlinks(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "src"
            source.mkdir()
            (source / "real.txt").write_text("real", encoding="utf-8")
            os.symlink("real.txt", source / "link.txt")

            FileOperationExecutor().copy(source, Path(tmp) / "dst")

            link = Path(tmp) / "dst" / "link.txt"
            self.assertTrue(link.is_symlink())
            self.assertEqual(os.readlink(link), "real.txt")
            self.assertEqual(link.read_text(encoding="utf-8"), "real")

    def test_copy_directory_into_itself_fails(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "dir"
            source.mkdir()
            with self.assertRaises(OperationFailedError):
                FileOperationExecutor().copy(source, source / "inner")
            self.assertFalse((source / "inner").exists())

    def test_copy_file_onto_itself_fails_and_keeps_content(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "same.txt"
            source.write_text("keep me\n", encoding="utf-8")

            with self.assertRaises(OperationFailedError) as ctx:
                FileOperationExecutor().copy(source, Path(tmp) / "." / "same.txt")

            self.assertIn("same file", ctx.exception.reason)
            self.assertEqual(source.read_text(encoding="utf-8"), "keep me\n")

    def test_copy_tree_onto_hard_linked_file_fails_and_keeps_content(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "src"
            source.mkdir()
            (source / "f.txt").write_text("linked\n", encoding="utf-8")
            destination = Path(tmp) / "dst"
            destination.mkdir()
            os.link(source / "f.txt", destination / "f.txt")

            with self.assertRaises(OperationFailedError):
                FileOperationExecutor().copy(source, destination)

            self.assertEqual((source / "f.txt").read_text(encoding="utf-8"), "linked\n")

    def test_copy_missing_source_fails(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(OperationFailedError):
                FileOperationExecutor().copy(Path(tmp) / "missing", Path(tmp) / "dst")


class MoveTests(unittest.TestCase):
    def test_move_relocates_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "a.txt"
            source.write_text("a", encoding="utf-8")
            (Path(tmp) / "sub").mkdir()
            destination = Path(tmp) / "sub" / "a.txt"

            FileOperationExecutor().move(source, destination)

            self.assertFalse(source.exists())
            self.assertEqual(destination.read_text(encoding="utf-8"), "a")

    def test_move_refuses_existing_destination(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "a.txt"
            destination = Path(tmp) / "b.txt"
            source.write_text("a", encoding="utf-8")
            destination.write_text("b", encoding="utf-8")

            with self.assertRaises(OperationFailedError):
                FileOperationExecutor().move(source, destination)

            self.assertEqual(destination.read_text(encoding="utf-8"), "b")

    def test_move_into_missing_directory_fails(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "a.txt"
            source.write_text("a", encoding="utf-8")

            with self.assertRaises(OperationFailedError):
                FileOperationExecutor().move(source, Path(tmp) / "nowhere" / "a.txt")

            self.assertTrue(source.exists())


if __name__ == "__main__":
    unittest.main()
