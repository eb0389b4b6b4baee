"""Regression tests for raw-key decoding.

Covers ESC timing, arrow/tilde sequences, and control-key token mapping.
These tests protect interactive input handling in raw terminal mode.
"""

import os
import time
import unittest

from dirbrowse import input as input_mod


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _read_all(self, payload: bytes, count: int) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"\x1b")
            started = time.monotonic()
            key = input_mod.read_key(read_fd, timeout_ms=20)
            elapsed = time.monotonic() - started
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "ESC")
        self.assertLess(elapsed, 0.2)

    def test_arrow_and_tilde_sequences(self) -> None:
        keys = self._read_all(b"\x1b[A\x1b[B\x1b[C\x1b[D\x1b[5~\x1b[6~\x1b[3~\x1bOH", 8)
        self.assertEqual(keys, ["UP", "DOWN", "RIGHT", "LEFT", "PAGE_UP", "PAGE_DOWN", "DELETE", "HOME"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1bq", 2), ["ESC", "q"])

    def test_control_keys_map_to_tokens(self) -> None:
        keys = self._read_all(b"\r\n\x7f\x08\x03\x0c\x15\t", 8)
        self.assertEqual(keys, ["ENTER", "ENTER", "BACKSPACE", "BACKSPACE", "CTRL_C", "CTRL_L", "CTRL_U", "TAB"])

    def test_multibyte_utf8_character_is_one_key(self) -> None:
        self.assertEqual(self._read_all("é/".encode("utf-8"), 2), ["é", "/"])

    def test_timeout_returns_empty_string(self) -> None:
        self.assertEqual(self._read_all(b"", 1), [""])


if __name__ == "__main__":
    unittest.main()
