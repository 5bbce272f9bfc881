import io
import unittest
from unittest.mock import patch

import terminal


class FakeTty(io.StringIO):
    def isatty(self):
        return True

    def fileno(self):
        return 1


class TerminalProbeTests(unittest.TestCase):
    def test_width_falls_back_without_a_real_stream(self):
        self.assertEqual(terminal.terminal_width(77, io.StringIO()), 77)

    def test_width_from_terminfo(self):
        with patch("terminal.curses.setupterm"), patch(
            "terminal.curses.tigetnum", return_value=132
        ):
            self.assertEqual(terminal.terminal_width(80, FakeTty()), 132)

    def test_width_ignores_unknown_columns(self):
        with patch("terminal.curses.setupterm"), patch(
            "terminal.curses.tigetnum", return_value=-1
        ):
            self.assertEqual(terminal.terminal_width(80, FakeTty()), 80)

    def test_no_color_for_pipes(self):
        self.assertFalse(terminal.supports_color(io.StringIO()))

    def test_no_color_env_wins(self):
        with patch.dict("os.environ", {"NO_COLOR": "1"}):
            self.assertFalse(terminal.supports_color(FakeTty()))

    def test_color_when_terminfo_has_eight_colors(self):
        with patch.dict("os.environ", {}, clear=False) as env, patch(
            "terminal.curses.setupterm"
        ), patch("terminal.curses.tigetnum", return_value=256):
            env.pop("NO_COLOR", None)
            self.assertTrue(terminal.supports_color(FakeTty()))

    def test_monochrome_terminal(self):
        with patch.dict("os.environ", {}, clear=False) as env, patch(
            "terminal.curses.setupterm"
        ), patch("terminal.curses.tigetnum", return_value=2):
            env.pop("NO_COLOR", None)
            self.assertFalse(terminal.supports_color(FakeTty()))


if __name__ == "__main__":
    unittest.main()
