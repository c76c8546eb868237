"""
Tests for terminal output helpers and the spinner.

Run with:
    pytest tests/test_output.py -v
"""

import re
import time

from aicommit.output import (
    COMMIT_TYPE_COLORS,
    Colors,
    Spinner,
    colorize_commit_type,
    print_error,
    print_success,
)
from aicommit.prompts import COMMIT_TYPES

ANSI_RE = re.compile(r'\033\[[0-9;]*[mK]')


class _RecordingStream:
    def __init__(self, tty=True):
        self._tty = tty
        self.writes = []
        self.flush_calls = 0

    def isatty(self):
        return self._tty

    def write(self, text):
        self.writes.append(text)
        return len(text)

    def flush(self):
        self.flush_calls += 1


# ---------------------------------------------------------------------------
# Spinner
# ---------------------------------------------------------------------------

class TestSpinner:

    def test_tty_spins_and_clears_line(self):
        stream = _RecordingStream(tty=True)
        spinner = Spinner("Generating commit message", stream=stream, interval=0.01)

        with spinner:
            time.sleep(0.03)

        assert spinner._thread is not None
        assert spinner._stop_event.is_set()
        assert not spinner._thread.is_alive()
        assert any("Generating commit message" in w for w in stream.writes)
        assert stream.writes[-1] == '\r\033[K'

    def test_non_tty_writes_one_line(self):
        stream = _RecordingStream(tty=False)
        spinner = Spinner("Generating commit message", stream=stream)

        with spinner:
            pass

        assert spinner._enabled is False
        assert spinner._thread is None
        assert stream.writes == ["Generating commit message...\n"]

    def test_stops_when_body_raises(self):
        stream = _RecordingStream(tty=True)
        spinner = Spinner("Working", stream=stream, interval=0.01)

        try:
            with spinner:
                raise RuntimeError("boom")
        except RuntimeError:
            pass

        assert not spinner._thread.is_alive()


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

class TestMessages:

    def test_print_error_goes_to_stderr(self, capsys):
        print_error("Could not connect")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Could not connect" in ANSI_RE.sub('', captured.err)

    def test_print_success_goes_to_stdout(self, capsys):
        print_success("Deleted config")
        assert "Deleted config" in ANSI_RE.sub('', capsys.readouterr().out)

    def test_every_commit_type_has_a_color(self):
        assert set(COMMIT_TYPE_COLORS) == set(COMMIT_TYPES)
        assert COMMIT_TYPE_COLORS['fix'] == Colors.RED
        assert COMMIT_TYPE_COLORS['chore'] == Colors.DIM

    def test_unknown_type_is_left_alone(self):
        assert colorize_commit_type("wip: half done") == "wip: half done"

    def test_commit_type_text_is_preserved(self):
        message = "feat(cli): add --setup flag\n\nLonger body"
        assert ANSI_RE.sub('', colorize_commit_type(message)) == message
