"""Terminal Output Formatting Package

Color helpers honour ``NO_COLOR`` and ``FORCE_COLOR``; status messages go to
stdout, problems to stderr.
"""

import os
import re
import sys
import threading
from typing import TextIO

from aicommit.prompts import COMMIT_TYPES


class Colors:
    """ANSI escape codes for terminal colors."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    CYAN = '\033[36m'


def _supports_color(stream: TextIO) -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not (hasattr(stream, 'isatty') and stream.isatty()):
        return False
    if sys.platform == 'win32':
        # Enable VT processing on the Windows console
        try:
            import ctypes
            kernel32 = ctypes.windll.kernel32
            kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7)
        except (AttributeError, OSError):
            return False
    return True


def _can_encode(symbol: str) -> bool:
    try:
        symbol.encode(sys.stdout.encoding or 'utf-8')
    except (UnicodeEncodeError, LookupError):
        return False
    return True


COLORS_ENABLED = _supports_color(sys.stdout)
UNICODE_ENABLED = _can_encode('✓✗⠋')

CHECK = '✓' if UNICODE_ENABLED else '[OK]'
CROSS = '✗' if UNICODE_ENABLED else '[X]'


def _colorize(text: str, *codes: str) -> str:
    if not COLORS_ENABLED:
        return text
    return f"{''.join(codes)}{text}{Colors.RESET}"


def success(text: str) -> str:
    return _colorize(text, Colors.GREEN)


def error(text: str) -> str:
    return _colorize(text, Colors.RED)


def warning(text: str) -> str:
    return _colorize(text, Colors.YELLOW)


def info(text: str) -> str:
    return _colorize(text, Colors.CYAN)


def dim(text: str) -> str:
    return _colorize(text, Colors.DIM)


def bold(text: str) -> str:
    return _colorize(text, Colors.BOLD)


def print_success(message: str) -> None:
    print(f"{success(CHECK)} {message}")


def print_error(message: str) -> None:
    print(f"{error(CROSS)} {error(message)}", file=sys.stderr)


def print_warning(message: str) -> None:
    print(f"{warning('!')} {warning(message)}", file=sys.stderr)


# Code-facing changes stand out; housekeeping types are dimmed
_TYPE_COLOR_GROUPS = {
    Colors.GREEN: ('feat', 'perf'),
    Colors.RED: ('fix',),
    Colors.YELLOW: ('refactor',),
    Colors.CYAN: ('docs', 'test', 'ci', 'build'),
}
COMMIT_TYPE_COLORS = {
    commit_type: next((color for color, group in _TYPE_COLOR_GROUPS.items() if commit_type in group), Colors.DIM)
    for commit_type in COMMIT_TYPES
}

_TYPE_PREFIX_RE = re.compile(r'^(\w+)(\([^)]*\))?!?:')


def colorize_commit_type(message: str) -> str:
    """Highlight the ``type(scope):`` prefix of a conventional commit header."""
    match = _TYPE_PREFIX_RE.match(message)
    color = COMMIT_TYPE_COLORS.get(match.group(1)) if match else None
    if not color or not COLORS_ENABLED:
        return message
    prefix = match.group(0)
    return _colorize(prefix, Colors.BOLD, color) + message[len(prefix):]


class Spinner:
    """Animated spinner around a blocking call. Use as context manager.

    On a TTY the frame is redrawn every ``interval`` seconds from a daemon
    thread and the line is cleared on exit; otherwise a single
    ``<text>...`` line is written instead.
    """
    FRAMES_UNICODE = '⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏'
    FRAMES_ASCII = '-\\|/'
    INTERVAL = 0.08

    def __init__(self, text: str, stream: TextIO | None = None, interval: float = INTERVAL):
        self.text = text
        self._stream = stream if stream is not None else sys.stdout
        self._interval = interval
        self._frames = self.FRAMES_UNICODE if UNICODE_ENABLED else self.FRAMES_ASCII
        self._enabled = hasattr(self._stream, 'isatty') and self._stream.isatty()
        self._stop_event = threading.Event()
        self._thread = None

    def _emit(self, text: str) -> None:
        self._stream.write(text)
        self._stream.flush()

    def _spin(self):
        tick = 0
        while not self._stop_event.is_set():
            self._emit(f'\r\033[K{self._frames[tick % len(self._frames)]} {self.text}')
            tick += 1
            self._stop_event.wait(self._interval)

    def __enter__(self):
        if not self._enabled:
            self._emit(f'{self.text}...\n')
            return self
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._spin, daemon=True)
        self._thread.start()
        return self

    def __exit__(self, *args):
        self._stop_event.set()
        if self._thread:
            self._thread.join()
        if self._enabled:
            self._emit('\r\033[K')


__all__ = [
    "Colors", "COLORS_ENABLED", "UNICODE_ENABLED", "CHECK", "CROSS",
    "success", "error", "warning", "info", "dim", "bold",
    "print_success", "print_error", "print_warning",
    "COMMIT_TYPE_COLORS", "colorize_commit_type", "Spinner",
]
