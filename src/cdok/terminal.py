"""Terminal handling for the interactive browser.

raw_mode() switches stdin to unbuffered, unechoed input for single-key
navigation and always restores the saved attributes on the way out.
"""

from __future__ import annotations

import os
import signal
import sys
import termios
from contextlib import contextmanager
from typing import Iterator, TextIO

# ANSI styles
RESET = "\033[0m"
BOLD = "\033[1m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
CYAN = "\033[36m"

CLEAR_SCREEN = "\033[2J\033[H"

UP = "up"
DOWN = "down"
ENTER = "enter"
ESCAPE = "escape"

_ARROWS = {"A": UP, "B": DOWN}


class Terminal:
    """Keyboard and screen access on a POSIX tty."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self._fd = self.stdin.fileno()
        self._saved: list | None = None

    def write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def clear(self) -> None:
        self.write(CLEAR_SCREEN)

    def _getch(self) -> str:
        return os.read(self._fd, 1).decode("utf-8", errors="replace")

    def read_key(self) -> str:
        """Read one keypress; arrow keys and ENTER come back as names."""
        ch = self._getch()
        if ch in ("\r", "\n"):
            return ENTER
        if ch == "\x1b":
            if self._getch() != "[":
                return ESCAPE
            return _ARROWS.get(self._getch(), ESCAPE)
        if ch == "":
            # EOF on stdin
            return "q"
        return ch

    def prompt(self, message: str) -> str:
        """Read a full line with normal echo and line editing."""
        with self.cooked_mode():
            self.write(message)
            line = self.stdin.readline()
        if not line:
            raise EOFError
        return line.rstrip("\r\n")

    def pause(self, message: str = "Press any key to continue...") -> None:
        self.write(message)
        self.read_key()

    @contextmanager
    def raw_mode(self) -> Iterator["Terminal"]:
        """Disable echo and canonical input until the block exits.

        SIGTERM is turned into SystemExit while active so that the finally
        clause restores the terminal on termination too.
        """
        self._saved = termios.tcgetattr(self._fd)
        previous = signal.signal(signal.SIGTERM, _raise_exit)
        try:
            self._apply_raw()
            yield self
        finally:
            termios.tcsetattr(self._fd, termios.TCSAFLUSH, self._saved)
            signal.signal(signal.SIGTERM, previous)
            self._saved = None

    @contextmanager
    def cooked_mode(self) -> Iterator[None]:
        """Temporarily restore the original mode inside raw_mode()."""
        if self._saved is None:
            yield
            return
        termios.tcsetattr(self._fd, termios.TCSAFLUSH, self._saved)
        try:
            yield
        finally:
            self._apply_raw()

    def _apply_raw(self) -> None:
        raw = termios.tcgetattr(self._fd)
        raw[3] &= ~(termios.ECHO | termios.ICANON)  # lflags
        raw[6][termios.VMIN] = 1
        raw[6][termios.VTIME] = 0
        termios.tcsetattr(self._fd, termios.TCSAFLUSH, raw)


def _raise_exit(signum, frame):
    raise SystemExit(128 + signum)
