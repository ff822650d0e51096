# src/termsnake/terminal.py
from __future__ import annotations

import logging
import os
import select
import sys
import termios
import tty
from typing import Optional, TextIO, Tuple

logger = logging.getLogger(__name__)

# ----- ANSI control sequences -----
CURSOR_HOME = "\x1b[H"
CLEAR_SCREEN = "\x1b[2J\x1b[H"
CLEAR_TO_EOL = "\x1b[K"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"


class TerminalError(RuntimeError):
    """The game cannot take over the terminal (e.g. stdin is a pipe)."""


def terminal_size(stream: Optional[TextIO] = None) -> Optional[Tuple[int, int]]:
    """Return (columns, rows) of the terminal behind `stream` (stdout), or None if unknown."""
    if stream is None:
        stream = sys.stdout
    try:
        size = os.get_terminal_size(stream.fileno())
    except (OSError, ValueError):
        logger.debug("terminal size unavailable, keeping configured board size")
        return None
    return size.columns, size.lines


class Terminal:
    """
    Owns the terminal for the lifetime of a `with` block.

    Entering switches stdin to cbreak mode (no echo, no line buffering,
    reads never wait), hides the cursor and clears the screen. Leaving
    restores the saved attributes and the cursor on every exit path.
    """

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.fd = -1
        self._saved: Optional[list] = None

    def __enter__(self) -> "Terminal":
        try:
            self.fd = self.stdin.fileno()
        except (OSError, ValueError):
            raise TerminalError("stdin has no file descriptor; run the game in an interactive shell")
        if not os.isatty(self.fd):
            raise TerminalError("stdin is not a terminal; run the game in an interactive shell")
        self._saved = termios.tcgetattr(self.fd)
        try:
            tty.setcbreak(self.fd, termios.TCSAFLUSH)
            attrs = termios.tcgetattr(self.fd)
            attrs[6][termios.VMIN] = 0
            attrs[6][termios.VTIME] = 0
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, attrs)
            self.write(HIDE_CURSOR + CLEAR_SCREEN)
        except BaseException:
            self.restore()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()

    def restore(self) -> None:
        if self._saved is None:
            return
        try:
            self.write(SHOW_CURSOR)
        finally:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._saved)
            self._saved = None

    # ---------- Output ----------
    def write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def clear(self) -> None:
        self.write(CLEAR_SCREEN)

    def show_cursor(self) -> None:
        self.write(SHOW_CURSOR)

    # ---------- Input ----------
    def read_byte(self) -> Optional[int]:
        """Return one pending input byte, or None right away if there is none."""
        readable, _, _ = select.select([self.fd], [], [], 0)
        if not readable:
            return None
        data = os.read(self.fd, 1)
        return data[0] if data else None

    def wait_key(self) -> None:
        """Block until one new key is pressed; keys typed earlier are discarded."""
        termios.tcflush(self.fd, termios.TCIFLUSH)
        select.select([self.fd], [], [])
        os.read(self.fd, 1)
