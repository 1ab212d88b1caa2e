"""Host terminal handling: raw mode, alternate screen and key polling."""

from __future__ import annotations

from typing import TextIO
import os
import re
import select
import shutil
import sys
import termios
import tty

ESCAPE = "\x1b"
ENTER_ALT_SCREEN = "\x1b[?1049h"
LEAVE_ALT_SCREEN = "\x1b[?1049l"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
RESET_STYLE = "\x1b[0m"
CLEAR = "\x1b[2J"

# CSI sequences (arrows, Home, End) and SS3 sequences (F1-F4, keypad).
ESCAPE_SEQUENCE = re.compile(r"\x1b(?:\[[0-9;?]*[ -/]*[@-~]|O.)")


def strip_escape_sequences(keys: str) -> str:
    """Drop multi-byte key sequences, leaving plain keys and a bare Esc."""
    return ESCAPE_SEQUENCE.sub("", keys)


def terminal_size() -> tuple[int, int]:
    """Return the current terminal size as (columns, rows)."""
    size = shutil.get_terminal_size()
    return (size.columns, size.lines)


class Console:
    """Context manager that owns the terminal for the duration of a show."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self._saved_attrs: list | None = None

    def __enter__(self) -> Console:
        if self.stdin.isatty():
            fd = self.stdin.fileno()
            self._saved_attrs = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        self.stdout.write(ENTER_ALT_SCREEN + HIDE_CURSOR + CLEAR)
        self.stdout.flush()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stdout.write(RESET_STYLE + SHOW_CURSOR + LEAVE_ALT_SCREEN)
        self.stdout.flush()
        if self._saved_attrs is not None:
            termios.tcsetattr(self.stdin.fileno(), termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None

    def read_keys(self) -> str:
        """Return whatever keys are pending on stdin without blocking."""
        keys = []
        while select.select([self.stdin], [], [], 0)[0]:
            chunk = os.read(self.stdin.fileno(), 64)
            if not chunk:
                break
            keys.append(chunk.decode("utf-8", errors="ignore"))
        return "".join(keys)
