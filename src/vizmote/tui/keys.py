"""Raw single-key input from the controlling terminal."""

from __future__ import annotations

import os
import select
import termios
import tty

# Escape sequences emitted by arrow keys (xterm / VT100)
ESCAPE_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
}

SPECIAL_KEYS: dict[str, str] = {
    " ": "space",
    "\x1b": "escape",
    "\x03": "ctrl-c",
    "\x04": "ctrl-d",
    "\r": "enter",
    "\n": "enter",
    "\x7f": "backspace",
}

ESCAPE_TIMEOUT = 0.05


def normalize_key(raw: str) -> str:
    """Turn raw terminal bytes for one key press into a key name."""
    if raw in ESCAPE_SEQUENCES:
        return ESCAPE_SEQUENCES[raw]
    if raw in SPECIAL_KEYS:
        return SPECIAL_KEYS[raw]
    if len(raw) == 1:
        return raw.lower()
    return raw


def read_key(fd: int) -> str:
    """Block until one key is pressed on ``fd`` and return its name.

    A lone ESC is told apart from an arrow-key sequence by waiting
    briefly for the rest of the sequence.
    """
    raw = os.read(fd, 1).decode(errors="ignore")
    if raw == "\x1b":
        while select.select([fd], [], [], ESCAPE_TIMEOUT)[0]:
            raw += os.read(fd, 1).decode(errors="ignore")
            if len(raw) >= 3:
                break
    return normalize_key(raw)


class RawTerminal:
    """Puts a terminal in cbreak mode for the duration of a ``with`` block."""

    def __init__(self, fd: int) -> None:
        self._fd = fd
        self._saved: list | None = None

    def __enter__(self) -> RawTerminal:
        self._saved = termios.tcgetattr(self._fd)
        tty.setcbreak(self._fd)
        attrs = termios.tcgetattr(self._fd)
        attrs[3] &= ~termios.ISIG  # deliver ctrl-c as a key
        termios.tcsetattr(self._fd, termios.TCSANOW, attrs)
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        if self._saved is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
            self._saved = None
