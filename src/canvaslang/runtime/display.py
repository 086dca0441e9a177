"""
Terminal display sink.

The terminal is a single shared resource: every live update erases the region
drawn by the previous one and redraws in place. ``TerminalDisplay`` is a
context manager so the cursor and colors are restored however playback ends.
"""

from __future__ import annotations

import sys
import threading
from types import TracebackType
from typing import Optional, TextIO

ESC = "\033["
ERASE_LINE = f"{ESC}2K"
CURSOR_UP = f"{ESC}1A"
CURSOR_LEFT = f"{ESC}G"
HIDE_CURSOR = f"{ESC}?25l"
SHOW_CURSOR = f"{ESC}?25h"
RESET = f"{ESC}0m"


def erase_lines(count: int) -> str:
    """Escape sequence erasing ``count`` lines upward from the cursor."""
    if count <= 0:
        return ""
    sequence = "".join(
        ERASE_LINE + (CURSOR_UP if index < count - 1 else "") for index in range(count)
    )
    return sequence + CURSOR_LEFT


class TerminalDisplay:
    """
    In-place redraw display.

    Usage:
        with TerminalDisplay() as display:
            display.update(frame)
            display.final(output)
    """

    def __init__(self, stream: Optional[TextIO] = None, manage_cursor: bool = True) -> None:
        self.stream = stream or sys.stdout
        self.manage_cursor = manage_cursor
        self._previous_output = ""
        self._previous_line_count = 0
        self._lock = threading.Lock()
        self._cursor_hidden = False

    def __enter__(self) -> TerminalDisplay:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def update(self, text: str) -> None:
        """Replace the live region with ``text``."""
        output = text + "\n"
        with self._lock:
            if output == self._previous_output:
                return
            if self.manage_cursor and not self._cursor_hidden:
                self.stream.write(HIDE_CURSOR)
                self._cursor_hidden = True
            self.stream.write(erase_lines(self._previous_line_count) + output)
            self.stream.flush()
            self._previous_output = output
            self._previous_line_count = len(output.split("\n"))

    def final(self, text: str) -> None:
        """Print ``text`` below the live region and end live updates."""
        with self._lock:
            self.stream.write(text + "\n")
            self.stream.flush()
            self._previous_output = ""
            self._previous_line_count = 0

    def close(self) -> None:
        """Restore colors and the cursor."""
        with self._lock:
            if self._cursor_hidden:
                self.stream.write(RESET + SHOW_CURSOR)
                self.stream.flush()
                self._cursor_hidden = False
