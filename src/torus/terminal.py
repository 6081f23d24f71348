"""Small helper for presenting torus frames on an ANSI terminal."""

from __future__ import annotations

import os
import shutil
import sys
from typing import Optional, TextIO, Tuple

from .engine import Canvas

CURSOR_HOME = "\033[H"
CLEAR_TO_END = "\033[J"
CLEAR_SCREEN = "\033[2J"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"
RESET_STYLE = "\033[0m"


class TerminalController:
    """Context manager that prepares the terminal for smooth animations."""

    def __init__(self, *, clear: bool = True, stream: Optional[TextIO] = None) -> None:
        self._clear = clear
        self._stream = stream
        self._cursor_hidden = False

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def __enter__(self) -> "TerminalController":
        out = self.stream
        if self._clear:
            out.write(CLEAR_SCREEN)
        out.write(CURSOR_HOME)
        out.write(HIDE_CURSOR)
        out.flush()
        self._cursor_hidden = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()

    def restore(self) -> None:
        if self._cursor_hidden:
            out = self.stream
            out.write(RESET_STYLE)
            out.write(SHOW_CURSOR)
            out.flush()
            self._cursor_hidden = False

    def draw(self, canvas: Canvas) -> None:
        out = self.stream
        out.write(CURSOR_HOME)
        out.write(CLEAR_TO_END)
        for row in canvas.rows():
            out.write(row)
            out.write("\n")
        out.flush()

    def get_size(self) -> os.terminal_size:
        return shutil.get_terminal_size(fallback=(100, 40))

    def size_tuple(self) -> Tuple[int, int]:
        size = self.get_size()
        return size.columns, size.lines
