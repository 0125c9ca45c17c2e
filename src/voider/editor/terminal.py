"""The painting surface the editor draws onto."""

from __future__ import annotations

import re
from typing import List, NamedTuple, Protocol, Tuple

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


class Size(NamedTuple):
    width: int
    height: int


class TerminalDriver(Protocol):
    """Output side of a terminal: size query, row painting, cursor placement.

    Key input is pushed into ``Editor.process_key`` by whichever host owns
    the terminal (raw mode is the host's responsibility too).
    """

    def viewport_size(self) -> Size:
        """Full terminal size, including the status and message bars."""
        ...

    def paint(self, row: int, text: str) -> None:
        """Replace screen row ``row`` with ``text`` (may contain SGR markers)."""
        ...

    def set_cursor(self, x: int, y: int) -> None: ...

    def flush(self) -> None: ...


def strip_markers(text: str) -> str:
    return ANSI_ESCAPE.sub("", text)


class FrameBuffer:
    """In-memory ``TerminalDriver`` that keeps the last painted frame."""

    def __init__(self, width: int = 80, height: int = 24) -> None:
        self.size = Size(width, height)
        self.rows: List[str] = [""] * height
        self.cursor: Tuple[int, int] = (0, 0)
        self.generation = 0

    def resize(self, width: int, height: int) -> None:
        self.size = Size(width, height)
        self.rows = (self.rows + [""] * height)[:height]

    def viewport_size(self) -> Size:
        return self.size

    def paint(self, row: int, text: str) -> None:
        if 0 <= row < self.size.height:
            self.rows[row] = text

    def set_cursor(self, x: int, y: int) -> None:
        self.cursor = (x, y)

    def flush(self) -> None:
        self.generation += 1

    def plain_rows(self) -> List[str]:
        return [strip_markers(row) for row in self.rows]


__all__ = ["Size", "TerminalDriver", "FrameBuffer", "strip_markers"]
