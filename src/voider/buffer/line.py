"""A single row of text with its render cache and highlight classification."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from wcwidth import wcwidth

from voider.syntax.categories import RESET_FOREGROUND, Highlight
from voider.syntax.state import NORMAL, HighlightState

from .state import SearchDirection

DEFAULT_TAB_STOP = 4
CONTROL_GLYPH = "?"


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


class Line:
    """Characters of one row plus everything derived from them.

    ``highlights`` always has one entry per character. Any edit resets it to
    ``Highlight.NONE`` and marks the line as needing a highlight pass; the
    document owns re-classification.
    """

    __slots__ = (
        "_content",
        "_tab_stop",
        "_highlights",
        "_highlighted",
        "_state_in",
        "_state_out",
        "_glyphs",
        "_columns",
        "_widths",
    )

    def __init__(self, content: str = "", *, tab_stop: int = DEFAULT_TAB_STOP) -> None:
        if tab_stop < 1:
            raise ValueError("tab_stop must be positive")
        self._content = content
        self._tab_stop = tab_stop
        self._state_in: HighlightState = NORMAL
        self._state_out: HighlightState = NORMAL
        self._highlights: List[Highlight] = []
        self._highlighted = False
        self._glyphs: List[str] = []
        self._columns: List[int] = []
        self._widths: List[int] = []
        self._refresh()

    def __repr__(self) -> str:
        return f"Line({self._content!r})"

    def __len__(self) -> int:
        return len(self._content)

    @property
    def content(self) -> str:
        return self._content

    @property
    def tab_stop(self) -> int:
        return self._tab_stop

    @property
    def highlights(self) -> Tuple[Highlight, ...]:
        return tuple(self._highlights)

    @property
    def state_in(self) -> HighlightState:
        return self._state_in

    @property
    def state_out(self) -> HighlightState:
        return self._state_out

    @property
    def is_highlighted(self) -> bool:
        return self._highlighted

    @property
    def rendered(self) -> str:
        """Full row as displayed: tabs expanded, control characters masked."""

        return "".join(self._glyphs)

    @property
    def display_width(self) -> int:
        if not self._columns:
            return 0
        return self._columns[-1] + self._widths[-1]

    def length(self) -> int:
        return len(self._content)

    def insert_at(self, col: int, text: str) -> None:
        col = _clamp(col, 0, len(self._content))
        self._content = self._content[:col] + text + self._content[col:]
        self._refresh()

    def delete_at(self, col: int) -> None:
        if col < 0 or col >= len(self._content):
            return
        self._content = self._content[:col] + self._content[col + 1 :]
        self._refresh()

    def append(self, other: "Line") -> None:
        self._content += other.content
        self._refresh()

    def split_at(self, col: int) -> Tuple["Line", "Line"]:
        col = _clamp(col, 0, len(self._content))
        return (
            Line(self._content[:col], tab_stop=self._tab_stop),
            Line(self._content[col:], tab_stop=self._tab_stop),
        )

    def find(
        self,
        query: str,
        col: int,
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[int]:
        """Return the column of the nearest match of ``query`` around ``col``.

        Forward picks the first match starting at or after ``col``; backward
        picks the last match starting strictly before ``col``.
        """

        if not query:
            return None
        col = _clamp(col, 0, len(self._content))
        if direction is SearchDirection.FORWARD:
            index = self._content.find(query, col)
        else:
            if col == 0:
                return None
            index = self._content.rfind(query, 0, col - 1 + len(query))
        return index if index != -1 else None

    def render_column(self, col: int) -> int:
        """Display column at which character ``col`` starts."""

        col = _clamp(col, 0, len(self._content))
        if col == len(self._content):
            return self.display_width
        return self._columns[col]

    def render(self, start: int, end: int) -> str:
        """Return display columns ``[start, end)`` with color markers.

        A character straddling ``end`` is dropped; one straddling ``start``
        contributes blanks for its visible columns.
        """

        start = max(start, 0)
        end = max(end, start)
        parts: List[str] = []
        current = Highlight.NONE
        for index, glyph in enumerate(self._glyphs):
            column = self._columns[index]
            width = self._widths[index]
            if column < start and (column + width <= start or width == 0):
                continue
            if column >= end or column + width > end:
                break
            kind = self._highlights[index]
            if kind is not current:
                parts.append(kind.marker)
                current = kind
            if column < start:
                glyph = " " * (column + width - start)
            parts.append(glyph)
        if current is not Highlight.NONE:
            parts.append(RESET_FOREGROUND)
        return "".join(parts)

    def apply_highlights(
        self,
        highlights: Sequence[Highlight],
        *,
        state_in: HighlightState,
        state_out: HighlightState,
    ) -> None:
        if len(highlights) != len(self._content):
            raise ValueError(
                f"expected {len(self._content)} classifications, got {len(highlights)}"
            )
        self._highlights = list(highlights)
        self._state_in = state_in
        self._state_out = state_out
        self._highlighted = True

    def invalidate(self) -> None:
        """Force the next highlight pass to re-lex this line."""

        self._highlighted = False

    def needs_highlight(self, state_in: HighlightState) -> bool:
        return not self._highlighted or self._state_in != state_in

    def _refresh(self) -> None:
        self._highlights = [Highlight.NONE] * len(self._content)
        self._highlighted = False
        self._glyphs = []
        self._columns = []
        self._widths = []
        column = 0
        for char in self._content:
            glyph, width = self._measure(char, column)
            self._glyphs.append(glyph)
            self._columns.append(column)
            self._widths.append(width)
            column += width

    def _measure(self, char: str, column: int) -> Tuple[str, int]:
        if char == "\t":
            width = self._tab_stop - column % self._tab_stop
            return " " * width, width
        width = wcwidth(char)
        if width < 0:
            return CONTROL_GLYPH, 1
        return char, width


__all__ = ["Line", "DEFAULT_TAB_STOP"]
