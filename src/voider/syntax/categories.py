"""Per-character highlight classifications and their display colors."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

Rgb = Tuple[int, int, int]

RESET_FOREGROUND = "\x1b[39m"


class Highlight(str, Enum):
    """Semantic tag attached to every character of a line."""

    NONE = "none"
    NUMBER = "number"
    STRING = "string"
    CHARACTER = "character"
    COMMENT = "comment"
    PRIMARY_KEYWORD = "primary_keyword"
    SECONDARY_KEYWORD = "secondary_keyword"
    MATCH = "match"

    @property
    def color(self) -> Rgb:
        return _COLORS[self]

    @property
    def marker(self) -> str:
        """24-bit SGR foreground escape for this classification.

        ``NONE`` resets to the terminal's default foreground.
        """

        if self is Highlight.NONE:
            return RESET_FOREGROUND
        r, g, b = self.color
        return f"\x1b[38;2;{r};{g};{b}m"


_COLORS: dict[Highlight, Rgb] = {
    Highlight.NONE: (255, 255, 255),
    Highlight.NUMBER: (180, 126, 141),
    Highlight.STRING: (211, 54, 130),
    Highlight.CHARACTER: (108, 113, 196),
    Highlight.COMMENT: (133, 153, 0),
    Highlight.PRIMARY_KEYWORD: (181, 137, 0),
    Highlight.SECONDARY_KEYWORD: (42, 161, 152),
    Highlight.MATCH: (38, 139, 210),
}


__all__ = ["Highlight", "Rgb", "RESET_FOREGROUND"]
