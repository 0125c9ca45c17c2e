"""Cursor positions, motions, and search direction."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class Position(NamedTuple):
    """Zero-based ``(row, col)``; ``col`` counts characters, not bytes."""

    row: int = 0
    col: int = 0


class SearchDirection(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


class Motion(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"


__all__ = ["Position", "SearchDirection", "Motion"]
