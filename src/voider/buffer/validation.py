"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from .state import Position

if TYPE_CHECKING:  # pragma: no cover
    from .document import Document


def clamp_position(document: "Document", position: Tuple[int, int]) -> Position:
    """Clamp ``position`` into the document instead of rejecting it.

    ``row`` may equal ``row_count()`` (the virtual row after the last line)
    and ``col`` may equal the row length (append).
    """

    row, col = position
    row = max(0, min(row, document.row_count()))
    line = document.line_at(row)
    limit = line.length() if line is not None else 0
    return Position(row, max(0, min(col, limit)))


__all__ = ["clamp_position"]
