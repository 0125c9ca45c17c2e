"""Frame composition: text rows, welcome line, status and message bars."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from voider import __version__

if TYPE_CHECKING:  # pragma: no cover
    from .editor import Editor

STATUS_STYLE = "\x1b[30;46m"
STATUS_RESET = "\x1b[39;49m"
EMPTY_ROW = "~"
NAME_LIMIT = 20


def welcome_line(width: int) -> str:
    message = f"Voider editor -- version {__version__}"
    padding = max(width - len(message), 0) // 2
    spaces = " " * max(padding - 1, 0)
    return f"{EMPTY_ROW}{spaces}{message}"[:width]


def text_rows(editor: "Editor") -> List[str]:
    width = editor.screen.width
    height = editor.text_height
    start = editor.offset.col
    rows: List[str] = []
    for screen_row in range(height):
        line = editor.document.line_at(editor.offset.row + screen_row)
        if line is not None:
            rows.append(line.render(start, start + width))
        elif editor.document.is_empty() and screen_row == height // 3:
            rows.append(welcome_line(width))
        else:
            rows.append(EMPTY_ROW)
    return rows


def status_bar(editor: "Editor") -> str:
    width = editor.screen.width
    document = editor.document
    name = (document.file_name or "[No Name]")[:NAME_LIMIT]
    modified = " (modified)" if document.is_dirty() else ""
    left = f"{name} - {document.row_count()} lines{modified}"
    right = (
        f"{document.language.name} | "
        f"{editor.cursor.row + 1}/{document.row_count()}"
    )
    padding = " " * max(width - len(left) - len(right), 0)
    return f"{STATUS_STYLE}{(left + padding + right)[:width]}{STATUS_RESET}"


def message_bar(editor: "Editor") -> str:
    return editor.status_text()[: editor.screen.width]


def compose(editor: "Editor") -> List[str]:
    """Every screen row, top to bottom."""

    return [*text_rows(editor), status_bar(editor), message_bar(editor)]


__all__ = ["compose", "text_rows", "status_bar", "message_bar", "welcome_line"]
