"""Document: ordered lines plus file metadata, editing and highlighting."""

from __future__ import annotations

import os
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from voider.runtime import telemetry
from voider.syntax import NORMAL, HighlightEngine, LanguageSpec

from .errors import EncodingFailure, IoFailure
from .line import DEFAULT_TAB_STOP, Line
from .state import Position, SearchDirection
from .validation import clamp_position

LINE_BREAK = "\n"


def split_lines(text: str) -> List[str]:
    """Split file text into rows; a single trailing newline ends the last row.

    ``Document.save`` writes no trailing newline, so a document ending in an
    empty row comes back one row shorter.
    """

    if not text:
        return []
    if text.endswith(LINE_BREAK):
        text = text[:-1]
    return [row[:-1] if row.endswith("\r") else row for row in text.split(LINE_BREAK)]


class Document:
    """In-memory buffer: a list of ``Line`` objects and their metadata.

    Every mutation re-runs the highlighter from the edited row; rows whose
    carried-in state did not change keep their cached classification.
    """

    def __init__(
        self,
        lines: Iterable[str] = (),
        *,
        file_name: Optional[str | os.PathLike[str]] = None,
        engine: Optional[HighlightEngine] = None,
        tab_stop: int = DEFAULT_TAB_STOP,
    ) -> None:
        self._engine = engine or HighlightEngine()
        self._tab_stop = tab_stop
        self._lines: List[Line] = [Line(text, tab_stop=tab_stop) for text in lines]
        self._file_name = os.fspath(file_name) if file_name is not None else None
        self._language = self._engine.language_for(self._file_name)
        self._dirty = False
        self._query: Optional[str] = None
        self.logger = telemetry.get_logger("voider.buffer.document")
        self.highlight()

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        file_name: Optional[str | os.PathLike[str]] = None,
        engine: Optional[HighlightEngine] = None,
        tab_stop: int = DEFAULT_TAB_STOP,
    ) -> "Document":
        return cls(split_lines(text), file_name=file_name, engine=engine, tab_stop=tab_stop)

    @classmethod
    def open(
        cls,
        path: str | os.PathLike[str],
        *,
        engine: Optional[HighlightEngine] = None,
        tab_stop: int = DEFAULT_TAB_STOP,
    ) -> "Document":
        """Read ``path`` as UTF-8; raise ``IoFailure`` or ``EncodingFailure``."""

        with telemetry.span(
            "document::open", component="buffer", metadata={"path": path}
        ) as handle:
            try:
                with open(path, "rb") as stream:
                    raw = stream.read()
            except OSError as exc:
                raise IoFailure(f"Could not open file: {path}", path=path) from exc
            try:
                text = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise EncodingFailure(
                    f"File is not valid UTF-8: {path}", path=path, offset=exc.start
                ) from exc
            document = cls.from_text(
                text, file_name=path, engine=engine, tab_stop=tab_stop
            )
            handle.add_metadata("rows", document.row_count())
            handle.add_metadata("language", document.language.name)
            return document

    @property
    def file_name(self) -> Optional[str]:
        return self._file_name

    @file_name.setter
    def file_name(self, value: Optional[str | os.PathLike[str]]) -> None:
        self._file_name = os.fspath(value) if value is not None else None
        language = self._engine.language_for(self._file_name)
        if language != self._language:
            self._language = language
            self._invalidate(0)
            self.highlight(self._query)

    @property
    def language(self) -> LanguageSpec:
        return self._language

    @property
    def highlighted_word(self) -> Optional[str]:
        return self._query

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self._lines)

    def row_count(self) -> int:
        return len(self._lines)

    def is_empty(self) -> bool:
        return not self._lines

    def is_dirty(self) -> bool:
        return self._dirty

    def line_at(self, index: int) -> Optional[Line]:
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    def snapshot(self) -> Sequence[str]:
        """Return the current row contents without exposing the lines."""

        return tuple(line.content for line in self._lines)

    def text(self) -> str:
        return LINE_BREAK.join(self.snapshot())

    def save(self) -> None:
        """Write all rows joined by single newlines; clear dirty on success."""

        if self._file_name is None:
            raise IoFailure("No file name set")
        with telemetry.span(
            "document::save", component="buffer", metadata={"path": self._file_name}
        ) as handle:
            try:
                with open(self._file_name, "w", encoding="utf-8", newline="") as stream:
                    stream.write(self.text())
            except OSError as exc:
                raise IoFailure(
                    f"Could not write file: {self._file_name}", path=self._file_name
                ) from exc
            handle.add_metadata("rows", self.row_count())
            self._dirty = False

    def save_as(self, path: str | os.PathLike[str]) -> None:
        self.file_name = path
        self.save()

    def insert(self, position: Tuple[int, int], char: str) -> None:
        """Insert ``char`` at ``position``; a line break splits the row."""

        if not char:
            return
        if LINE_BREAK in char and char != LINE_BREAK:
            self.insert_text(position, char)
            return
        row, col = clamp_position(self, position)
        if char == LINE_BREAK:
            self._insert_line_break(row, col)
        elif row == len(self._lines):
            self._lines.append(Line(char, tab_stop=self._tab_stop))
        else:
            self._lines[row].insert_at(col, char)
        self._dirty = True
        self._refresh_from(row)

    def insert_text(self, position: Tuple[int, int], text: str) -> Position:
        """Insert a run of text that may contain line breaks.

        Returns the position just after the inserted text.
        """

        row, col = clamp_position(self, position)
        chunks = split_lines(text + LINE_BREAK) if text else []
        for index, chunk in enumerate(chunks):
            if index:
                self.insert((row, col), LINE_BREAK)
                row, col = row + 1, 0
            if chunk:
                if row == len(self._lines):
                    self._lines.append(Line(chunk, tab_stop=self._tab_stop))
                else:
                    self._lines[row].insert_at(col, chunk)
                col += len(chunk)
                self._dirty = True
                self._refresh_from(row)
        return Position(row, col)

    def delete(self, position: Tuple[int, int]) -> None:
        """Remove the character at ``position`` or join the next row into it."""

        row, col = clamp_position(self, position)
        if row >= len(self._lines):
            return
        line = self._lines[row]
        if col < line.length():
            line.delete_at(col)
        elif row + 1 < len(self._lines):
            line.append(self._lines.pop(row + 1))
        else:
            return
        self._dirty = True
        self._refresh_from(row)

    def find(
        self,
        query: str,
        start: Tuple[int, int],
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[Position]:
        """Case-sensitive search from ``start``, wrapping around once.

        The start row is visited first (from the start column) and once more
        at the end of the wrap, so a match before the start column is found.
        """

        if not query or not self._lines:
            return None
        count = len(self._lines)
        forward = direction is SearchDirection.FORWARD
        row, col = clamp_position(self, start)
        if row == count:
            row = 0 if forward else count - 1
            col = 0 if forward else self._lines[row].length()

        with telemetry.span(
            "document::find",
            component="search",
            metadata={"direction": direction.value, "row": row, "col": col},
        ) as handle:
            for step in range(count + 1):
                if step:
                    row = (row + 1) % count if forward else (row - 1) % count
                    col = 0 if forward else self._lines[row].length()
                found = self._lines[row].find(query, col, direction)
                if found is not None:
                    handle.add_metadata("match", (row, found))
                    return Position(row, found)
            handle.add_metadata("match", None)
            return None

    def highlight(
        self, query: Optional[str] = None, limit_row: Optional[int] = None
    ) -> None:
        """Classify rows ``0..limit_row`` (inclusive; all rows by default).

        Rows are re-lexed only when their content changed, their carried-in
        state differs from the one they were lexed with, or ``query`` differs
        from the previous pass.
        """

        query = query or None
        if query != self._query:
            self._query = query
            self._invalidate(0)
        if not self._lines:
            return
        last = len(self._lines) - 1
        if limit_row is not None:
            last = max(0, min(limit_row, last))
        self._highlight_rows(0, last)

    def _insert_line_break(self, row: int, col: int) -> None:
        if row == len(self._lines):
            self._lines.append(Line(tab_stop=self._tab_stop))
            return
        left, right = self._lines[row].split_at(col)
        self._lines[row : row + 1] = [left, right]

    def _refresh_from(self, row: int) -> None:
        if not self._lines:
            return
        row = max(0, min(row, len(self._lines) - 1))
        self._highlight_rows(row, len(self._lines) - 1, stable_after=row)

    def _highlight_rows(
        self, first: int, last: int, *, stable_after: Optional[int] = None
    ) -> None:
        state = NORMAL
        if first > 0:
            previous = self._lines[first - 1]
            if not previous.is_highlighted:
                first = 0
            else:
                state = previous.state_out
        relexed = 0
        for index in range(first, last + 1):
            line = self._lines[index]
            if line.needs_highlight(state):
                state = self._engine.highlight_line(
                    line, state, self._language, self._query
                )
                relexed += 1
            elif stable_after is not None and index > stable_after:
                break
            else:
                state = line.state_out
        if relexed > 1:
            telemetry.record_event(
                "document.highlight",
                level="debug",
                data={"first": first, "relexed": relexed},
                logger_name="voider.buffer.document",
            )

    def _invalidate(self, first: int) -> None:
        for line in self._lines[first:]:
            line.invalidate()


__all__ = ["Document", "split_lines", "LINE_BREAK"]
