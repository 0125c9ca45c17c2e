"""The editor loop state: cursor, viewport, status line, prompts, quitting."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Callable, Optional

from voider.buffer import (
    Document,
    DocumentError,
    IoFailure,
    Motion,
    Position,
    clamp_position,
)
from voider.keymaps import KeymapRegistry
from voider.keymaps.defaults import EDIT_MODE, PROMPT_MODE, load_default_keymaps
from voider.modes import (
    EditMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeManager,
    ModeResult,
    PromptHook,
    PromptKind,
    PromptMode,
    PromptSession,
    PromptStatus,
)
from voider.runtime import telemetry
from voider.runtime.config import EditorConfig
from voider.search import SearchSession
from voider.syntax import HighlightEngine

from . import view
from .terminal import Size, TerminalDriver

SEARCH_LABEL = "Search (ESC to cancel, arrows to navigate): "
SAVE_AS_LABEL = "Save as: "
QUIT_STATUSES = frozenset({"quit", "quit_pending"})
CHROME_ROWS = 2


@dataclass(slots=True)
class StatusMessage:
    text: str
    time: float


class Editor:
    """Single-document editor driven one key at a time.

    Hosts feed ``KeyInput`` events to ``process_key`` and call ``refresh``
    with a ``TerminalDriver`` to paint the result.
    """

    def __init__(
        self,
        document: Optional[Document] = None,
        *,
        config: Optional[EditorConfig] = None,
        keymaps: Optional[KeymapRegistry] = None,
        clock: Callable[[], float] = time.monotonic,
        size: Size = Size(80, 24),
    ) -> None:
        self.config = config or EditorConfig()
        self.document = document or Document(tab_stop=self.config.tab_stop)
        self.cursor = Position(0, 0)
        self.offset = Position(0, 0)
        self.screen = Size(max(size.width, 1), max(size.height, 1))
        self.highlighted_word: Optional[str] = None
        self.prompt: Optional[PromptSession] = None
        self.search: Optional[SearchSession] = None
        self.should_quit = False
        self.logger = telemetry.get_logger("voider.editor")
        self._clock = clock
        self._quit_times = self.config.quit_times
        self.status = StatusMessage(self.config.help_message, clock())

        registry = keymaps or load_default_keymaps(
            KeymapRegistry(logger_name="voider.keymaps")
        )
        self.bus = ModeBus()
        self.context = ModeContext(editor=self, bus=self.bus)
        self.modes = ModeManager(self.context, keymap_registry=registry)
        self.modes.register_mode(EditMode)
        self.modes.register_mode(PromptMode)

    @classmethod
    def open(
        cls,
        path: Optional[str | os.PathLike[str]] = None,
        *,
        config: Optional[EditorConfig] = None,
        engine: Optional[HighlightEngine] = None,
        keymaps: Optional[KeymapRegistry] = None,
        clock: Callable[[], float] = time.monotonic,
        size: Size = Size(80, 24),
    ) -> "Editor":
        """Start on ``path``; an unreadable file gives an empty untitled buffer."""

        config = config or EditorConfig()
        failure: Optional[str] = None
        if path is None:
            document = Document(engine=engine, tab_stop=config.tab_stop)
        else:
            try:
                document = Document.open(path, engine=engine, tab_stop=config.tab_stop)
            except DocumentError as exc:
                telemetry.record_event(
                    "editor.open_failed",
                    level="warning",
                    data={"path": path, "error": str(exc)},
                )
                document = Document(engine=engine, tab_stop=config.tab_stop)
                failure = f"ERR: Could not open file: {os.fspath(path)}"
        editor = cls(document, config=config, keymaps=keymaps, clock=clock, size=size)
        if failure:
            editor.set_status(failure)
        return editor

    @property
    def text_height(self) -> int:
        return max(self.screen.height - CHROME_ROWS, 1)

    @property
    def mode(self) -> str:
        active = self.modes.active_mode
        return active.name if active else ""

    def set_status(self, text: str) -> None:
        self.status = StatusMessage(text, self._clock())

    def status_text(self) -> str:
        if self.prompt is not None and self.prompt.active:
            return self.prompt.display()
        if self._clock() - self.status.time < self.config.status_timeout:
            return self.status.text
        return ""

    def process_key(self, key: KeyInput) -> ModeResult:
        result = self.modes.handle_key(key)
        quit_pending = self._quit_times < self.config.quit_times
        if result.status not in QUIT_STATUSES and quit_pending:
            self._quit_times = self.config.quit_times
            self.set_status("")
        self.scroll()
        return result

    def resize(self, width: int, height: int) -> None:
        self.screen = Size(max(width, 1), max(height, 1))
        self.scroll()

    def refresh(self, driver: TerminalDriver) -> None:
        """Highlight what is visible and paint a full frame onto ``driver``."""

        size = driver.viewport_size()
        if size != self.screen:
            self.resize(size.width, size.height)
        self.document.highlight(
            self.highlighted_word, limit_row=self.offset.row + self.text_height
        )
        for row, text in enumerate(view.compose(self)):
            driver.paint(row, text)
        driver.set_cursor(
            self._cursor_column() - self.offset.col, self.cursor.row - self.offset.row
        )
        driver.flush()

    # editing

    def insert_text(self, text: str) -> None:
        self.cursor = self.document.insert_text(self.cursor, text)

    def insert_line_break(self) -> None:
        self.document.insert(self.cursor, "\n")
        self.move_cursor(Motion.RIGHT)

    def delete_forward(self) -> None:
        self.document.delete(self.cursor)

    def delete_backward(self) -> None:
        if self.cursor.row > 0 or self.cursor.col > 0:
            self.move_cursor(Motion.LEFT)
            self.document.delete(self.cursor)

    # cursor and viewport

    def move_cursor(self, motion: Motion) -> None:
        row, col = clamp_position(self.document, self.cursor)
        rows = self.document.row_count()
        page = self.text_height

        if motion is Motion.UP:
            row = max(row - 1, 0)
        elif motion is Motion.DOWN:
            row = min(row + 1, rows)
        elif motion is Motion.LEFT:
            if col > 0:
                col -= 1
            elif row > 0:
                row -= 1
                col = self._row_length(row)
        elif motion is Motion.RIGHT:
            if col < self._row_length(row):
                col += 1
            elif row < rows:
                row += 1
                col = 0
        elif motion is Motion.PAGE_UP:
            row = max(row - page, 0)
        elif motion is Motion.PAGE_DOWN:
            row = min(row + page, rows)
        elif motion is Motion.HOME:
            col = 0
        elif motion is Motion.END:
            col = self._row_length(row)

        self.cursor = clamp_position(self.document, (row, col))

    def scroll(self) -> None:
        """Move the viewport so the cursor is visible."""

        self.cursor = clamp_position(self.document, self.cursor)
        row_offset, col_offset = self.offset
        width = self.screen.width
        height = self.text_height
        row = self.cursor.row
        column = self._cursor_column()

        if row < row_offset:
            row_offset = row
        elif row >= row_offset + height:
            row_offset = row - height + 1

        if column < col_offset:
            col_offset = column
        elif column >= col_offset + width:
            col_offset = column - width + 1

        self.offset = Position(row_offset, col_offset)

    # save, quit, prompts

    def request_save(self) -> ModeResult:
        if self.document.file_name is None:
            return self.start_prompt(PromptKind.SAVE_AS, SAVE_AS_LABEL)
        return self._write_document()

    def request_quit(self) -> ModeResult:
        if self.document.is_dirty():
            self._quit_times -= 1
            if self._quit_times > 0:
                self.set_status(
                    "WARNING! File has unsaved changes. "
                    f"Press F8 {self._quit_times} more times to quit."
                )
                return ModeResult(consumed=True, status="quit_pending")
        self.should_quit = True
        self.bus.emit("editor.quit", {"dirty": self.document.is_dirty()})
        return ModeResult(consumed=True, status="quit")

    def start_search(self) -> ModeResult:
        self.search = SearchSession(self)
        self.search.begin()
        return self.start_prompt(PromptKind.SEARCH, SEARCH_LABEL, hook=self.search)

    def start_prompt(
        self, kind: PromptKind, label: str, *, hook: Optional[PromptHook] = None
    ) -> ModeResult:
        session = PromptSession(kind=kind, label=label, hook=hook)
        session.begin()
        self.prompt = session
        return ModeResult(consumed=True, switch_to=PROMPT_MODE, status="prompt_start")

    def finish_prompt(self) -> ModeResult:
        """Act on a confirmed or cancelled prompt and return to edit mode."""

        session = self.prompt
        if session is None or not session.finished:
            raise RuntimeError("No finished prompt to act on")
        self.prompt = None
        self.set_status("")
        confirmed = session.status is PromptStatus.CONFIRMED

        if session.kind is PromptKind.SEARCH:
            search = self.search
            self.search = None
            if search is not None:
                search.finish(confirmed)
            return ModeResult(
                consumed=True,
                switch_to=EDIT_MODE,
                status="search_accepted" if confirmed else "search_cancelled",
                message=session.text or None,
            )

        if not confirmed:
            self.set_status("Save aborted.")
            return ModeResult(consumed=True, switch_to=EDIT_MODE, status="save_aborted")
        self.document.file_name = session.text
        result = self._write_document()
        result.switch_to = EDIT_MODE
        return result

    def _write_document(self) -> ModeResult:
        try:
            self.document.save()
        except IoFailure as exc:
            telemetry.record_event(
                "editor.save_failed",
                level="error",
                data={"path": self.document.file_name, "error": str(exc.__cause__ or exc)},
            )
            self.set_status("Error writing file!")
            return ModeResult(consumed=True, status="save_failed", message=str(exc))
        self.set_status("File saved successfully.")
        self.bus.emit("document.saved", self.document.file_name)
        return ModeResult(consumed=True, status="saved", message=self.document.file_name)

    def _row_length(self, row: int) -> int:
        line = self.document.line_at(row)
        return line.length() if line is not None else 0

    def _cursor_column(self) -> int:
        line = self.document.line_at(self.cursor.row)
        return line.render_column(self.cursor.col) if line is not None else 0


__all__ = ["Editor", "StatusMessage", "SEARCH_LABEL", "SAVE_AS_LABEL"]
