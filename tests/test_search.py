from __future__ import annotations

from typing import List, Optional

from voider.buffer import Document, Motion, Position, SearchDirection
from voider.editor import Editor, FrameBuffer
from voider.modes import KeyInput
from voider.search import SearchSession, SearchStatus
from voider.syntax import Highlight


class RecordingHost:
    """Search host that records motions instead of moving through rows."""

    def __init__(self, document: Document, cursor: Position = Position(0, 0)) -> None:
        self.document = document
        self.cursor = cursor
        self.highlighted_word: Optional[str] = None
        self.motions: List[Motion] = []
        self.scrolls = 0

    def move_cursor(self, motion: Motion) -> None:
        self.motions.append(motion)
        delta = 1 if motion is Motion.RIGHT else -1
        self.cursor = Position(self.cursor.row, max(self.cursor.col + delta, 0))

    def scroll(self) -> None:
        self.scrolls += 1


def type_keys(editor: Editor, text: str) -> None:
    for char in text:
        editor.process_key(KeyInput(key=char, text=char))


def make_editor(*rows: str) -> Editor:
    return Editor(Document(rows))


def test_session_direction_follows_arrows() -> None:
    host = RecordingHost(Document(["ab ab ab"]))
    session = SearchSession(host)
    session.begin()

    session.on_keystroke(KeyInput("a", text="a"), "ab")
    assert session.direction is SearchDirection.FORWARD
    assert host.cursor == Position(0, 0)

    session.on_keystroke(KeyInput("RIGHT"), "ab")
    assert host.motions == [Motion.RIGHT]
    assert host.cursor == Position(0, 3)

    session.on_keystroke(KeyInput("UP"), "ab")
    assert session.direction is SearchDirection.BACKWARD
    assert host.cursor == Position(0, 0)

    session.on_keystroke(KeyInput("b", text="b"), "ab")
    assert session.direction is SearchDirection.FORWARD
    assert host.highlighted_word == "ab"


def test_advance_without_match_restores_cursor() -> None:
    host = RecordingHost(Document(["abc"]), Position(0, 1))
    session = SearchSession(host)
    session.begin()

    session.on_keystroke(KeyInput("DOWN"), "zz")

    assert host.motions == [Motion.RIGHT]
    assert host.cursor == Position(0, 1)
    assert session.last_match is None


def test_failed_advance_on_virtual_row_keeps_cursor() -> None:
    editor = make_editor("abc")
    editor.cursor = Position(1, 0)

    editor.process_key(KeyInput("F3"))
    type_keys(editor, "z")
    editor.process_key(KeyInput("RIGHT"))
    editor.process_key(KeyInput("DOWN"))

    assert editor.cursor == Position(1, 0)


def test_failed_advance_at_end_of_row_keeps_cursor() -> None:
    editor = make_editor("abc", "def")
    editor.cursor = Position(0, 3)

    editor.process_key(KeyInput("F3"))
    type_keys(editor, "z")
    editor.process_key(KeyInput("DOWN"))

    assert editor.cursor == Position(0, 3)

    editor.process_key(KeyInput("RIGHT"))
    assert editor.cursor == Position(0, 3)


def test_cancel_restores_cursor_and_clears_query() -> None:
    host = RecordingHost(Document(["xx needle"]))
    session = SearchSession(host)
    session.begin()
    session.on_keystroke(KeyInput("n", text="n"), "needle")
    assert host.cursor == Position(0, 3)

    session.finish(accepted=False)

    assert session.status is SearchStatus.CANCELLED
    assert host.cursor == Position(0, 0)
    assert host.highlighted_word is None
    assert host.document.highlighted_word is None


def test_editor_search_walks_matches_and_accepts() -> None:
    editor = make_editor("foo bar foo", "foo")
    editor.cursor = Position(0, 4)

    editor.process_key(KeyInput("F3"))
    assert editor.mode == "prompt"
    type_keys(editor, "foo")
    assert editor.cursor == Position(0, 8)
    assert editor.status_text() == (
        "Search (ESC to cancel, arrows to navigate): foo"
    )

    editor.process_key(KeyInput("RIGHT"))
    assert editor.cursor == Position(1, 0)

    editor.process_key(KeyInput("RIGHT"))
    assert editor.cursor == Position(0, 0)

    editor.process_key(KeyInput("LEFT"))
    assert editor.cursor == Position(1, 0)

    result = editor.process_key(KeyInput("ENTER"))

    assert result.status == "search_accepted"
    assert editor.mode == "edit"
    assert editor.cursor == Position(1, 0)
    assert editor.highlighted_word is None


def test_editor_search_escape_restores_cursor() -> None:
    editor = make_editor("foo bar foo")
    editor.cursor = Position(0, 4)

    editor.process_key(KeyInput("F3"))
    type_keys(editor, "bar")
    assert editor.cursor == Position(0, 4)
    type_keys(editor, "x")
    editor.process_key(KeyInput("ESC"))

    assert editor.cursor == Position(0, 4)
    assert editor.mode == "edit"
    assert editor.prompt is None


def test_empty_search_prompt_counts_as_cancel() -> None:
    editor = make_editor("abc")
    editor.cursor = Position(0, 2)

    editor.process_key(KeyInput("F3"))
    result = editor.process_key(KeyInput("ENTER"))

    assert result.status == "search_cancelled"
    assert editor.cursor == Position(0, 2)


def test_active_query_is_painted_as_match() -> None:
    editor = make_editor("one two one")
    frame = FrameBuffer(40, 5)

    editor.process_key(KeyInput("F3"))
    type_keys(editor, "one")
    editor.refresh(frame)

    assert Highlight.MATCH.marker in frame.rows[0]
    assert editor.document.line_at(0).highlights[:3] == (Highlight.MATCH,) * 3

    editor.process_key(KeyInput("ESC"))
    editor.refresh(frame)

    assert Highlight.MATCH.marker not in frame.rows[0]
