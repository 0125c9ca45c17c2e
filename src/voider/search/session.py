"""Interactive incremental search layered on ``Document.find``."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Protocol

from voider.buffer import Document, Motion, Position, SearchDirection
from voider.modes.base_mode import KeyInput
from voider.runtime import telemetry

BACKWARD_KEYS = frozenset({"LEFT", "UP"})
FORWARD_KEYS = frozenset({"RIGHT", "DOWN"})


class SearchStatus(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    ACCEPTED = "accepted"
    CANCELLED = "cancelled"


class SearchHost(Protocol):
    """What a search session needs from the editor driving it."""

    document: Document
    cursor: Position
    highlighted_word: Optional[str]

    def move_cursor(self, motion: Motion) -> None: ...

    def scroll(self) -> None: ...


class SearchSession:
    """One incremental search, from ``begin`` until ``finish``.

    The session is the prompt hook: each keystroke updates the direction,
    searches from the working cursor, and keeps the query as the host's
    highlighted word so every occurrence is overlaid as a match.
    """

    def __init__(self, host: SearchHost) -> None:
        self.host = host
        self.status = SearchStatus.IDLE
        self.direction = SearchDirection.FORWARD
        self.query = ""
        self.restore_point = host.cursor
        self.last_match: Optional[Position] = None

    def begin(self) -> None:
        if self.status is SearchStatus.ACTIVE:
            raise RuntimeError("Search session already active")
        self.status = SearchStatus.ACTIVE
        self.restore_point = self.host.cursor
        self.direction = SearchDirection.FORWARD
        self.query = ""
        self.last_match = None
        telemetry.record_event(
            "search.begin", level="debug", data={"cursor": self.restore_point}
        )

    def on_keystroke(self, key: KeyInput, text: str) -> None:
        if self.status is not SearchStatus.ACTIVE:
            return
        self.query = text
        before = self.host.cursor
        advanced = False
        if key.key in FORWARD_KEYS:
            self.direction = SearchDirection.FORWARD
            self.host.move_cursor(Motion.RIGHT)
            advanced = True
        elif key.key in BACKWARD_KEYS:
            self.direction = SearchDirection.BACKWARD
        else:
            self.direction = SearchDirection.FORWARD

        found = self.host.document.find(self.query, self.host.cursor, self.direction)
        if found is not None:
            self.host.cursor = found
            self.last_match = found
            self.host.scroll()
        elif advanced:
            self.host.cursor = before
        self.host.highlighted_word = self.query or None

    def finish(self, accepted: bool) -> None:
        """Leave the session; a cancelled search restores the entry cursor."""

        if self.status is not SearchStatus.ACTIVE:
            return
        self.status = SearchStatus.ACCEPTED if accepted else SearchStatus.CANCELLED
        if not accepted:
            self.host.cursor = self.restore_point
        self.host.scroll()
        self.host.highlighted_word = None
        self.host.document.highlight(None)
        telemetry.record_event(
            "search.finish",
            level="debug",
            data={"status": self.status.value, "query": self.query},
        )


__all__ = ["SearchSession", "SearchStatus", "SearchHost"]
