"""Textual adapter that wires the Editor and its bus events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from voider.editor import Editor, FrameBuffer
from voider.modes import KeyInput, ModeResult
from voider.runtime import telemetry

Frame = Tuple[List[str], Tuple[int, int]]

RELAYED_EVENTS = (
    "prompt.start",
    "prompt.end",
    "document.saved",
    "editor.quit",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_frame: Callable[[List[str], Tuple[int, int]], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    request_exit: Callable[[], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges ``Editor`` key handling and frames to a Textual-friendly surface.

    The adapter paints into a ``FrameBuffer`` sized like the host widget and
    hands each finished frame (rows with SGR markers plus the cursor cell)
    to ``hooks.update_frame``.
    """

    def __init__(
        self,
        editor: Editor,
        hooks: TextualUIHooks,
        *,
        width: int = 80,
        height: int = 24,
    ) -> None:
        self.editor = editor
        self.hooks = hooks
        self.frame = FrameBuffer(width, height)
        self._last_status: Optional[str] = None
        self._subscribe_events()
        self.refresh()

    @property
    def should_quit(self) -> bool:
        return self.editor.should_quit

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).upper() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.editor.process_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        self.refresh()
        if self.editor.should_quit:
            self.hooks.request_exit()
        return result

    def resize(self, width: int, height: int) -> None:
        self.frame.resize(max(width, 1), max(height, 1))
        self.refresh()

    def refresh(self) -> Frame:
        """Paint a full frame and push it (and a changed status) to the hooks."""

        self.editor.refresh(self.frame)
        rows = list(self.frame.rows)
        self.hooks.update_frame(rows, self.frame.cursor)
        status = self.editor.status_text()
        if status != self._last_status:
            self._last_status = status
            self.hooks.update_status(status)
        return rows, self.frame.cursor

    def tick(self) -> None:
        """Repaint only when the message bar text expired since the last frame."""

        if self.editor.status_text() != self._last_status:
            self.refresh()

    def _subscribe_events(self) -> None:
        bus = self.editor.bus
        for event in RELAYED_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        line = " ".join(parts)
        telemetry.logger.debug(line)
        self.hooks.log(line)

    def _state_metadata(self) -> Dict[str, object]:
        editor = self.editor
        prompt = editor.prompt
        return {
            "mode": editor.mode or "?",
            "cursor": tuple(editor.cursor),
            "offset": tuple(editor.offset),
            "prompt": prompt.text if prompt is not None else "",
            "file": editor.document.file_name,
            "dirty": editor.document.is_dirty(),
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
