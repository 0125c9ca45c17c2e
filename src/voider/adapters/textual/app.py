"""Executable Textual app that hosts the editor."""

from __future__ import annotations

import argparse
from typing import List, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from rich.cells import cell_len
    from rich.style import Style
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widget import Widget
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use voider.adapters.textual.app"
    ) from exc

from voider import __version__
from voider.editor import Editor
from voider.runtime import telemetry
from voider.runtime.config import EditorConfig

from .controller import TextualEditorAdapter, TextualUIHooks

STATUS_POLL_SECONDS = 0.5
CURSOR_STYLE = Style(reverse=True)

KEY_NAMES = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "delete": "DELETE",
    "up": "UP",
    "down": "DOWN",
    "left": "LEFT",
    "right": "RIGHT",
    "pageup": "PAGEUP",
    "pagedown": "PAGEDOWN",
    "home": "HOME",
    "end": "END",
}


def normalize_key(
    key: str, character: Optional[str]
) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
    """Map a Textual key name onto ``(key, text, modifiers)`` for the editor."""

    if key == "tab":
        return ("TAB", "\t", ())
    if key in KEY_NAMES:
        return (KEY_NAMES[key], None, ())
    if key.startswith("ctrl+"):
        name = key[len("ctrl+") :]
        if name == "h":
            return ("BACKSPACE", None, ())
        if len(name) == 1:
            return (name.upper(), None, ("CTRL",))
        return (KEY_NAMES.get(name, name.upper()), None, ("CTRL",))
    if key.startswith("f") and key[1:].isdigit():
        return (key.upper(), None, ())
    if character and character.isprintable():
        return (character, character, ())
    return None


def _cell_offset(plain: str, column: int) -> int:
    """Index of the character covering screen cell ``column``."""

    used = 0
    for index, char in enumerate(plain):
        used += cell_len(char)
        if used > column:
            return index
    return len(plain)


class EditorView(Widget, can_focus=True):
    """Full-screen widget showing the editor's last painted frame."""

    DEFAULT_CSS = """
    EditorView {
        width: 1fr;
        height: 1fr;
    }
    """

    def __init__(self) -> None:
        super().__init__(id="editor-view")
        self._rows: List[str] = []
        self._cursor: Tuple[int, int] = (0, 0)

    def show_frame(self, rows: List[str], cursor: Tuple[int, int]) -> None:
        self._rows = rows
        self._cursor = cursor
        self.refresh()

    def render(self) -> Text:
        lines: List[Text] = []
        cursor_x, cursor_y = self._cursor
        for index, row in enumerate(self._rows):
            line = Text.from_ansi(row, end="")
            if index == cursor_y:
                if cursor_x >= line.cell_len:
                    line.append(" " * (cursor_x - line.cell_len + 1))
                offset = _cell_offset(line.plain, cursor_x)
                line.stylize(CURSOR_STYLE, offset, offset + 1)
            lines.append(line)
        return Text("\n").join(lines)


class VoiderApp(App[int]):
    """Textual host: owns the terminal and forwards keys to the editor."""

    TITLE = f"Voider {__version__}"

    CSS = """
    Screen {
        layout: vertical;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "editor_quit", "Quit", priority=True),
    ]

    def __init__(
        self, path: Optional[str] = None, *, config: Optional[EditorConfig] = None
    ) -> None:
        super().__init__()
        self.path = path
        self.config = config or EditorConfig.from_env()
        self.adapter: TextualEditorAdapter | None = None
        self._view: EditorView | None = None

    def compose(self) -> ComposeResult:
        self._view = EditorView()
        yield self._view

    def on_mount(self) -> None:
        size = self.size
        editor = Editor.open(self.path, config=self.config)
        hooks = TextualUIHooks(
            update_frame=self._update_frame,
            request_exit=self._request_exit,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(
            editor, hooks, width=size.width, height=size.height
        )
        if self._view:
            self._view.focus()
        self.set_interval(STATUS_POLL_SECONDS, self._poll_status)

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            self.adapter.resize(event.size.width, event.size.height)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = normalize_key(event.key, event.character)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()
        event.prevent_default()

    def action_editor_quit(self) -> None:
        if self.adapter:
            self.adapter.handle_textual_key("Q", modifiers=("CTRL",))

    def _poll_status(self) -> None:
        if self.adapter:
            self.adapter.tick()

    def _update_frame(self, rows: List[str], cursor: Tuple[int, int]) -> None:
        if self._view:
            self._view.show_frame(rows, cursor)

    def _request_exit(self) -> None:
        self.exit(0)

    def _log_line(self, line: str) -> None:
        self.log.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="voider", description="Small terminal text editor."
    )
    parser.add_argument("path", nargs="?", help="File to open")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    telemetry.record_event("app.start", data={"path": args.path})
    app = VoiderApp(args.path)
    app.run()
    code = app.return_code or 0
    telemetry.record_event("app.exit", data={"code": code})
    return code


if __name__ == "__main__":  # pragma: no cover - manual launch
    raise SystemExit(main())
