from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from voider.keymaps import ActionRef, Binding, KeymapRegistry
from voider.keymaps.defaults import load_default_keymaps
from voider.modes import (
    EditMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeResult,
    PromptKind,
    PromptMode,
    PromptSession,
    PromptStatus,
)
from voider.modes.mode_manager import ModeManager


class StubEditor:
    """Records the calls modes and actions make on the editor."""

    def __init__(self) -> None:
        self.inserted: List[str] = []
        self.prompt: Optional[PromptSession] = None
        self.finished: List[PromptStatus] = []

    def insert_text(self, text: str) -> None:
        self.inserted.append(text)

    def finish_prompt(self) -> ModeResult:
        assert self.prompt is not None
        self.finished.append(self.prompt.status)
        self.prompt = None
        return ModeResult(consumed=True, switch_to="edit", status="prompt_done")


class RecordingHook:
    def __init__(self) -> None:
        self.calls: List[tuple[str, str]] = []

    def on_keystroke(self, key: KeyInput, text: str) -> None:
        self.calls.append((key.token, text))


def make_context(registry: KeymapRegistry, editor: Any) -> ModeContext:
    extras: Dict[str, Any] = {"keymap_registry": registry}
    return ModeContext(editor=editor, bus=ModeBus(), extras=extras)


def make_manager(editor: Any) -> ModeManager:
    registry = load_default_keymaps(KeymapRegistry())
    manager = ModeManager(
        ModeContext(editor=editor, bus=ModeBus()), keymap_registry=registry
    )
    manager.register_mode(EditMode)
    manager.register_mode(PromptMode)
    return manager


def start_prompt(editor: StubEditor, hook: Any = None) -> PromptSession:
    session = PromptSession(kind=PromptKind.SEARCH, label="Search: ", hook=hook)
    session.begin()
    editor.prompt = session
    return session


def test_edit_mode_uses_keymap_binding() -> None:
    calls: List[str] = []
    registry = KeymapRegistry()
    registry.register_action(
        ActionRef(id="test.mark", handler=lambda context, match: calls.append("mark"))
    )
    registry.register_binding(
        Binding(id="edit.mark", mode="edit", key="ctrl+k", action_id="test.mark")
    )
    mode = EditMode(make_context(registry, StubEditor()))

    result = mode.handle_key(KeyInput("K", modifiers=("CTRL",)))

    assert calls == ["mark"]
    assert result.consumed is True


def test_edit_mode_inserts_printable_text() -> None:
    editor = StubEditor()
    mode = EditMode(make_context(KeymapRegistry(), editor))

    result = mode.handle_key(KeyInput("q", text="q"))

    assert result.status == "insert"
    assert editor.inserted == ["q"]


def test_edit_mode_ignores_control_chords_without_binding() -> None:
    editor = StubEditor()
    mode = EditMode(make_context(KeymapRegistry(), editor))

    result = mode.handle_key(KeyInput("X", modifiers=("CTRL",), text="x"))

    assert result.consumed is False
    assert result.status == "miss"
    assert editor.inserted == []


def test_modes_require_registry() -> None:
    context = ModeContext(editor=StubEditor(), bus=ModeBus())

    with pytest.raises(RuntimeError):
        EditMode(context)


def test_prompt_mode_feeds_hook_after_each_edit() -> None:
    editor = StubEditor()
    manager = make_manager(editor)
    hook = RecordingHook()
    start_prompt(editor, hook)
    manager.switch_mode("prompt")

    manager.handle_key(KeyInput("a", text="a"))
    manager.handle_key(KeyInput("b", text="b"))
    manager.handle_key(KeyInput("BACKSPACE"))
    manager.handle_key(KeyInput("LEFT"))

    assert hook.calls == [("a", "a"), ("b", "ab"), ("BACKSPACE", "a"), ("LEFT", "a")]


def test_prompt_enter_confirms_and_returns_to_edit_mode() -> None:
    editor = StubEditor()
    manager = make_manager(editor)
    hook = RecordingHook()
    start_prompt(editor, hook)
    manager.switch_mode("prompt")

    manager.handle_key(KeyInput("x", text="x"))
    result = manager.handle_key(KeyInput("ENTER"))

    assert result.status == "prompt_done"
    assert editor.finished == [PromptStatus.CONFIRMED]
    assert manager.active_mode.name == "edit"
    assert hook.calls == [("x", "x")]


def test_prompt_escape_cancels() -> None:
    editor = StubEditor()
    manager = make_manager(editor)
    start_prompt(editor)
    manager.switch_mode("prompt")

    manager.handle_key(KeyInput("x", text="x"))
    manager.handle_key(KeyInput("ESC"))

    assert editor.finished == [PromptStatus.CANCELLED]


def test_prompt_session_state_machine() -> None:
    session = PromptSession(kind=PromptKind.SAVE_AS, label="Save as: ")

    with pytest.raises(RuntimeError):
        session.append("x")

    session.begin()
    session.append("a")
    session.append("b")
    session.backspace()
    assert session.display() == "Save as: a"

    session.confirm()
    assert session.status is PromptStatus.CONFIRMED
    assert session.finished

    with pytest.raises(RuntimeError):
        session.begin()


def test_mode_manager_emits_prompt_events() -> None:
    editor = StubEditor()
    manager = make_manager(editor)
    events: List[tuple[str, object]] = []
    for name in ("prompt.start", "prompt.end"):
        manager.context.bus.subscribe(
            name, lambda payload, name=name: events.append((name, payload))
        )
    start_prompt(editor)

    manager.switch_mode("prompt")
    manager.handle_key(KeyInput("ESC"))

    assert events == [("prompt.start", "search"), ("prompt.end", None)]


def test_switch_to_unknown_mode_fails() -> None:
    manager = make_manager(StubEditor())

    with pytest.raises(KeyError):
        manager.switch_mode("visual")
