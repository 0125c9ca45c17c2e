"""Prompt mode: line input for "save as" and incremental search."""

from __future__ import annotations

from voider.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import execute_match, require_keymap_registry
from .prompt import PromptSession


class PromptMode(Mode):
    name = "prompt"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("voider.modes.prompt")
        self._registry = require_keymap_registry(context)

    def on_enter(self, previous: str | None) -> None:
        del previous
        session = self._session()
        self.context.bus.emit("prompt.start", session.kind.value)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self.context.bus.emit("prompt.end", None)

    def handle_key(self, key: KeyInput) -> ModeResult:
        session = self._session()
        match = self._registry.resolve(self.name, key.token)
        if match is not None:
            result = execute_match(self.context, match)
        else:
            text = key.printable
            if text:
                session.append(text)
            result = ModeResult(consumed=True, status="prompt_edit")

        if session.active and session.hook is not None:
            session.hook.on_keystroke(key, session.text)
        return result

    def _session(self) -> PromptSession:
        session = self.context.editor.prompt
        if session is None:
            raise RuntimeError("Prompt mode entered without a prompt session")
        return session
