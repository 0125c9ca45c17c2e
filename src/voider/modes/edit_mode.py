"""Edit mode: bound keys run actions, printable keys insert text."""

from __future__ import annotations

from voider.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import execute_match, require_keymap_registry


class EditMode(Mode):
    name = "edit"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("voider.modes.edit")
        self._registry = require_keymap_registry(context)

    def handle_key(self, key: KeyInput) -> ModeResult:
        match = self._registry.resolve(self.name, key.token)
        if match is not None:
            return execute_match(self.context, match)

        text = key.printable
        if text:
            self.context.editor.insert_text(text)
            return ModeResult(consumed=True, status="insert")

        return ModeResult(consumed=False, status="miss", message="unhandled")
