"""Save and quit actions."""

from __future__ import annotations

from voider.keymaps import ResolutionMatch
from voider.modes.base_mode import ModeContext, ModeResult


def save_document(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return context.editor.request_save()


def quit_editor(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return context.editor.request_quit()


__all__ = ["save_document", "quit_editor"]
