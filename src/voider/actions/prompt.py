"""Actions that drive the active prompt (search or "save as")."""

from __future__ import annotations

from voider.keymaps import ResolutionMatch
from voider.modes.base_mode import ModeContext, ModeResult


def start_search(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return context.editor.start_search()


def confirm_prompt(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    session = context.editor.prompt
    if session is None or not session.active:
        return ModeResult(consumed=False, status="no_prompt")
    session.confirm()
    return context.editor.finish_prompt()


def cancel_prompt(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    session = context.editor.prompt
    if session is None or not session.active:
        return ModeResult(consumed=False, status="no_prompt")
    session.cancel()
    return context.editor.finish_prompt()


def erase_prompt_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    session = context.editor.prompt
    if session is None or not session.active:
        return ModeResult(consumed=False, status="no_prompt")
    session.backspace()
    return ModeResult(consumed=True, status="prompt_edit")


__all__ = ["start_search", "confirm_prompt", "cancel_prompt", "erase_prompt_char"]
