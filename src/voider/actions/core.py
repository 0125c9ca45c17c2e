"""Editing and cursor-motion actions bound in edit mode."""

from __future__ import annotations

from voider.buffer import Motion
from voider.keymaps import ResolutionMatch
from voider.modes.base_mode import ModeContext, ModeResult


def move_cursor(
    context: ModeContext, match: ResolutionMatch, *, motion: Motion
) -> ModeResult:
    del match
    context.editor.move_cursor(motion)
    return ModeResult(consumed=True, status="move", message=None)


def insert_line_break(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.editor.insert_line_break()
    return ModeResult(consumed=True, status="edit")


def delete_forward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.editor.delete_forward()
    return ModeResult(consumed=True, status="edit")


def delete_backward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.editor.delete_backward()
    return ModeResult(consumed=True, status="edit")


def noop_action(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, status="noop")


__all__ = [
    "move_cursor",
    "insert_line_break",
    "delete_forward",
    "delete_backward",
    "noop_action",
]
