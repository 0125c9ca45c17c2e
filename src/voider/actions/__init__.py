"""High-level editing verbs bound by the keymaps."""

from .core import (
    delete_backward,
    delete_forward,
    insert_line_break,
    move_cursor,
    noop_action,
)
from .file import quit_editor, save_document
from .prompt import cancel_prompt, confirm_prompt, erase_prompt_char, start_search

__all__ = [
    "move_cursor",
    "insert_line_break",
    "delete_forward",
    "delete_backward",
    "noop_action",
    "save_document",
    "quit_editor",
    "start_search",
    "confirm_prompt",
    "cancel_prompt",
    "erase_prompt_char",
]
