"""Built-in keymaps that seed each mode with the editor's bindings."""

from __future__ import annotations

from functools import partial
from typing import Iterable

from voider.actions import core as core_actions
from voider.actions import file as file_actions
from voider.actions import prompt as prompt_actions
from voider.buffer import Motion

from .models import ActionRef, Binding
from .registry import KeymapRegistry

EDIT_MODE = "edit"
PROMPT_MODE = "prompt"

_MOTION_KEYS: tuple[tuple[Motion, str], ...] = (
    (Motion.UP, "UP"),
    (Motion.DOWN, "DOWN"),
    (Motion.LEFT, "LEFT"),
    (Motion.RIGHT, "RIGHT"),
    (Motion.PAGE_UP, "PAGEUP"),
    (Motion.PAGE_DOWN, "PAGEDOWN"),
    (Motion.HOME, "HOME"),
    (Motion.END, "END"),
)

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    *(
        ActionRef(
            id=f"cursor.{motion.value}",
            handler=partial(core_actions.move_cursor, motion=motion),
            description=f"Move cursor {motion.value.replace('_', ' ')}",
        )
        for motion, _key in _MOTION_KEYS
    ),
    ActionRef(
        id="edit.line_break",
        handler=core_actions.insert_line_break,
        description="Split the line at the cursor",
    ),
    ActionRef(
        id="edit.delete_forward",
        handler=core_actions.delete_forward,
        description="Delete the character under the cursor",
    ),
    ActionRef(
        id="edit.delete_backward",
        handler=core_actions.delete_backward,
        description="Delete the character before the cursor",
    ),
    ActionRef(
        id="file.save",
        handler=file_actions.save_document,
        description="Save, prompting for a file name if needed",
    ),
    ActionRef(
        id="editor.quit",
        handler=file_actions.quit_editor,
        description="Quit (repeat to discard unsaved changes)",
    ),
    ActionRef(
        id="search.start",
        handler=prompt_actions.start_search,
        description="Incremental search",
    ),
    ActionRef(
        id="prompt.confirm",
        handler=prompt_actions.confirm_prompt,
        description="Accept the prompt",
    ),
    ActionRef(
        id="prompt.cancel",
        handler=prompt_actions.cancel_prompt,
        description="Abandon the prompt",
    ),
    ActionRef(
        id="prompt.backspace",
        handler=prompt_actions.erase_prompt_char,
        description="Erase the last prompt character",
    ),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    *(
        Binding(
            id=f"edit.{motion.value}",
            mode=EDIT_MODE,
            key=key,
            action_id=f"cursor.{motion.value}",
        )
        for motion, key in _MOTION_KEYS
    ),
    Binding(id="edit.enter", mode=EDIT_MODE, key="ENTER", action_id="edit.line_break"),
    Binding(
        id="edit.delete", mode=EDIT_MODE, key="DELETE", action_id="edit.delete_forward"
    ),
    Binding(
        id="edit.backspace",
        mode=EDIT_MODE,
        key="BACKSPACE",
        action_id="edit.delete_backward",
    ),
    Binding(id="edit.find", mode=EDIT_MODE, key="F3", action_id="search.start"),
    Binding(id="edit.find_ctrl", mode=EDIT_MODE, key="CTRL+F", action_id="search.start"),
    Binding(id="edit.save", mode=EDIT_MODE, key="F5", action_id="file.save"),
    Binding(id="edit.save_ctrl", mode=EDIT_MODE, key="CTRL+S", action_id="file.save"),
    Binding(id="edit.quit", mode=EDIT_MODE, key="F8", action_id="editor.quit"),
    Binding(id="edit.quit_ctrl", mode=EDIT_MODE, key="CTRL+Q", action_id="editor.quit"),
    Binding(id="prompt.enter", mode=PROMPT_MODE, key="ENTER", action_id="prompt.confirm"),
    Binding(id="prompt.escape", mode=PROMPT_MODE, key="ESC", action_id="prompt.cancel"),
    Binding(
        id="prompt.backspace",
        mode=PROMPT_MODE,
        key="BACKSPACE",
        action_id="prompt.backspace",
    ),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    actions: Iterable[ActionRef] = DEFAULT_ACTIONS,
    bindings: Iterable[Binding] = DEFAULT_BINDINGS,
) -> KeymapRegistry:
    for action in actions:
        registry.register_action(action, replace=True)
    for binding in bindings:
        registry.register_binding(binding, replace=True)
    return registry


__all__ = [
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "EDIT_MODE",
    "PROMPT_MODE",
    "load_default_keymaps",
]
