"""Mode manager, prompt state machine, and key dispatch."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .edit_mode import EditMode
from .mode_manager import ModeManager
from .prompt import PromptHook, PromptKind, PromptSession, PromptStatus
from .prompt_mode import PromptMode

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "EditMode",
    "PromptMode",
    "ModeManager",
    "PromptHook",
    "PromptKind",
    "PromptSession",
    "PromptStatus",
]
