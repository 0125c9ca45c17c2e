"""Editor state, frame composition and the terminal surface it paints on."""

from .editor import SAVE_AS_LABEL, SEARCH_LABEL, Editor, StatusMessage
from .terminal import FrameBuffer, Size, TerminalDriver, strip_markers
from .view import compose, message_bar, status_bar, text_rows, welcome_line

__all__ = [
    "Editor",
    "StatusMessage",
    "SEARCH_LABEL",
    "SAVE_AS_LABEL",
    "FrameBuffer",
    "Size",
    "TerminalDriver",
    "strip_markers",
    "compose",
    "message_bar",
    "status_bar",
    "text_rows",
    "welcome_line",
]
