"""Text buffer: lines, documents, positions, and I/O failures."""

from .document import Document, split_lines
from .errors import DocumentError, EncodingFailure, IoFailure
from .line import DEFAULT_TAB_STOP, Line
from .state import Motion, Position, SearchDirection
from .validation import clamp_position

__all__ = [
    "Document",
    "Line",
    "Position",
    "SearchDirection",
    "Motion",
    "DocumentError",
    "IoFailure",
    "EncodingFailure",
    "DEFAULT_TAB_STOP",
    "clamp_position",
    "split_lines",
]
