"""Syntax highlighting: classifications, lexical state, languages, lexer."""

from .categories import RESET_FOREGROUND, Highlight
from .engine import HighlightEngine, overlay_matches
from .languages import (
    PLAIN_TEXT,
    LanguageRegistry,
    LanguageSpec,
    default_registry,
    load_default_languages,
)
from .state import (
    IN_BLOCK_COMMENT,
    NORMAL,
    HighlightState,
    InBlockComment,
    InString,
    Normal,
)

__all__ = [
    "Highlight",
    "RESET_FOREGROUND",
    "HighlightEngine",
    "overlay_matches",
    "LanguageRegistry",
    "LanguageSpec",
    "PLAIN_TEXT",
    "default_registry",
    "load_default_languages",
    "HighlightState",
    "Normal",
    "InString",
    "InBlockComment",
    "NORMAL",
    "IN_BLOCK_COMMENT",
]
