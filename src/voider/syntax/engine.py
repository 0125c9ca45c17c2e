"""Row lexer that classifies characters and carries state across rows."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, List, Optional, Tuple

from .categories import Highlight
from .languages import LanguageRegistry, LanguageSpec, default_registry
from .state import IN_BLOCK_COMMENT, NORMAL, HighlightState, InBlockComment, InString

if TYPE_CHECKING:  # pragma: no cover
    from voider.buffer.line import Line

ESCAPE = "\\"


def is_identifier_char(char: str) -> bool:
    return char == "_" or char.isalnum()


def overlay_matches(
    content: str, highlights: List[Highlight], query: Optional[str]
) -> None:
    """Reclassify every non-overlapping occurrence of ``query`` as a match."""

    if not query:
        return
    width = len(query)
    index = content.find(query)
    while index != -1:
        highlights[index : index + width] = [Highlight.MATCH] * width
        index = content.find(query, index + width)


class HighlightEngine:
    """Classifies one row at a time, starting from a carried-in state.

    The engine keeps a reference to the language registry it was built with;
    the registry is the only place language vocabulary comes from.
    """

    def __init__(self, registry: Optional[LanguageRegistry] = None) -> None:
        self.registry = registry or default_registry()

    def language_for(self, path: Optional[str | os.PathLike[str]]) -> LanguageSpec:
        return self.registry.for_path(path)

    def highlight_line(
        self,
        line: "Line",
        state: HighlightState,
        language: LanguageSpec,
        query: Optional[str] = None,
    ) -> HighlightState:
        """Rebuild ``line``'s classification and return its carried-out state."""

        highlights, carried = self.lex(line.content, state, language)
        overlay_matches(line.content, highlights, query)
        line.apply_highlights(highlights, state_in=state, state_out=carried)
        return carried

    def lex(
        self, text: str, state: HighlightState, language: LanguageSpec
    ) -> Tuple[List[Highlight], HighlightState]:
        highlights = [Highlight.NONE] * len(text)
        index = 0
        length = len(text)

        while index < length:
            if isinstance(state, InBlockComment):
                index, state = self._scan_block_comment(text, index, highlights, language)
                continue
            if isinstance(state, InString):
                index, state = self._scan_string(text, index, highlights, state.quote)
                continue
            index, state = self._scan_normal(text, index, highlights, language)

        if isinstance(state, InString) and not language.allows_multiline(state.quote):
            state = NORMAL
        return highlights, state

    def _scan_normal(
        self,
        text: str,
        index: int,
        highlights: List[Highlight],
        language: LanguageSpec,
    ) -> Tuple[int, HighlightState]:
        char = text[index]
        previous = text[index - 1] if index > 0 else ""

        if language.block_comment and text.startswith(language.block_comment[0], index):
            end = index + len(language.block_comment[0])
            _paint(highlights, index, end, Highlight.COMMENT)
            return end, IN_BLOCK_COMMENT

        if language.line_comment and text.startswith(language.line_comment, index):
            _paint(highlights, index, len(text), Highlight.COMMENT)
            return len(text), NORMAL

        if char in language.string_delimiters:
            highlights[index] = Highlight.STRING
            return index + 1, InString(char)

        if char == language.character_delimiter:
            end = _character_literal_end(text, index, char)
            if end is not None:
                _paint(highlights, index, end, Highlight.CHARACTER)
                return end, NORMAL
            return index + 1, NORMAL

        if is_identifier_char(previous):
            return index + 1, NORMAL

        if language.highlight_numbers and char.isdigit():
            end = _number_end(text, index)
            _paint(highlights, index, end, Highlight.NUMBER)
            return end, NORMAL

        if is_identifier_char(char):
            end = index
            while end < len(text) and is_identifier_char(text[end]):
                end += 1
            word = text[index:end]
            if word in language.primary_keywords:
                _paint(highlights, index, end, Highlight.PRIMARY_KEYWORD)
            elif word in language.secondary_keywords:
                _paint(highlights, index, end, Highlight.SECONDARY_KEYWORD)
            return end, NORMAL

        return index + 1, NORMAL

    def _scan_string(
        self, text: str, index: int, highlights: List[Highlight], quote: str
    ) -> Tuple[int, HighlightState]:
        while index < len(text):
            char = text[index]
            highlights[index] = Highlight.STRING
            if char == ESCAPE and index + 1 < len(text):
                highlights[index + 1] = Highlight.STRING
                index += 2
                continue
            index += 1
            if char == quote:
                return index, NORMAL
        return index, InString(quote)

    def _scan_block_comment(
        self,
        text: str,
        index: int,
        highlights: List[Highlight],
        language: LanguageSpec,
    ) -> Tuple[int, HighlightState]:
        if language.block_comment is None:
            return index, NORMAL
        closing = language.block_comment[1]
        found = text.find(closing, index)
        if found == -1:
            _paint(highlights, index, len(text), Highlight.COMMENT)
            return len(text), IN_BLOCK_COMMENT
        end = found + len(closing)
        _paint(highlights, index, end, Highlight.COMMENT)
        return end, NORMAL


def _paint(highlights: List[Highlight], start: int, end: int, kind: Highlight) -> None:
    highlights[start:end] = [kind] * (end - start)


def _number_end(text: str, index: int) -> int:
    end = index
    seen_point = False
    while end < len(text):
        char = text[end]
        if char.isdigit():
            end += 1
        elif (
            char == "."
            and not seen_point
            and end + 1 < len(text)
            and text[end + 1].isdigit()
        ):
            seen_point = True
            end += 1
        else:
            break
    return end


def _character_literal_end(text: str, index: int, delimiter: str) -> Optional[int]:
    """Return the end of ``'x'`` or ``'\\x'`` starting at ``index``, if any."""

    body = index + 1
    if body >= len(text):
        return None
    closing = body + 2 if text[body] == ESCAPE else body + 1
    if closing < len(text) and text[closing] == delimiter:
        return closing + 1
    return None


__all__ = ["HighlightEngine", "overlay_matches", "is_identifier_char"]
