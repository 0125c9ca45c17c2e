"""Lexical state carried from the end of one row into the next."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class Normal:
    """Plain code: no construct is open."""


@dataclass(frozen=True, slots=True)
class InString:
    """Inside a string literal opened by ``quote``."""

    quote: str

    def __post_init__(self) -> None:
        if len(self.quote) != 1:
            raise ValueError("quote must be a single character")


@dataclass(frozen=True, slots=True)
class InBlockComment:
    """Inside a block comment that has not been closed yet."""


HighlightState = Union[Normal, InString, InBlockComment]

NORMAL: HighlightState = Normal()
IN_BLOCK_COMMENT: HighlightState = InBlockComment()


__all__ = [
    "HighlightState",
    "Normal",
    "InString",
    "InBlockComment",
    "NORMAL",
    "IN_BLOCK_COMMENT",
]
