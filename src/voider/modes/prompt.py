"""Modal prompt shared by "save as" and incremental search.

A prompt moves ``IDLE -> PROMPTING -> CONFIRMED | CANCELLED``. Search
prompts carry a hook object that sees every keystroke while prompting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Protocol

from .base_mode import KeyInput


class PromptKind(str, Enum):
    SAVE_AS = "save_as"
    SEARCH = "search"


class PromptStatus(str, Enum):
    IDLE = "idle"
    PROMPTING = "prompting"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class PromptHook(Protocol):
    def on_keystroke(self, key: KeyInput, text: str) -> None:
        """Called after the prompt text was updated for ``key``."""
        ...


@dataclass(slots=True)
class PromptSession:
    kind: PromptKind
    label: str
    hook: Optional[PromptHook] = None
    status: PromptStatus = PromptStatus.IDLE
    _typed: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(self._typed)

    @property
    def active(self) -> bool:
        return self.status is PromptStatus.PROMPTING

    @property
    def finished(self) -> bool:
        return self.status in {PromptStatus.CONFIRMED, PromptStatus.CANCELLED}

    def display(self) -> str:
        return f"{self.label}{self.text}"

    def begin(self) -> None:
        if self.status is not PromptStatus.IDLE:
            raise RuntimeError(f"Prompt already {self.status.value}")
        self._typed.clear()
        self.status = PromptStatus.PROMPTING

    def append(self, text: str) -> None:
        self._require_active()
        self._typed.append(text)

    def backspace(self) -> None:
        self._require_active()
        if self._typed:
            self._typed.pop()

    def confirm(self) -> None:
        """Accept the typed text; an empty prompt counts as cancelled."""

        self._require_active()
        if not self.text:
            self.status = PromptStatus.CANCELLED
            return
        self.status = PromptStatus.CONFIRMED

    def cancel(self) -> None:
        self._require_active()
        self._typed.clear()
        self.status = PromptStatus.CANCELLED

    def _require_active(self) -> None:
        if self.status is not PromptStatus.PROMPTING:
            raise RuntimeError(f"Prompt is {self.status.value}, not prompting")


__all__ = ["PromptKind", "PromptStatus", "PromptHook", "PromptSession"]
