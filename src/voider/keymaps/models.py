"""Dataclasses describing keymap bindings and action metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping

MODIFIERS = ("CTRL", "ALT", "SHIFT")


def normalize_token(token: str) -> str:
    """Canonical ``MOD+MOD+KEY`` spelling; modifiers upper-cased and ordered."""

    parts = [part.strip() for part in token.split("+")]
    if len(parts) > 1 and parts[-1] == "" and parts[-2] == "":
        parts = parts[:-2] + ["+"]
    if not parts or not parts[-1]:
        raise ValueError(f"invalid key token {token!r}")
    key = parts[-1]
    modifiers = {part.upper() for part in parts[:-1] if part}
    unknown = modifiers - set(MODIFIERS)
    if unknown:
        raise ValueError(f"unknown modifiers {sorted(unknown)} in {token!r}")
    ordered = [modifier for modifier in MODIFIERS if modifier in modifiers]
    if len(key) > 1 or ordered:
        key = key.upper()
    return "+".join(ordered + [key])


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Callable metadata used during binding execution."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key token in one mode with an action."""

    id: str
    mode: str
    key: str
    action_id: str
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")
        object.__setattr__(self, "key", normalize_token(self.key))


__all__ = ["ActionRef", "Binding", "normalize_token", "MODIFIERS"]
