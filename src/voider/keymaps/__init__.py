"""Declarative keymap registry.

Default bindings live in :mod:`voider.keymaps.defaults`, which imports the
action implementations and is therefore loaded on demand.
"""

from .models import ActionRef, Binding, normalize_token
from .registry import (
    KeymapConflictError,
    KeymapRegistry,
    RegistryStats,
    ResolutionMatch,
)

__all__ = [
    "ActionRef",
    "Binding",
    "normalize_token",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "ResolutionMatch",
]
