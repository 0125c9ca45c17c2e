"""Editor configuration and constants."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Callable, Optional, TypeVar

from .telemetry import ENV_PREFIX, record_event

T = TypeVar("T")

DEFAULT_HELP_MESSAGE = "HELP: F3 = find | F5 = save | F8 = quit"


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Tunables shared by the editor loop and the renderer."""

    tab_stop: int = 4
    quit_times: int = 3
    status_timeout: float = 5.0
    help_message: str = DEFAULT_HELP_MESSAGE

    def __post_init__(self) -> None:
        if self.tab_stop < 1:
            raise ValueError("tab_stop must be positive")
        if self.quit_times < 1:
            raise ValueError("quit_times must be positive")
        if self.status_timeout < 0:
            raise ValueError("status_timeout cannot be negative")

    @classmethod
    def from_env(cls, base: Optional["EditorConfig"] = None) -> "EditorConfig":
        """Return ``base`` (or the defaults) with ``VOIDER_*`` overrides applied."""

        config = base or cls()
        return replace(
            config,
            tab_stop=_env_value("TAB_STOP", int, config.tab_stop, minimum=1),
            quit_times=_env_value("QUIT_TIMES", int, config.quit_times, minimum=1),
            status_timeout=_env_value(
                "STATUS_TIMEOUT", float, config.status_timeout, minimum=0
            ),
        )


def _env_value(
    name: str, parse: Callable[[str], T], fallback: T, *, minimum: float
) -> T:
    raw = os.environ.get(f"{ENV_PREFIX}{name}")
    if raw is None:
        return fallback
    try:
        value = parse(raw)
    except ValueError:
        record_event(
            "config.invalid", level="warning", data={"name": name, "value": raw}
        )
        return fallback
    if value < minimum:  # type: ignore[operator]
        record_event(
            "config.invalid", level="warning", data={"name": name, "value": raw}
        )
        return fallback
    return value


__all__ = ["EditorConfig", "DEFAULT_HELP_MESSAGE"]
