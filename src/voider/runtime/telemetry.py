"""Logging and profiling for voider, backed by telelog.

Modules fetch loggers through ``get_logger``, report one-off facts with
``record_event`` and wrap timed work in ``span``. The TUI owns the terminal,
so log output goes to ``VOIDER_LOG_FILE`` when set and to the console only
when ``VOIDER_LOG_CONSOLE`` asks for it.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "VOIDER_"
ROOT_LOGGER = "voider"
TRUTHY = frozenset({"1", "true", "yes", "on"})

_loggers: MutableMapping[str, Any] = {}
_config: Optional[Any] = None


@dataclass(frozen=True, slots=True)
class LogSettings:
    """Where log records go and how much of them to keep."""

    level: str = "INFO"
    console: bool = False
    colored: bool = True
    json: bool = False
    file: Optional[str] = None
    profiling: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "LogSettings":
        env = os.environ if environ is None else environ

        def flag(name: str) -> bool:
            return env.get(f"{ENV_PREFIX}{name}", "").lower() in TRUTHY

        return cls(
            level=env.get(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper(),
            console=flag("LOG_CONSOLE"),
            colored=not flag("NO_COLOR"),
            json=flag("LOG_JSON"),
            file=env.get(f"{ENV_PREFIX}LOG_FILE") or None,
            profiling=flag("PROFILE"),
        )

    def to_config(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colored)
        if self.json:
            config.with_json_format(True)
        if self.file:
            config.with_file_output(self.file)
        config.with_profiling(self.profiling)
        return config


def configure(settings: Optional[LogSettings] = None) -> LogSettings:
    """Apply ``settings`` (read from the environment by default).

    Loggers handed out before the call keep their old configuration; later
    ``get_logger`` calls build fresh ones.
    """

    global _config
    settings = settings or LogSettings.from_env()
    _config = settings.to_config()
    _loggers.clear()
    return settings


def get_logger(name: Optional[str] = None) -> Any:
    name = name or ROOT_LOGGER
    cached = _loggers.get(name)
    if cached is None:
        if _config is None:
            configure()
        cached = _loggers[name] = tl.Logger.with_config(name, _config)
    return cached


def _text(value: Any) -> str:
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _log(log: Any, level: str, message: str, fields: Dict[str, Any]) -> None:
    """Write ``fields`` as structured pairs when the level has a ``*_with`` form."""

    level = level.lower()
    structured = getattr(log, f"{level}_with", None)
    if structured is not None:
        pairs: List[Tuple[str, str]] = [
            (str(key), _text(value)) for key, value in fields.items()
        ]
        structured(message, pairs)
        return
    plain = getattr(log, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {fields}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    fields = {"event": name, **(data or {})}
    _log(get_logger(logger_name), level, f"event::{name}", fields)


@dataclass
class SpanHandle:
    """Lets the body of a ``span`` attach details to its failure record."""

    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block as ``name``.

    ``component`` also tracks the block as a telelog component (``True``
    reuses ``name``). ``metadata`` is pushed as logger context while the
    block runs. An escaping exception is logged with the handle's metadata
    and re-raised.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(
        name=name,
        component=name if component is True else (component or None),
        metadata={key: _text(value) for key, value in (metadata or {}).items()},
    )
    pushed = list(handle.metadata.items())

    with ExitStack() as stack:
        for key, value in pushed:
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if handle.component:
            stack.enter_context(log.track_component(handle.component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            fields: Dict[str, Any] = {"span": name, **handle.metadata}
            fields["reason"] = str(exc)
            if handle.component:
                fields["component"] = handle.component
            _log(log, "error", "span::fail", fields)
            raise


logger = get_logger()

__all__ = [
    "LogSettings",
    "SpanHandle",
    "configure",
    "get_logger",
    "logger",
    "record_event",
    "span",
]
