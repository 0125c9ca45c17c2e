"""Runtime services: telemetry and editor configuration."""

from . import telemetry
from .config import EditorConfig
from .telemetry import LogSettings

__all__ = ["EditorConfig", "LogSettings", "telemetry"]
