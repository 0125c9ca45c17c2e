"""Incremental search session."""

from .session import SearchHost, SearchSession, SearchStatus

__all__ = ["SearchSession", "SearchStatus", "SearchHost"]
