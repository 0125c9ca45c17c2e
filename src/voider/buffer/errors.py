"""Failure taxonomy for document I/O."""

from __future__ import annotations

import os
from typing import Optional


class DocumentError(RuntimeError):
    """Base class for failures surfaced by ``Document``."""

    def __init__(
        self, message: str, *, path: Optional[str | os.PathLike[str]] = None
    ) -> None:
        super().__init__(message)
        self.path = os.fspath(path) if path is not None else None


class IoFailure(DocumentError):
    """Raised when a document cannot be read from or written to disk."""


class EncodingFailure(DocumentError):
    """Raised when file contents are not valid UTF-8.

    ``offset`` is the byte offset of the first undecodable sequence.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str | os.PathLike[str]] = None,
        offset: int = 0,
    ) -> None:
        super().__init__(message, path=path)
        self.offset = offset


__all__ = ["DocumentError", "IoFailure", "EncodingFailure"]
