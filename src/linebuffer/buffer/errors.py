"""Errors raised by the buffer layer.

Every failure is a caller contract violation reported synchronously; nothing
here is transient or worth retrying.
"""

from __future__ import annotations

from typing import Any


class TextBufferError(RuntimeError):
    """Base class for buffer failures, carrying the offending coordinates."""

    def __init__(
        self,
        message: str,
        *,
        location: Any = None,
        line_number: Any = None,
        column: Any = None,
    ) -> None:
        super().__init__(message)
        self.location = location
        self.line_number = line_number
        self.column = column


class OutOfBoundsError(TextBufferError, IndexError):
    """A line number or column lies outside the range valid for the operation."""


class InvalidByteBoundaryError(TextBufferError, ValueError):
    """A column points inside a multi-byte UTF-8 sequence."""


class ContractError(TextBufferError, ValueError):
    """An argument breaks a documented precondition of the operation."""


__all__ = [
    "TextBufferError",
    "OutOfBoundsError",
    "InvalidByteBoundaryError",
    "ContractError",
]
