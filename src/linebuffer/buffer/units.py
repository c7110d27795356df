"""1-based ordinal types used to address lines and columns.

``LineNumber`` and ``Column`` wrap plain integers so that a line number can
never be added to a column or compared with one by accident. Both are
1-based; ``array_index``/``zero_index`` give the storage offset.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar

from .errors import OutOfBoundsError

_O = TypeVar("_O", bound="_Ordinal")


@dataclass(frozen=True, slots=True, order=True)
class _Ordinal:
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(
                f"{type(self).__name__} expects an int, got {type(self.value).__name__}"
            )
        if self.value < 1:
            raise OutOfBoundsError(
                f"{type(self).__name__} must be >= 1, got {self.value}"
            )

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def __add__(self: _O, other: object) -> _O:
        if type(other) is type(self):
            return type(self)(self.value + other.value)  # type: ignore[attr-defined]
        if isinstance(other, int) and not isinstance(other, bool):
            return type(self)(self.value + other)
        return NotImplemented

    def __radd__(self: _O, other: object) -> _O:
        if isinstance(other, int) and not isinstance(other, bool):
            return type(self)(self.value + other)
        return NotImplemented

    def __sub__(self, other: object):
        if type(other) is type(self):
            return self.value - other.value  # type: ignore[attr-defined]
        if isinstance(other, int) and not isinstance(other, bool):
            return type(self)(self.value - other)
        return NotImplemented


@dataclass(frozen=True, slots=True, order=True)
class LineNumber(_Ordinal):
    """Number of a line inside a ``Text``; the first line is 1."""

    @property
    def array_index(self) -> int:
        return self.value - 1


@dataclass(frozen=True, slots=True, order=True)
class Column(_Ordinal):
    """Position inside a line, counted in UTF-8 bytes; the first byte is 1."""

    @property
    def zero_index(self) -> int:
        return self.value - 1


__all__ = ["LineNumber", "Column"]
