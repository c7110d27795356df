"""Locations and half-open location ranges inside a ``Text``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .errors import ContractError
from .line import as_column
from .units import Column, LineNumber


def as_line_number(value: Union[LineNumber, int]) -> LineNumber:
    if isinstance(value, LineNumber):
        return value
    if isinstance(value, Column):
        raise TypeError("expected a LineNumber, got a Column")
    return LineNumber(value)


@dataclass(frozen=True, slots=True, order=True)
class Location:
    """A ``(line, column)`` position; ordered by line first, then column.

    Locations are only meaningful for the ``Text`` they were computed from and
    only until that text is structurally edited.
    """

    line: LineNumber
    column: Column

    def __post_init__(self) -> None:
        object.__setattr__(self, "line", as_line_number(self.line))
        object.__setattr__(self, "column", as_column(self.column))

    def __str__(self) -> str:
        return f"({self.line}, {self.column})"


@dataclass(frozen=True, slots=True)
class LocationRange:
    """Half-open span ``[start, end)`` of locations."""

    start: Location
    end: Location

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ContractError(
                f"range end {self.end} precedes its start {self.start}",
                location=self.end,
            )

    @classmethod
    def empty_at(cls, location: Location) -> "LocationRange":
        return cls(location, location)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def __contains__(self, location: object) -> bool:
        if not isinstance(location, Location):
            return False
        return self.start <= location < self.end

    def truncated(self, end: Location) -> "LocationRange":
        """Return ``[start, end)``; ``end`` must lie inside this range or on its end."""

        if not self.start <= end <= self.end:
            raise ContractError(
                f"{end} is outside {self}", location=end
            )
        return LocationRange(self.start, end)

    def __str__(self) -> str:
        return f"{self.start}..<{self.end}"


__all__ = ["Location", "LocationRange", "as_line_number"]
