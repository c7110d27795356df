"""Bounds checks shared by ``Text`` and the reveal layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from .errors import ContractError, OutOfBoundsError, TextBufferError
from .location import Location, LocationRange, as_line_number
from .units import LineNumber

if TYPE_CHECKING:
    from .text import Text


def ensure_line_number(text: "Text", line_number: Union[LineNumber, int]) -> LineNumber:
    number = as_line_number(line_number)
    if number >= text.end_index:
        raise OutOfBoundsError(
            f"line {number} is outside a text of {text.line_count} lines",
            line_number=number,
        )
    return number


def ensure_location(text: "Text", location: Location) -> Location:
    """Check that ``location`` names a line of ``text`` and a boundary column in it."""

    if not isinstance(location, Location):
        raise TypeError(f"expected a Location, got {type(location).__name__}")
    if location.line >= text.end_index:
        raise OutOfBoundsError(
            f"line {location.line} is outside a text of {text.line_count} lines",
            location=location,
            line_number=location.line,
        )
    try:
        text[location.line].char_index(location.column)
    except TextBufferError as exc:
        exc.location = location
        exc.line_number = location.line
        raise
    return location


def ensure_range(text: "Text", bounds: LocationRange) -> LocationRange:
    if not isinstance(bounds, LocationRange):
        raise TypeError(f"expected a LocationRange, got {type(bounds).__name__}")
    ensure_location(text, bounds.start)
    ensure_location(text, bounds.end)
    return bounds


def ensure_non_negative(amount: int, *, what: str) -> int:
    if amount < 0:
        raise ContractError(f"{what} must be >= 0, got {amount}")
    return amount


__all__ = [
    "ensure_line_number",
    "ensure_location",
    "ensure_range",
    "ensure_non_negative",
]
