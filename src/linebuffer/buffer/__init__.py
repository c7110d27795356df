"""Line buffer, locations, and the errors they raise."""

from .errors import (
    ContractError,
    InvalidByteBoundaryError,
    OutOfBoundsError,
    TextBufferError,
)
from .line import Line
from .location import Location, LocationRange
from .text import Text
from .units import Column, LineNumber
from .validation import ensure_line_number, ensure_location, ensure_range

__all__ = [
    "Column",
    "LineNumber",
    "Line",
    "Location",
    "LocationRange",
    "Text",
    "TextBufferError",
    "OutOfBoundsError",
    "InvalidByteBoundaryError",
    "ContractError",
    "ensure_line_number",
    "ensure_location",
    "ensure_range",
]
