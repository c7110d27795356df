"""``Text``: the line-oriented buffer and its location arithmetic."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterable, Iterator, List, Optional, Tuple, Union

from linebuffer.runtime import telemetry

from .errors import ContractError, OutOfBoundsError
from .line import Line
from .location import Location, LocationRange, as_line_number
from .units import Column, LineNumber
from .validation import (
    ensure_line_number,
    ensure_location,
    ensure_non_negative,
    ensure_range,
)

LineNumberLike = Union[LineNumber, int]


def _as_line(value: Union[Line, str]) -> Line:
    if isinstance(value, Line):
        return value.copy()
    return Line(value)


def _byte_measure(line: Line) -> int:
    return line.byte_length


def _char_measure(line: Line) -> int:
    return len(line.value)


class Text:
    """Ordered collection of ``Line`` values indexed by ``LineNumber``.

    Every line but the last ends with ``"\\n"`` and the last one never does:
    content that ends in a newline is followed by an empty last line, exactly
    as ``from_string`` splits it. A text with no content holds a single empty
    line, so ``start_index`` is always 1 and ``end_index`` is one past the
    last line number.

    Lines handed in are copied and lines handed out are copies, so the text
    is the only owner of its content. Use ``edit_line`` or item assignment to
    change a line.
    """

    def __init__(
        self,
        lines: Optional[Iterable[Union[Line, str]]] = None,
        *,
        logger_name: Optional[str] = None,
    ) -> None:
        self._logger_name = logger_name
        self._lines: List[Line] = [_as_line(line) for line in lines or ()]
        if not self._lines:
            self._lines.append(Line())
        for index, line in enumerate(self._lines[:-1]):
            if not line.has_newline:
                raise ContractError(
                    f"line {index + 1} is not the last line and lacks a newline",
                    line_number=LineNumber(index + 1),
                )
        self._close_last_line()
        self.version = 0

    @classmethod
    def from_string(cls, text: str, *, logger_name: Optional[str] = None) -> "Text":
        """Split ``text`` into lines; ``raw_text`` reproduces it exactly.

        Only ``"\\n"`` terminates a line. A trailing ``"\\n"`` leaves an empty
        last line behind it.
        """

        pieces = text.split("\n")
        lines = [Line(piece + "\n") for piece in pieces[:-1]]
        lines.append(Line(pieces[-1]))
        loaded = cls(lines, logger_name=logger_name)
        telemetry.record_event(
            "text.load",
            level="debug",
            data={"lines": loaded.line_count, "bytes": len(text.encode("utf-8"))},
            logger_name=logger_name,
        )
        return loaded

    @property
    def start_index(self) -> LineNumber:
        return LineNumber(1)

    @property
    def end_index(self) -> LineNumber:
        return LineNumber(len(self._lines) + 1)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[Line]:
        return (line.copy() for line in self._lines)

    @property
    def is_empty(self) -> bool:
        return len(self._lines) == 1 and self._lines[0].is_empty

    @property
    def first_line(self) -> Line:
        return self._lines[0].copy()

    @property
    def last_line(self) -> Line:
        return self._lines[-1].copy()

    @property
    def last_line_number(self) -> LineNumber:
        return LineNumber(len(self._lines))

    @property
    def raw_text(self) -> str:
        return "".join(line.value for line in self._lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Text):
            return NotImplemented
        return self._lines == other._lines

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Text({[line.value for line in self._lines]!r})"

    def _close_last_line(self) -> None:
        if self._lines[-1].has_newline:
            self._lines.append(Line())

    def _line(self, line_number: LineNumberLike) -> Line:
        return self._lines[ensure_line_number(self, line_number).array_index]

    def __getitem__(self, key):
        """Index by line number, line-number slice, ``Location`` or ``LocationRange``."""

        if isinstance(key, LocationRange):
            return self.substring(key)
        if isinstance(key, Location):
            return self.char_at(key)
        if isinstance(key, slice):
            if key.step is not None:
                raise ContractError("text slices do not take a step")
            return self.slice(key.start, key.stop)
        return self._line(key).copy()

    def __setitem__(self, line_number: LineNumberLike, line: Union[Line, str]) -> None:
        number = ensure_line_number(self, line_number)
        replacement = _as_line(line)
        if number != self.last_line_number and not replacement.has_newline:
            raise ContractError(
                f"line {number} must end with a newline", line_number=number
            )
        self._lines[number.array_index] = replacement
        self._close_last_line()
        self.version += 1

    def slice(
        self,
        start: Optional[LineNumberLike] = None,
        end: Optional[LineNumberLike] = None,
        *,
        inclusive: bool = False,
    ) -> List[Line]:
        """Return copies of the lines in ``[start, end)``, or ``[start, end]`` when inclusive."""

        lower = self.start_index if start is None else as_line_number(start)
        if end is None:
            if inclusive:
                raise ContractError("an inclusive slice needs an upper bound")
            upper = self.end_index
        else:
            upper = as_line_number(end)
            if inclusive:
                ensure_line_number(self, upper)
                upper = upper + 1
        if lower > self.end_index:
            raise OutOfBoundsError(
                f"line {lower} is past the end of a text of {self.line_count} lines",
                line_number=lower,
            )
        if upper > self.end_index:
            raise OutOfBoundsError(
                f"line {upper} is past the end of a text of {self.line_count} lines",
                line_number=upper,
            )
        if lower > upper:
            raise ContractError(
                f"slice start {lower} is after its end {upper}", line_number=lower
            )
        return [line.copy() for line in self._lines[lower.array_index : upper.array_index]]

    @property
    def full_range(self) -> LocationRange:
        last = self._lines[-1]
        end = Location(self.last_line_number, Column(last.byte_length + 1))
        return LocationRange(Location(1, 1), end)

    def char_at(self, location: Location) -> str:
        return self._line(ensure_location(self, location).line).char_at(location.column)

    def substring(self, bounds: LocationRange) -> str:
        start, end = ensure_range(self, bounds).start, bounds.end
        if start.line == end.line:
            return self._line(start.line).substring(start.column, end.column)

        parts = [self._line(start.line).substring(start.column)]
        for line in self._lines[start.line.value : end.line.array_index]:
            parts.append(line.value)
        parts.append(self._line(end.line).substring(None, end.column))
        return "".join(parts)

    def push_line(self, line: Union[Line, str]) -> None:
        """Append ``line`` in place of the empty last line.

        The last line is empty for an empty text and after a final newline;
        any other last line lacks a newline and cannot be pushed after.
        """

        addition = _as_line(line)
        with telemetry.span(
            "text::push_line",
            logger_name=self._logger_name,
            component="text",
            metadata={"line": self.last_line_number},
        ):
            if not self._lines[-1].is_empty:
                raise ContractError(
                    "cannot push after a last line that lacks a newline",
                    line_number=self.last_line_number,
                )
            self._lines[-1] = addition
            self._close_last_line()
            self.version += 1

    def insert_line(self, line: Union[Line, str], before: LineNumberLike) -> None:
        """Insert ``line`` so that it takes the number ``before``."""

        addition = _as_line(line)
        number = as_line_number(before)
        with telemetry.span(
            "text::insert_line",
            logger_name=self._logger_name,
            component="text",
            metadata={"before": number},
        ):
            if number > self.end_index:
                raise OutOfBoundsError(
                    f"cannot insert before line {number} in a text of "
                    f"{self.line_count} lines",
                    line_number=number,
                )
            if number == self.end_index:
                self.push_line(addition)
                return
            if not addition.has_newline:
                raise ContractError(
                    f"line inserted before line {number} must end with a newline",
                    line_number=number,
                )
            self._lines.insert(number.array_index, addition)
            self.version += 1

    def remove_line(self, line_number: LineNumberLike) -> Line:
        number = ensure_line_number(self, line_number)
        with telemetry.span(
            "text::remove_line",
            logger_name=self._logger_name,
            component="text",
            metadata={"line": number},
        ) as handle:
            removed = self._lines.pop(number.array_index)
            if not self._lines:
                self._lines.append(Line())
            self._close_last_line()
            handle.add_metadata("bytes", removed.byte_length)
            self.version += 1
            return removed

    @contextmanager
    def edit_line(self, line_number: LineNumberLike) -> Iterator[Line]:
        """Yield a copy of a line and store it back if the block succeeds."""

        number = ensure_line_number(self, line_number)
        draft = self._lines[number.array_index].copy()
        yield draft
        self[number] = draft

    def _advance(
        self,
        line_number: LineNumber,
        position: int,
        amount: int,
        measure: Callable[[Line], int],
    ) -> Optional[Tuple[LineNumber, int]]:
        # ``position`` is a 0-based offset in the units ``measure`` counts.
        number = line_number
        last = self.last_line_number
        while True:
            room = measure(self._lines[number.array_index]) - position
            if number == last:
                if amount > room:
                    return None
                return number, position + amount
            if amount < room:
                return number, position + amount
            amount -= room
            number = number + 1
            position = 0

    def location_offset_by(self, location: Location, byte_offset: int) -> Optional[Location]:
        """Move ``byte_offset`` UTF-8 bytes forward from ``location``.

        Returns ``None`` when the walk runs past the end of the text; landing
        exactly on ``full_range.end`` is allowed. The position after a
        newline is reported as column 1 of the next line. Raises
        ``InvalidByteBoundaryError`` if the landing column splits a character.
        """

        ensure_location(self, location)
        ensure_non_negative(byte_offset, what="byte offset")
        landing = self._advance(
            location.line, location.column.zero_index, byte_offset, _byte_measure
        )
        if landing is None:
            return None
        number, index = landing
        return ensure_location(self, Location(number, Column(index + 1)))

    def location_offset_by_character_count(
        self, location: Location, count: int
    ) -> Optional[Location]:
        """Move ``count`` characters (codepoints) forward from ``location``.

        Same end-of-text policy as ``location_offset_by``.
        """

        ensure_location(self, location)
        ensure_non_negative(count, what="character count")
        start = self._lines[location.line.array_index].char_index(location.column)
        landing = self._advance(location.line, start, count, _char_measure)
        if landing is None:
            return None
        number, index = landing
        return Location(number, self._lines[number.array_index].column_for_char_index(index))

    def offset(self, from_: Location, to: Location) -> int:
        """Signed byte distance from ``from_`` to ``to``; negative when ``to`` comes first."""

        ensure_location(self, from_)
        ensure_location(self, to)
        if from_ == to:
            return 0

        sign = 1
        if to < from_:
            from_, to = to, from_
            sign = -1

        if from_.line == to.line:
            return sign * (to.column - from_.column)

        distance = self._lines[from_.line.array_index].byte_length - from_.column.zero_index
        for line in self._lines[from_.line.value : to.line.array_index]:
            distance += line.byte_length
        distance += to.column.zero_index
        return sign * distance


__all__ = ["Text"]
