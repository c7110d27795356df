"""A single line of buffer content, addressed by UTF-8 byte columns."""

from __future__ import annotations

from typing import Optional, Tuple, Union

from .errors import ContractError, InvalidByteBoundaryError, OutOfBoundsError
from .units import Column, LineNumber

ColumnLike = Union[Column, int]

# Characters str.splitlines() treats as line boundaries.
LINE_BREAKS = frozenset("\n\r\x0b\x0c\x1c\x1d\x1e\x85\u2028\u2029")


def as_column(value: ColumnLike) -> Column:
    if isinstance(value, Column):
        return value
    if isinstance(value, LineNumber):
        raise TypeError("expected a Column, got a LineNumber")
    return Column(value)


def _is_continuation(byte: int) -> bool:
    return byte & 0xC0 == 0x80


def _check_content(value: str) -> None:
    newline = value.find("\n")
    if newline != -1 and newline != len(value) - 1:
        raise ContractError(
            "a line may only hold a single newline, as its last character"
        )


class Line:
    """Mutable string that holds at most one ``"\\n"``, at its very end.

    Columns count UTF-8 bytes from 1. ``byte_length + 1`` is the column just
    past the last byte and is a valid bound for ranges but not for character
    access.
    """

    __slots__ = ("_value",)

    def __init__(self, value: str = "") -> None:
        if not isinstance(value, str):
            raise TypeError(f"Line expects a str, got {type(value).__name__}")
        _check_content(value)
        self._value = value

    @property
    def value(self) -> str:
        return self._value

    @property
    def byte_length(self) -> int:
        return len(self._value.encode("utf-8"))

    @property
    def is_empty(self) -> bool:
        return not self._value

    @property
    def is_newline(self) -> bool:
        """True when the content is exactly one ``"\\n"``."""

        return self._value == "\n"

    @property
    def has_newline(self) -> bool:
        return self._value.endswith("\n")

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"Line({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self._value == other._value

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> "Line":
        return Line(self._value)

    def _byte_index(self, column: ColumnLike, *, allow_end: bool) -> Tuple[int, bytes]:
        col = as_column(column)
        data = self._value.encode("utf-8")
        limit = len(data) if allow_end else len(data) - 1
        index = col.zero_index
        if index > limit:
            raise OutOfBoundsError(
                f"column {col} is outside a line of {len(data)} bytes",
                column=col,
            )
        if index < len(data) and _is_continuation(data[index]):
            raise InvalidByteBoundaryError(
                f"column {col} is not on a UTF-8 character boundary",
                column=col,
            )
        return index, data

    def char_index(self, column: ColumnLike) -> int:
        """Return the codepoint index of ``column``; ``byte_length + 1`` maps to ``len``."""

        index, data = self._byte_index(column, allow_end=True)
        return len(data[:index].decode("utf-8"))

    def column_for_char_index(self, index: int) -> Column:
        if index < 0 or index > len(self._value):
            raise OutOfBoundsError(
                f"character index {index} is outside a line of "
                f"{len(self._value)} characters"
            )
        return Column(len(self._value[:index].encode("utf-8")) + 1)

    def _char_bounds(
        self,
        start: Optional[ColumnLike],
        end: Optional[ColumnLike],
        inclusive: bool,
    ) -> Tuple[int, int]:
        lower = 0 if start is None else self.char_index(start)
        if end is None:
            if inclusive:
                raise ContractError("an inclusive range needs an upper bound")
            upper = len(self._value)
        elif inclusive:
            # The closed form keeps the whole character that starts at ``end``.
            index, data = self._byte_index(end, allow_end=False)
            upper = len(data[:index].decode("utf-8")) + 1
        else:
            upper = self.char_index(end)
        if lower > upper:
            raise ContractError(
                f"range start {start} is after its end {end}", column=start
            )
        return lower, upper

    def char_at(self, column: ColumnLike) -> str:
        index, data = self._byte_index(column, allow_end=False)
        return self._value[len(data[:index].decode("utf-8"))]

    def substring(
        self,
        start: Optional[ColumnLike] = None,
        end: Optional[ColumnLike] = None,
        *,
        inclusive: bool = False,
    ) -> str:
        """Return the text between two columns.

        ``start``/``end`` may be omitted for open ranges. With
        ``inclusive=True`` the character beginning at ``end`` is part of the
        result, however many bytes it occupies.
        """

        lower, upper = self._char_bounds(start, end, inclusive)
        return self._value[lower:upper]

    def __getitem__(self, key: Union[ColumnLike, slice]) -> str:
        if isinstance(key, slice):
            if key.step is not None:
                raise ContractError("line slices do not take a step")
            return self.substring(key.start, key.stop)
        return self.char_at(key)

    def is_last_column(self, column: ColumnLike) -> bool:
        """True if stepping one byte past ``column`` reaches the end of the line.

        Any byte column is accepted, including one inside a character.
        """

        col = as_column(column)
        length = self.byte_length
        if col.zero_index >= length:
            raise OutOfBoundsError(
                f"column {col} is outside a line of {length} bytes", column=col
            )
        return col.value == length

    def leading_whitespace(self) -> Optional[str]:
        run = []
        for char in self._value:
            if char in LINE_BREAKS or not char.isspace():
                break
            run.append(char)
        return "".join(run) or None

    def trailing_whitespace(self) -> Optional[str]:
        run = []
        for char in reversed(self._value):
            if char in LINE_BREAKS:
                continue
            if not char.isspace():
                break
            run.append(char)
        return "".join(reversed(run)) or None

    def _assign(self, value: str) -> None:
        _check_content(value)
        self._value = value

    def append(self, text: str) -> None:
        self._assign(self._value + text)

    def replace(
        self,
        start: Optional[ColumnLike],
        end: Optional[ColumnLike],
        text: str,
        *,
        inclusive: bool = False,
    ) -> None:
        """Replace the given column range with ``text``.

        ``text`` must keep the line valid, so it can only carry a newline when
        that newline ends up as the line's last character.
        """

        lower, upper = self._char_bounds(start, end, inclusive)
        self._assign(self._value[:lower] + text + self._value[upper:])

    def insert(self, column: ColumnLike, text: str) -> None:
        self.replace(column, column, text)

    def remove(
        self,
        start: Optional[ColumnLike] = None,
        end: Optional[ColumnLike] = None,
        *,
        inclusive: bool = False,
    ) -> None:
        self.replace(start, end, "", inclusive=inclusive)

    def pop_last(self) -> Optional[str]:
        if not self._value:
            return None
        char = self._value[-1]
        self._value = self._value[:-1]
        return char


__all__ = ["Line", "LINE_BREAKS", "as_column"]
