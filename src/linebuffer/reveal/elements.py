"""Fixed partitions of a text into logical elements (paragraphs, lines)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Tuple

from linebuffer.buffer import (
    ContractError,
    Location,
    LocationRange,
    Text,
    ensure_range,
)


@dataclass(frozen=True, slots=True)
class TextElement:
    """A revealed span of one partition range.

    ``complete`` is False for the last, partially revealed element.
    """

    range: LocationRange
    content: str
    complete: bool = True


class Partition:
    """Ordered, contiguous, non-empty ranges that together cover a text.

    A partition is computed against one version of its text. Asking a stale
    partition for elements raises ``ContractError``; rebuild it instead.
    """

    def __init__(self, text: Text, ranges: Iterable[LocationRange]) -> None:
        self._text = text
        self._ranges: Tuple[LocationRange, ...] = tuple(ranges)
        self.version = text.version
        self._validate()

    def _validate(self) -> None:
        full = self._text.full_range
        if not self._ranges:
            if not full.is_empty:
                raise ContractError("an empty partition only fits an empty text")
            return

        cursor = full.start
        for bounds in self._ranges:
            ensure_range(self._text, bounds)
            if bounds.is_empty:
                raise ContractError(f"partition range {bounds} is empty")
            if bounds.start != cursor:
                raise ContractError(
                    f"partition range {bounds} does not start at {cursor}",
                    location=bounds.start,
                )
            cursor = bounds.end
        if cursor != full.end:
            raise ContractError(
                f"partition stops at {cursor}, text ends at {full.end}",
                location=cursor,
            )

    @property
    def ranges(self) -> Tuple[LocationRange, ...]:
        return self._ranges

    def __len__(self) -> int:
        return len(self._ranges)

    def __iter__(self) -> Iterator[LocationRange]:
        return iter(self._ranges)

    @property
    def is_stale(self) -> bool:
        return self.version != self._text.version

    def visible(self, end: Location) -> List[TextElement]:
        """Return the elements revealed when the reveal cursor sits at ``end``.

        Ranges ending at or before ``end`` come back whole; the range that
        ``end`` falls inside comes back truncated and ends the list.
        """

        if self.is_stale:
            raise ContractError(
                f"partition built for version {self.version}, "
                f"text is at version {self._text.version}"
            )

        elements: List[TextElement] = []
        for bounds in self._ranges:
            if end <= bounds.start:
                break
            if end >= bounds.end:
                elements.append(TextElement(bounds, self._text.substring(bounds)))
                continue
            partial = bounds.truncated(end)
            elements.append(
                TextElement(partial, self._text.substring(partial), complete=False)
            )
            break
        return elements


Partitioner = Callable[[Text], Partition]


def _ranges_from_starts(text: Text, starts: List[int]) -> List[LocationRange]:
    end = text.full_range.end
    boundaries = [Location(number, 1) for number in starts] + [end]
    return [
        LocationRange(lower, upper)
        for lower, upper in zip(boundaries, boundaries[1:])
        if lower != upper
    ]


def partition_by_line(text: Text) -> Partition:
    """One element per line, newline included."""

    return Partition(text, _ranges_from_starts(text, list(range(1, text.line_count + 1))))


def partition_by_paragraph(text: Text) -> Partition:
    """One element per paragraph; blank lines belong to the paragraph above.

    A paragraph starts on the first line and on every non-blank line that
    follows a blank one.
    """

    starts = [1]
    previous_blank = False
    for number, line in enumerate(text, start=1):
        blank = not line.value.strip()
        if number > 1 and previous_blank and not blank:
            starts.append(number)
        previous_blank = blank
    return Partition(text, _ranges_from_starts(text, starts))


__all__ = [
    "TextElement",
    "Partition",
    "Partitioner",
    "partition_by_line",
    "partition_by_paragraph",
]
