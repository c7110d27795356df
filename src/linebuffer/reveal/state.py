"""Cursor that reveals a text to a layout consumer one character at a time."""

from __future__ import annotations

from typing import Iterator, List, Optional

from linebuffer.buffer import ContractError, Location, LocationRange, Text
from linebuffer.runtime import telemetry

from .elements import Partition, Partitioner, TextElement, partition_by_line


def clamp_location(text: Text, location: Location) -> Location:
    """Pull ``location`` back onto a valid boundary of ``text``.

    Used after an edit: locations past the end become the end of the text,
    columns past a line's end or inside a character move left.
    """

    end = text.full_range.end
    if location >= end:
        return end

    line = text[location.line]
    data = line.value.encode("utf-8")
    column = min(location.column.value, len(data) + 1)
    while 1 < column <= len(data) and data[column - 1] & 0xC0 == 0x80:
        column -= 1
    if column == len(data) + 1 and line.has_newline:
        return Location(location.line + 1, 1)
    return Location(location.line, column)


class IncrementalRevealState:
    """Grows a revealed range ``[(1, 1), current_end)`` one step at a time.

    Each ``step`` moves past one character; moving past a newline lands on
    column 1 of the following line. The revealed range is cut into elements
    by a ``Partition`` that is fixed for the current version of the text.

    A ``partition`` passed in is used as given until the first ``rebase``;
    from then on ``partitioner`` rebuilds it, so pass both when the custom
    cut has to survive edits.
    """

    def __init__(
        self,
        text: Text,
        *,
        partition: Optional[Partition] = None,
        partitioner: Partitioner = partition_by_line,
        logger_name: Optional[str] = None,
    ) -> None:
        self.text = text
        self._partitioner = partitioner
        self.partition = partition if partition is not None else partitioner(text)
        self.current_end = Location(1, 1)
        self._logger_name = logger_name

    @property
    def is_finished(self) -> bool:
        return self.current_end >= self.text.full_range.end

    @property
    def revealed_range(self) -> LocationRange:
        return LocationRange(Location(1, 1), self.current_end)

    def step(self) -> Location:
        if self.is_finished:
            raise ContractError(
                f"reveal cursor is already at the end of the text ({self.current_end})",
                location=self.current_end,
            )

        current = self.current_end
        char = self.text.char_at(current)
        if char == "\n" and current.line != self.text.last_line_number:
            following = Location(current.line + 1, 1)
        else:
            following = Location(current.line, current.column + len(char.encode("utf-8")))

        self.current_end = following
        telemetry.record_event(
            "reveal.step",
            level="debug",
            data={"from": current, "to": following},
            logger_name=self._logger_name,
        )
        return following

    def run(self, limit: Optional[int] = None) -> Iterator[Location]:
        """Step until the end of the text, or ``limit`` times, yielding each new end."""

        taken = 0
        while not self.is_finished and (limit is None or taken < limit):
            yield self.step()
            taken += 1

    def elements(self) -> List[TextElement]:
        return self.partition.visible(self.current_end)

    def reset(self, location: Optional[Location] = None) -> None:
        self.current_end = clamp_location(self.text, location or Location(1, 1))

    def rebase(self) -> None:
        """Rebuild the partition with ``partitioner`` and clamp the cursor.

        Called after the text changed. A partition given to the constructor
        is discarded here.
        """

        with telemetry.span(
            "reveal::rebase",
            logger_name=self._logger_name,
            component="reveal",
            metadata={"version": self.text.version, "end": self.current_end},
        ) as handle:
            self.partition = self._partitioner(self.text)
            self.current_end = clamp_location(self.text, self.current_end)
            handle.add_metadata("elements", len(self.partition))


__all__ = ["IncrementalRevealState", "clamp_location"]
