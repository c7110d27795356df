"""Document model facade combining a text, its reveal cursor and edit transactions."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Callable, ContextManager, List, Optional, Union

from linebuffer.buffer import Location, LocationRange, Text, ensure_location
from linebuffer.runtime import telemetry

from .elements import Partitioner, TextElement, partition_by_line
from .state import IncrementalRevealState


class DocumentModel:
    """Content manager a layout driver talks to.

    The driver steps the reveal cursor inside an editing transaction, then
    asks for the elements covering the revealed range. Locations and elements
    handed out stay valid until the next transaction that edits the text.
    """

    def __init__(
        self,
        text: Union[Text, str] = "",
        *,
        partitioner: Partitioner = partition_by_line,
        logger_name: Optional[str] = None,
    ) -> None:
        if isinstance(text, str):
            text = Text.from_string(text, logger_name=logger_name)
        self.text = text
        self.reveal = IncrementalRevealState(
            text, partitioner=partitioner, logger_name=logger_name
        )
        self._logger_name = logger_name
        self._open_transactions = 0

    @property
    def document_range(self) -> LocationRange:
        return self.text.full_range

    @property
    def current_end_location(self) -> Location:
        return self.reveal.current_end

    @property
    def selection(self) -> LocationRange:
        """Empty selection parked at the reveal cursor."""

        return LocationRange.empty_at(self.reveal.current_end)

    @property
    def in_transaction(self) -> bool:
        return self._open_transactions > 0

    def editing_transaction(self, label: str = "edit") -> "EditingTransaction":
        return EditingTransaction(self, label)

    def step_location(self) -> Location:
        with self.editing_transaction("step"):
            return self.reveal.step()

    def reveal_remaining(self, *, limit: Optional[int] = None) -> List[Location]:
        """Drive the cursor to the end of the text, one transaction per step."""

        reached: List[Location] = []
        while not self.reveal.is_finished and (limit is None or len(reached) < limit):
            reached.append(self.step_location())
        return reached

    def text_elements(self, bounds: Optional[LocationRange] = None) -> List[TextElement]:
        """Revealed elements overlapping ``bounds`` (all of them when omitted)."""

        elements = self.reveal.elements()
        if bounds is None:
            return elements
        if bounds.is_empty:
            return [
                element
                for element in elements
                if element.range.start <= bounds.start <= element.range.end
            ]
        return [
            element
            for element in elements
            if element.range.start < bounds.end and bounds.start < element.range.end
        ]

    def enumerate_text_elements(
        self,
        from_location: Location,
        block: Callable[[TextElement], bool],
    ) -> Optional[Location]:
        """Feed revealed elements that end after ``from_location`` to ``block``.

        Enumeration stops early when ``block`` returns False. Returns the end
        of the last element handed to ``block``, or None if there was none.
        """

        ensure_location(self.text, from_location)
        last_end: Optional[Location] = None
        for element in self.reveal.elements():
            if element.range.end <= from_location:
                continue
            last_end = element.range.end
            if not block(element):
                break
        return last_end

    def offset(self, from_: Location, to: Location) -> int:
        return self.text.offset(from_, to)

    def _text_did_change(self) -> None:
        telemetry.record_event(
            "document.changed",
            data={"version": self.text.version, "lines": self.text.line_count},
            logger_name=self._logger_name,
        )
        self.reveal.rebase()


class EditingTransaction(AbstractContextManager["EditingTransaction"]):
    """Groups changes to a ``DocumentModel``.

    Transactions nest. When the outermost one closes and the text's version
    moved, the reveal partition is rebuilt and the cursor clamped.
    """

    def __init__(self, model: DocumentModel, label: str) -> None:
        self.model = model
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None
        self._version_before: Optional[int] = None

    def __enter__(self) -> "EditingTransaction":
        self._version_before = self.model.text.version
        self.model._open_transactions += 1
        self._span_cm = telemetry.span(
            f"document::{self.label}",
            logger_name=self.model._logger_name,
            component="document",
            metadata={"version": self._version_before},
        )
        self._handle = self._span_cm.__enter__()
        return self

    @property
    def changed(self) -> bool:
        return self.model.text.version != self._version_before

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            self.model._open_transactions -= 1
            if self._handle is not None:
                self._handle.add_metadata("changed", self.changed)
                self._handle.add_metadata("depth", self.model._open_transactions)
            if not self.model.in_transaction and self.changed:
                self.model._text_did_change()
        finally:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["DocumentModel", "EditingTransaction"]
