"""Incremental reveal of a text: cursor, element partitions, document model."""

from .elements import (
    Partition,
    Partitioner,
    TextElement,
    partition_by_line,
    partition_by_paragraph,
)
from .model import DocumentModel, EditingTransaction
from .state import IncrementalRevealState, clamp_location

__all__ = [
    "DocumentModel",
    "EditingTransaction",
    "IncrementalRevealState",
    "Partition",
    "Partitioner",
    "TextElement",
    "clamp_location",
    "partition_by_line",
    "partition_by_paragraph",
]
