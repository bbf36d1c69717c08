"""
In-memory sink used for dry runs, previews and tests.
"""

from __future__ import annotations

from typing import List

from tablefill.domain.models import EventRecord
from tablefill.sinks.abstract import BaseEventSink


class MemoryEventSink(BaseEventSink):
    """Keep inserted records in a list, in arrival order."""

    name: str = "memory"

    def __init__(self) -> None:
        self.records: List[EventRecord] = []
        self.clear_calls = 0
        self.closed = False

    def clear(self) -> None:
        self.records.clear()
        self.clear_calls += 1

    def insert(self, record: EventRecord) -> None:
        self.records.append(record)

    def close(self) -> None:
        self.closed = True


__all__ = ["MemoryEventSink"]
