"""
Persistence sink interfaces for TableFill.

The generator depends on exactly two operations: `clear()` wipes the target
storage and `insert(record)` stores one record. `BaseEventSink` adds a batch
fallback and context-manager lifecycle for class-based implementations.
"""

from __future__ import annotations

import abc
from types import TracebackType
from typing import Iterable, Optional, Protocol, Type, runtime_checkable

from tablefill.domain.models import EventRecord


@runtime_checkable
class EventSink(Protocol):
    """
    Minimal capability a record store must provide.
    """

    def clear(self) -> None:
        """Remove every prior record from the target storage."""
        ...

    def insert(self, record: EventRecord) -> None:
        """Durably store one record."""
        ...


class BaseEventSink(abc.ABC):
    """
    ABC helper for sinks.

    Subclasses implement `clear` and `insert`; override `insert_many` when the
    backend has a cheaper batch path and `close` when it holds resources.
    """

    name: str = "sink"

    @abc.abstractmethod
    def clear(self) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def insert(self, record: EventRecord) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    def insert_many(self, records: Iterable[EventRecord]) -> int:
        """Insert records one at a time; return how many were written."""
        count = 0
        for record in records:
            self.insert(record)
            count += 1
        return count

    def close(self) -> None:
        """Release held resources (no-op by default)."""

    def __enter__(self) -> "BaseEventSink":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()


__all__ = ["BaseEventSink", "EventSink"]
