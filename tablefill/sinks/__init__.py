"""
Sinks package for TableFill.

Every sink offers `clear()` and `insert(record)`; the generator needs nothing
else.
"""

from tablefill.sinks.abstract import BaseEventSink, EventSink
from tablefill.sinks.csv_file import CsvEventSink
from tablefill.sinks.memory import MemoryEventSink
from tablefill.sinks.postgres import PostgresEventSink

__all__ = [
    "BaseEventSink",
    "CsvEventSink",
    "EventSink",
    "MemoryEventSink",
    "PostgresEventSink",
]
