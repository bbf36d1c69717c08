"""
CSV sink: write the generated batch to a file instead of a database.

The header row uses the table's column names so the file can be loaded with
`COPY ... FROM ... WITH (FORMAT csv, HEADER TRUE)` or inspected by hand.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import IO, Any, Iterable, List, Optional

from tablefill.domain.models import COLUMNS, EventRecord
from tablefill.sinks.abstract import BaseEventSink


def _format_value(value: Any) -> str:
    if hasattr(value, "isoformat"):
        return value.isoformat(sep=" ", timespec="milliseconds")
    return str(value)


class CsvEventSink(BaseEventSink):
    """
    Append records to a CSV file at `path`.

    `clear()` truncates the file and rewrites the header; the file is opened
    lazily so constructing the sink touches nothing on disk.
    """

    name: str = "csv"

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._handle: Optional[IO[str]] = None
        self._writer: Any = None

    def _open(self, mode: str) -> None:
        self.close()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.path.open(mode, newline="", encoding="utf-8")
        self._writer = csv.writer(self._handle)

    def clear(self) -> None:
        self._open("w")
        self._writer.writerow(COLUMNS)

    def insert(self, record: EventRecord) -> None:
        if self._writer is None:
            self._open("a")
        self._writer.writerow(self._to_row(record))

    def insert_many(self, records: Iterable[EventRecord]) -> int:
        if self._writer is None:
            self._open("a")
        rows: List[List[str]] = [self._to_row(record) for record in records]
        self._writer.writerows(rows)
        return len(rows)

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
        self._handle = None
        self._writer = None

    @staticmethod
    def _to_row(record: EventRecord) -> List[str]:
        row = record.as_row()
        return [_format_value(row[column]) for column in COLUMNS]


__all__ = ["CsvEventSink"]
