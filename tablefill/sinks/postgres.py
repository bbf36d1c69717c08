"""
Postgres sink: truncate the ControlEvent table and insert rows one by one.

One connection in autocommit mode and one cursor reused for every INSERT, so
each row is its own unit of work. The statement is composed once with quoted
identifiers (the column names are camelCase) and bound per record.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from psycopg import Connection, sql

from tablefill.config import Settings, get_settings
from tablefill.domain.models import COLUMNS, EventRecord
from tablefill.infrastructure.db_factory import get_sync_connection
from tablefill.sinks.abstract import BaseEventSink
from tablefill.utils.logging import get_logger

log = get_logger(__name__)


def table_identifier(settings: Settings) -> sql.Identifier:
    """Schema-qualified, quoted identifier for the target table."""
    return sql.Identifier(settings.db_schema, settings.db_table)


def build_insert_query(table: sql.Identifier) -> sql.Composed:
    """INSERT statement with one named placeholder per column."""
    return sql.SQL("INSERT INTO {table} ({columns}) VALUES ({values})").format(
        table=table,
        columns=sql.SQL(", ").join(sql.Identifier(column) for column in COLUMNS),
        values=sql.SQL(", ").join(sql.Placeholder(column) for column in COLUMNS),
    )


def build_truncate_query(table: sql.Identifier) -> sql.Composed:
    return sql.SQL("TRUNCATE TABLE {table}").format(table=table)


class PostgresEventSink(BaseEventSink):
    """
    Persist records into `settings.db_schema`.`settings.db_table`.

    Parameters
    ----------
    settings : Settings, optional
        Source of the table name and connection parameters.
    dsn_override : str, optional
        Connect with this DSN instead of the one composed from settings.
    connection : Connection, optional
        Use an already-open connection. The sink does not close connections it
        did not open.
    """

    name: str = "postgres"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        dsn_override: Optional[str] = None,
        connection: Optional[Connection] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._owns_connection = connection is None
        self._conn = connection or get_sync_connection(
            dsn_override=dsn_override, settings=self._settings
        )
        try:
            table = table_identifier(self._settings)
            self._insert_query = build_insert_query(table)
            self._truncate_query = build_truncate_query(table)
            self._cursor = self._conn.cursor()
        except Exception:
            if self._owns_connection:
                self._conn.close()
            raise

    def clear(self) -> None:
        log.debug("Truncating target table", extra={"table": self._settings.db_table})
        self._cursor.execute(self._truncate_query)
        self._commit()

    def insert(self, record: EventRecord) -> None:
        self._cursor.execute(self._insert_query, record.as_row(), prepare=True)
        self._commit()

    def insert_many(self, records: Iterable[EventRecord]) -> int:
        rows: List[dict] = [record.as_row() for record in records]
        if rows:
            self._cursor.executemany(self._insert_query, rows)
            self._commit()
        return len(rows)

    def _commit(self) -> None:
        if not self._conn.autocommit:
            self._conn.commit()

    def close(self) -> None:
        if not self._cursor.closed:
            self._cursor.close()
        if self._owns_connection and not self._conn.closed:
            self._conn.close()


__all__ = [
    "PostgresEventSink",
    "build_insert_query",
    "build_truncate_query",
    "table_identifier",
]
