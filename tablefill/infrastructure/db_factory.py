"""
Database connection factory for TableFill.

A run needs exactly one synchronous connection, so this module only composes
the DSN from settings and opens a psycopg connection. Connection failures
propagate to the caller unchanged.
"""

from __future__ import annotations

from typing import Optional

import psycopg
from psycopg import Connection

from tablefill.config import Settings, get_settings


def build_dsn(settings: Optional[Settings] = None, hide_password: bool = False) -> str:
    """
    Compose a Postgres DSN string from settings.

    Parameters
    ----------
    settings : Settings, optional
        Settings to read; defaults to the cached process settings.
    hide_password : bool
        Replace the password with asterisks (for display).
    """
    settings = settings or get_settings()
    password = "****" if hide_password else settings.db_password
    return (
        f"postgresql://{settings.db_user}:{password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


def get_sync_connection(
    dsn_override: Optional[str] = None,
    settings: Optional[Settings] = None,
    autocommit: bool = True,
) -> Connection:
    """
    Open a dedicated synchronous connection.

    Autocommit is on by default so every statement is its own unit of work.

    Returns
    -------
    Connection
        A new psycopg connection instance.

    Raises
    ------
    psycopg.OperationalError
        If the server cannot be reached.
    """
    settings = settings or get_settings()
    dsn = dsn_override or build_dsn(settings)
    return psycopg.connect(
        dsn, autocommit=autocommit, connect_timeout=settings.db_connect_timeout
    )


__all__ = ["build_dsn", "get_sync_connection"]
