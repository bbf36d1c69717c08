"""
Infrastructure package for TableFill.

Centralizes database connectivity. Keep this layer focused on I/O and
resource management, decoupled from pattern and generator logic.
"""

from tablefill.infrastructure.db_factory import build_dsn, get_sync_connection

__all__ = [
    "build_dsn",
    "get_sync_connection",
]
