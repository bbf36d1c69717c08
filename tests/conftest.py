"""
Pytest configuration for TableFill.

Provides fixtures for:
- A frozen wall clock and settings tuned for deterministic runs
- In-memory sinks for unit tests
- Database connection management for integration tests
"""

from __future__ import annotations

import os
import random
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Generator

import psycopg
import pytest

from tablefill.config import Settings
from tablefill.domain.models import RecipeContext, SequenceState
from tablefill.sinks.memory import MemoryEventSink

FIXED_NOW = datetime(2026, 1, 6, 12, 0, 0)


@pytest.fixture
def fixed_now() -> Callable[[], datetime]:
    """Wall clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def unit_settings() -> Settings:
    """Settings with defaults and a fixed seed, independent of the environment."""
    return Settings(seed=1234, channel_count=None, layout="io40", recipe_id=1)


@pytest.fixture
def memory_sink() -> MemoryEventSink:
    return MemoryEventSink()


@pytest.fixture
def make_context() -> Callable[..., RecipeContext]:
    """Factory for RecipeContext with small, predictable defaults."""

    def _make(channel_count: int = 4, seed: int = 7, **overrides) -> RecipeContext:
        params = dict(
            recipe_id=1,
            channel_count=channel_count,
            entered_at=FIXED_NOW,
            hop=timedelta(milliseconds=80),
            phase_gap=timedelta(milliseconds=100),
            random_count=200,
            random_hop_min_ms=75,
            random_hop_max_ms=500,
            rng=random.Random(seed),
        )
        params.update(overrides)
        return RecipeContext(**params)

    return _make


@pytest.fixture
def start_state() -> SequenceState:
    return SequenceState(clock=FIXED_NOW + timedelta(seconds=1))


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "task_scheduler"),
        log_level="DEBUG",
        seed=42,
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return (
        f"postgresql://{test_settings.db_user}:{test_settings.db_password}"
        f"@{test_settings.db_host}:{test_settings.db_port}/{test_settings.db_name}"
    )


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="session")
def db_connection(
    test_dsn: str, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped database connection for integration tests.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_dsn, autocommit=True)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="session")
def db_schema_initialized(db_connection: psycopg.Connection) -> bool:
    """
    Ensure the ControlEvent table exists, creating it from db/init.sql.
    """
    init_sql_path = Path(__file__).parent.parent / "db" / "init.sql"
    with db_connection.cursor() as cur:
        cur.execute(init_sql_path.read_text(encoding="utf-8"))
    return True


@pytest.fixture(scope="function")
def clean_control_event_table(db_connection: psycopg.Connection, db_schema_initialized: bool):
    """
    Empty the ControlEvent table before and after each test function.
    """
    with db_connection.cursor() as cur:
        cur.execute('TRUNCATE TABLE public."ControlEvent";')
    yield
    with db_connection.cursor() as cur:
        cur.execute('TRUNCATE TABLE public."ControlEvent";')
