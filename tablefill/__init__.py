"""
TableFill - test-data seeder for the one-time task scheduler.

Truncates the ControlEvent table and fills it with a scripted, time-ordered
sequence of digital output events:

- Ascending and descending ON/OFF sweeps
- A cumulative pass that lights every channel
- A simultaneous all-off reset
- A randomized tail of ON/OFF pairs

Timestamps are anchored to the current time so the scheduler starts executing
events as soon as it is launched.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "BSD-3-Clause"

# Public API exports
from tablefill.config import Settings, get_settings
from tablefill.domain.models import EventRecord, RecipeContext, SequenceState
from tablefill.generator import (
    LAYOUTS,
    available_layouts,
    available_patterns,
    build_events,
    plan_recipe,
    run_recipe,
)
from tablefill.patterns.abstract import AbstractPatternBuilder, PatternBuilder, PatternResult
from tablefill.sinks import (
    BaseEventSink,
    CsvEventSink,
    EventSink,
    MemoryEventSink,
    PostgresEventSink,
)
from tablefill.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "EventRecord",
    "RecipeContext",
    "SequenceState",
    # Generation
    "LAYOUTS",
    "available_layouts",
    "available_patterns",
    "build_events",
    "plan_recipe",
    "run_recipe",
    # Pattern abstractions
    "AbstractPatternBuilder",
    "PatternBuilder",
    "PatternResult",
    # Sinks
    "BaseEventSink",
    "CsvEventSink",
    "EventSink",
    "MemoryEventSink",
    "PostgresEventSink",
    # Logging
    "configure_logging",
    "get_logger",
]
