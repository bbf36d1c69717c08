"""
Domain package for TableFill.

Exports the event record and the state/context values threaded through the
pattern builders. Keep this package focused on data definitions.
"""

from tablefill.domain.layouts import LAYOUTS, Layout
from tablefill.domain.models import (
    COLUMNS,
    OFF,
    ON,
    EventRecord,
    RecipeContext,
    SequenceState,
)

__all__ = [
    "COLUMNS",
    "LAYOUTS",
    "Layout",
    "OFF",
    "ON",
    "EventRecord",
    "RecipeContext",
    "SequenceState",
]
