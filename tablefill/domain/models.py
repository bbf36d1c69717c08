"""
Domain models for TableFill.

`EventRecord` mirrors one row of the ControlEvent table read by the downstream
scheduler. Attribute names are snake_case; aliases carry the exact column names
so `as_row()` can hand the sink a column-keyed mapping.

`SequenceState` and `RecipeContext` are the running and per-run values threaded
through the pattern builders.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Any, Dict, Tuple

from pydantic import BaseModel, Field

ON = 1
OFF = 0

COLUMNS: Tuple[str, ...] = (
    "recipeID",
    "channelNmbr",
    "doAt",
    "whenEntered",
    "whenEdited",
    "enteredBy",
    "editedBy",
    "digitalValue",
    "notes",
    "status",
)


class EventRecord(BaseModel):
    """
    A single scheduled channel-state change.
    """

    recipe_id: int = Field(..., alias="recipeID", description="Test run identifier.")
    channel_nmbr: int = Field(..., alias="channelNmbr", description="Target output channel.")
    do_at: datetime = Field(..., alias="doAt", description="Scheduled execution time.")
    when_entered: datetime = Field(..., alias="whenEntered", description="Creation time.")
    when_edited: datetime = Field(..., alias="whenEdited", description="Last edit time.")
    entered_by: int = Field(1, alias="enteredBy", description="Creating actor.")
    edited_by: int = Field(1, alias="editedBy", description="Editing actor.")
    digital_value: int = Field(..., alias="digitalValue", description="1 = ON, 0 = OFF.")
    notes: str = Field("", description="Tag naming the pattern that produced the row.")
    status: int = Field(1, description="Always 1 (active).")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }

    def as_row(self) -> Dict[str, Any]:
        """Return the record keyed by column name, in column order."""
        return self.model_dump(by_alias=True)


@dataclass(frozen=True)
class SequenceState:
    """
    Running position of the generator between records.

    `clock` is the doAt of the last emitted record (or the anchor before the
    first one); `channel` and `digital_value` are the last emitted values.
    """

    clock: datetime
    channel: int = 0
    digital_value: int = ON

    def advance(self, delta: timedelta) -> "SequenceState":
        return replace(self, clock=self.clock + delta)

    def moved_to(self, channel: int) -> "SequenceState":
        return replace(self, channel=channel)

    def toggled(self) -> "SequenceState":
        return replace(self, digital_value=OFF if self.digital_value == ON else ON)


@dataclass
class RecipeContext:
    """
    Per-run constants shared by every pattern builder.
    """

    recipe_id: int
    channel_count: int
    entered_at: datetime
    entered_by: int = 1
    edited_by: int = 1
    hop: timedelta = timedelta(milliseconds=80)
    phase_gap: timedelta = timedelta(milliseconds=100)
    random_count: int = 200
    random_hop_min_ms: int = 75
    random_hop_max_ms: int = 500
    rng: random.Random = field(default_factory=random.Random)

    def record(self, state: SequenceState, notes: str) -> EventRecord:
        """Stamp an EventRecord for the current state."""
        return EventRecord(
            recipe_id=self.recipe_id,
            channel_nmbr=state.channel,
            do_at=state.clock,
            when_entered=self.entered_at,
            when_edited=self.entered_at,
            entered_by=self.entered_by,
            edited_by=self.edited_by,
            digital_value=state.digital_value,
            notes=notes,
            status=1,
        )


__all__ = ["COLUMNS", "EventRecord", "OFF", "ON", "RecipeContext", "SequenceState"]
