"""
All-off pattern: reset every output as close to simultaneously as possible.
"""

from __future__ import annotations

from typing import List

from tablefill.domain.models import OFF, EventRecord, RecipeContext, SequenceState
from tablefill.patterns.abstract import AbstractPatternBuilder, PatternResult


class AllOffPattern(AbstractPatternBuilder):
    """
    Emit one OFF per channel, all sharing a single doAt one phase gap after the
    incoming clock. The clock does not move between records of the pass.
    """

    name: str = "all_off"
    description: str = "Every channel OFF at one shared timestamp."
    notes: str = "Intermediate all-off entry"

    def build(self, state: SequenceState, context: RecipeContext) -> PatternResult:
        do_at = state.clock + context.phase_gap
        records: List[EventRecord] = []
        for channel in range(context.channel_count):
            state = SequenceState(clock=do_at, channel=channel, digital_value=OFF)
            records.append(context.record(state, self.notes))
        return PatternResult(records, state)


__all__ = ["AllOffPattern"]
