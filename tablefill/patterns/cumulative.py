"""
Cumulative-ON pattern: assert every output, one hop apart, in channel order.
"""

from __future__ import annotations

from typing import List

from tablefill.domain.models import ON, EventRecord, RecipeContext, SequenceState
from tablefill.patterns.abstract import AbstractPatternBuilder, PatternResult


class CumulativeOnPattern(AbstractPatternBuilder):
    """
    Turn channels 0..N-1 ON in turn so that all of them end up lit.
    """

    name: str = "cumulative_on"
    description: str = "Light every channel in ascending order and leave it on."
    notes: str = "Cumulative on entry"

    def build(self, state: SequenceState, context: RecipeContext) -> PatternResult:
        records: List[EventRecord] = []
        for channel in range(context.channel_count):
            state = SequenceState(state.clock + context.hop, channel, ON)
            records.append(context.record(state, self.notes))
        return PatternResult(records, state)


__all__ = ["CumulativeOnPattern"]
