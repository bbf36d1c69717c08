"""
Sequential sweep patterns: a parade of outputs lit and unlit in channel order.

Sweep-up walks channels 0..N-1, writing ON then OFF to each. Sweep-down walks
back to channel 0, continuing the clock and the ON/OFF parity left by sweep-up
rather than restarting it.
"""

from __future__ import annotations

from typing import List

from tablefill.domain.models import ON, EventRecord, RecipeContext, SequenceState
from tablefill.patterns.abstract import AbstractPatternBuilder, PatternResult

SEQUENTIAL_NOTES = "Sequential test entry"


class SweepUpPattern(AbstractPatternBuilder):
    """
    Emit 2N records: channel 0 ON at the starting clock, then toggle on every
    hop, moving to the next channel after each ON/OFF pair.
    """

    name: str = "sweep_up"
    description: str = "Ascending ON/OFF pairs, one channel at a time."
    notes: str = SEQUENTIAL_NOTES

    def build(self, state: SequenceState, context: RecipeContext) -> PatternResult:
        state = SequenceState(clock=state.clock, channel=0, digital_value=ON)
        records: List[EventRecord] = [context.record(state, self.notes)]

        for indx in range(1, 2 * context.channel_count):
            if indx % 2 == 0:
                state = state.moved_to(state.channel + 1)
            state = state.toggled().advance(context.hop)
            records.append(context.record(state, self.notes))
        return PatternResult(records, state)


class SweepDownPattern(AbstractPatternBuilder):
    """
    Emit 2N-1 records walking back down to channel 0.

    The channel steps down on even indices only while above 0; the ON/OFF value
    keeps toggling from whatever the previous pattern left.
    """

    name: str = "sweep_down"
    description: str = "Descending toggles continuing the sweep-up parity."
    notes: str = SEQUENTIAL_NOTES

    def build(self, state: SequenceState, context: RecipeContext) -> PatternResult:
        records: List[EventRecord] = []

        for indx in range(2 * context.channel_count - 1, 0, -1):
            if indx % 2 == 0 and state.channel > 0:
                state = state.moved_to(state.channel - 1)
            state = state.toggled().advance(context.hop)
            records.append(context.record(state, self.notes))
        return PatternResult(records, state)


__all__ = ["SEQUENTIAL_NOTES", "SweepDownPattern", "SweepUpPattern"]
