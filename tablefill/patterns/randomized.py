"""
Randomized tail: ON/OFF pairs on random channels at random intervals.

The effect downstream is a chaotic display of outputs, each still written in a
predictable ON-then-OFF order. Seed `RecipeContext.rng` for repeatable output.
"""

from __future__ import annotations

from datetime import timedelta
from typing import List

from tablefill.domain.models import ON, EventRecord, RecipeContext, SequenceState
from tablefill.patterns.abstract import AbstractPatternBuilder, PatternResult


class RandomizedPattern(AbstractPatternBuilder):
    """
    Emit `context.random_count` strictly alternating records starting ON.

    A new channel is drawn uniformly from [0, N) on every even index, so each
    channel gets an ON then an OFF. The first record lands one phase gap after
    the incoming clock; every later one a random hop after its predecessor.
    """

    name: str = "randomized"
    description: str = "Random-channel ON/OFF pairs with random hops."
    notes: str = "Random test entry"

    def _random_hop(self, context: RecipeContext) -> timedelta:
        millis = context.rng.randint(context.random_hop_min_ms, context.random_hop_max_ms)
        return timedelta(milliseconds=millis)

    def build(self, state: SequenceState, context: RecipeContext) -> PatternResult:
        rng = context.rng
        records: List[EventRecord] = []
        state = state.advance(context.phase_gap)

        for indx in range(context.random_count):
            if indx == 0:
                state = SequenceState(state.clock, rng.randrange(context.channel_count), ON)
            else:
                if indx % 2 == 0:
                    state = state.moved_to(rng.randrange(context.channel_count))
                state = state.toggled().advance(self._random_hop(context))
            records.append(context.record(state, self.notes))
        return PatternResult(records, state)


__all__ = ["RandomizedPattern"]
