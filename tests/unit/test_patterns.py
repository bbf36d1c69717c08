from __future__ import annotations

from datetime import timedelta

import pytest

from tablefill.domain.models import OFF, ON, SequenceState
from tablefill.patterns import (
    AllOffPattern,
    CumulativeOnPattern,
    PatternBuilder,
    RandomizedPattern,
    SweepDownPattern,
    SweepUpPattern,
)

HOP = timedelta(milliseconds=80)
GAP = timedelta(milliseconds=100)


def _channels(records):
    return [r.channel_nmbr for r in records]


def _values(records):
    return [r.digital_value for r in records]


@pytest.mark.parametrize(
    "pattern_cls",
    [SweepUpPattern, SweepDownPattern, CumulativeOnPattern, AllOffPattern, RandomizedPattern],
)
def test_patterns_satisfy_builder_protocol(pattern_cls):
    pattern = pattern_cls()
    assert isinstance(pattern, PatternBuilder)
    assert pattern.name
    assert pattern.notes


class TestSweepUp:
    def test_emits_two_records_per_channel_in_ascending_pairs(self, make_context, start_state):
        records, state = SweepUpPattern().build(start_state, make_context(channel_count=4))

        assert len(records) == 8
        assert _channels(records) == [0, 0, 1, 1, 2, 2, 3, 3]
        assert _values(records) == [ON, OFF] * 4
        assert state.channel == 3
        assert state.digital_value == OFF

    def test_first_record_is_channel_zero_on_at_starting_clock(self, make_context, start_state):
        records, _ = SweepUpPattern().build(start_state, make_context())

        first = records[0]
        assert first.channel_nmbr == 0
        assert first.digital_value == ON
        assert first.do_at == start_state.clock

    def test_clock_advances_one_hop_per_record(self, make_context, start_state):
        records, state = SweepUpPattern().build(start_state, make_context(channel_count=40))

        assert len(records) == 80
        for index, record in enumerate(records):
            assert record.do_at == start_state.clock + index * HOP
        assert state.clock == records[-1].do_at

    def test_ignores_incoming_channel_and_value(self, make_context, start_state):
        incoming = SequenceState(clock=start_state.clock, channel=17, digital_value=OFF)

        records, _ = SweepUpPattern().build(incoming, make_context())

        assert (records[0].channel_nmbr, records[0].digital_value) == (0, ON)

    def test_channels_stay_in_bounds(self, make_context, start_state):
        records, _ = SweepUpPattern().build(start_state, make_context(channel_count=24))
        assert all(0 <= c < 24 for c in _channels(records))


class TestSweepDown:
    def test_continues_parity_and_walks_back_to_zero(self, make_context, start_state):
        context = make_context(channel_count=4)
        _, after_up = SweepUpPattern().build(start_state, context)

        records, state = SweepDownPattern().build(after_up, context)

        assert len(records) == 7
        assert _channels(records) == [3, 2, 2, 1, 1, 0, 0]
        assert _values(records) == [ON, OFF, ON, OFF, ON, OFF, ON]
        assert state.channel == 0

    def test_continues_clock_from_previous_phase(self, make_context, start_state):
        context = make_context(channel_count=40)
        up, after_up = SweepUpPattern().build(start_state, context)

        down, _ = SweepDownPattern().build(after_up, context)

        assert len(down) == 79
        assert down[0].do_at == up[-1].do_at + HOP
        assert all(b.do_at - a.do_at == HOP for a, b in zip(down, down[1:]))

    def test_does_not_step_below_channel_zero(self, make_context, start_state):
        state = SequenceState(clock=start_state.clock, channel=0, digital_value=OFF)

        records, final = SweepDownPattern().build(state, make_context(channel_count=4))

        assert set(_channels(records)) == {0}
        assert final.channel == 0


class TestCumulativeOn:
    def test_every_channel_once_and_on(self, make_context, start_state):
        records, state = CumulativeOnPattern().build(start_state, make_context(channel_count=40))

        assert _channels(records) == list(range(40))
        assert set(_values(records)) == {ON}
        assert records[0].do_at == start_state.clock + HOP
        assert state.clock == start_state.clock + 40 * HOP
        assert records[0].notes == "Cumulative on entry"


class TestAllOff:
    def test_every_channel_once_off_at_one_timestamp(self, make_context, start_state):
        records, state = AllOffPattern().build(start_state, make_context(channel_count=24))

        assert sorted(_channels(records)) == list(range(24))
        assert set(_values(records)) == {OFF}
        assert {r.do_at for r in records} == {start_state.clock + GAP}
        assert state.clock == start_state.clock + GAP

    def test_tagged_as_intermediate_reset(self, make_context, start_state):
        records, _ = AllOffPattern().build(start_state, make_context())
        assert {r.notes for r in records} == {"Intermediate all-off entry"}


class TestRandomized:
    def test_emits_exactly_random_count_alternating_records(self, make_context, start_state):
        records, _ = RandomizedPattern().build(start_state, make_context(channel_count=40))

        assert len(records) == 200
        values = _values(records)
        assert values[0] == ON
        assert all(a != b for a, b in zip(values, values[1:]))

    def test_channels_in_bounds_and_paired(self, make_context, start_state):
        records, _ = RandomizedPattern().build(start_state, make_context(channel_count=24))

        channels = _channels(records)
        assert all(0 <= c < 24 for c in channels)
        # each ON is followed by an OFF on the same channel
        for on, off in zip(channels[0::2], channels[1::2]):
            assert on == off

    def test_hops_within_configured_range(self, make_context, start_state):
        records, state = RandomizedPattern().build(start_state, make_context())

        assert records[0].do_at == start_state.clock + GAP
        for a, b in zip(records, records[1:]):
            assert timedelta(milliseconds=75) <= b.do_at - a.do_at <= timedelta(milliseconds=500)
        assert state.clock == records[-1].do_at

    def test_same_seed_same_sequence(self, make_context, start_state):
        first, _ = RandomizedPattern().build(start_state, make_context(seed=99))
        second, _ = RandomizedPattern().build(start_state, make_context(seed=99))

        assert [r.as_row() for r in first] == [r.as_row() for r in second]

    def test_respects_custom_count(self, make_context, start_state):
        records, _ = RandomizedPattern().build(start_state, make_context(random_count=10))
        assert len(records) == 10
