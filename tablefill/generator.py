"""
Generator for TableFill: run a layout's patterns in order and persist them.

Usage (example from CLI):
    from tablefill.generator import run_recipe
    from tablefill.sinks import PostgresEventSink

    with PostgresEventSink() as sink:
        summary = run_recipe(sink, layout_name="io40")

Every pattern starts from the state the previous one returned, so doAt never
decreases across the batch. The whole batch is built in memory first; the sink
is cleared and then fed record by record.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from tablefill.config import Settings, get_settings
from tablefill.domain.layouts import LAYOUTS, Layout
from tablefill.domain.models import EventRecord, RecipeContext, SequenceState
from tablefill.patterns.abstract import PatternBuilder
from tablefill.patterns.all_off import AllOffPattern
from tablefill.patterns.cumulative import CumulativeOnPattern
from tablefill.patterns.randomized import RandomizedPattern
from tablefill.patterns.sweep import SweepDownPattern, SweepUpPattern
from tablefill.sinks.abstract import EventSink
from tablefill.utils.logging import get_logger

log = get_logger(__name__)


@dataclass
class PhaseResult:
    """Records emitted by one pattern and where the sequence stood afterwards."""

    name: str
    records: List[EventRecord]
    state: SequenceState

    @property
    def first_do_at(self) -> Optional[datetime]:
        return self.records[0].do_at if self.records else None

    @property
    def last_do_at(self) -> Optional[datetime]:
        return self.records[-1].do_at if self.records else None


@dataclass
class RunSummary:
    """What a run wrote, phase by phase."""

    recipe_id: int
    layout: str
    channel_count: int
    sink: str
    phases: List[dict] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return sum(phase["rows"] for phase in self.phases)


def _pattern_factories() -> Dict[str, Callable[[], PatternBuilder]]:
    """Registry of available patterns."""
    return {
        "sweep_up": lambda: SweepUpPattern(),
        "sweep_down": lambda: SweepDownPattern(),
        "cumulative_on": lambda: CumulativeOnPattern(),
        "all_off": lambda: AllOffPattern(),
        "randomized": lambda: RandomizedPattern(),
    }


def available_patterns() -> List[str]:
    """List available pattern names."""
    return sorted(_pattern_factories().keys())


def resolve_pattern(name: str) -> PatternBuilder:
    factories = _pattern_factories()
    if name not in factories:
        raise ValueError(f"Unknown pattern '{name}'. Available: {', '.join(factories)}")
    return factories[name]()


def available_layouts() -> List[str]:
    """List available layout names."""
    return sorted(LAYOUTS)


def resolve_layout(name: str, channel_count: Optional[int] = None) -> Layout:
    """
    Look up a layout by name, optionally overriding its channel count.
    """
    if name not in LAYOUTS:
        raise ValueError(f"Unknown layout '{name}'. Available: {', '.join(sorted(LAYOUTS))}")
    layout = LAYOUTS[name]
    if channel_count is not None:
        layout = Layout(name=layout.name, channel_count=channel_count, patterns=layout.patterns)
    return layout


def build_context(
    settings: Settings,
    channel_count: int,
    entered_at: datetime,
    recipe_id: Optional[int] = None,
    seed: Optional[int] = None,
) -> RecipeContext:
    """Translate settings into the per-run context the patterns read."""
    seed = seed if seed is not None else settings.seed
    return RecipeContext(
        recipe_id=recipe_id if recipe_id is not None else settings.recipe_id,
        channel_count=channel_count,
        entered_at=entered_at,
        entered_by=settings.entered_by,
        edited_by=settings.edited_by,
        hop=timedelta(milliseconds=settings.hop_ms),
        phase_gap=timedelta(milliseconds=settings.phase_gap_ms),
        random_count=settings.random_count,
        random_hop_min_ms=settings.random_hop_min_ms,
        random_hop_max_ms=settings.random_hop_max_ms,
        rng=random.Random(seed),
    )


def build_events(
    patterns: Sequence[str], context: RecipeContext, start: datetime
) -> List[PhaseResult]:
    """
    Run `patterns` in order from `start`, threading state between them.

    No I/O happens here; the returned phases hold every record of the batch.
    """
    state = SequenceState(clock=start)
    phases: List[PhaseResult] = []
    for name in patterns:
        pattern = resolve_pattern(name)
        records, state = pattern.build(state, context)
        phases.append(PhaseResult(name=name, records=records, state=state))
        log.debug(
            f"[PATTERN] {name} built {len(records)} records",
            extra={"phase": name, "rows": len(records)},
        )
    return phases


def plan_recipe(
    settings: Optional[Settings] = None,
    layout_name: Optional[str] = None,
    recipe_id: Optional[int] = None,
    seed: Optional[int] = None,
    now: Optional[Callable[[], datetime]] = None,
) -> Tuple[Layout, RecipeContext, List[PhaseResult]]:
    """
    Build a full batch in memory without touching any sink.

    The clock is anchored at `now() + settings.start_delay_ms` so the first
    event fires shortly after the consumer starts.
    """
    settings = settings or get_settings()
    clock = now or datetime.now
    layout = resolve_layout(layout_name or settings.layout, settings.channel_count)

    entered_at = clock()
    context = build_context(
        settings, layout.channel_count, entered_at, recipe_id=recipe_id, seed=seed
    )
    start = entered_at + timedelta(milliseconds=settings.start_delay_ms)
    return layout, context, build_events(layout.patterns, context, start)


def _persist(
    sink: EventSink, records: List[EventRecord], batch: bool
) -> Iterator[int]:
    """Write `records` and yield the number of rows each call stored."""
    insert_many = getattr(sink, "insert_many", None)
    if batch and callable(insert_many):
        insert_many(records)
        yield len(records)
        return
    for record in records:
        sink.insert(record)
        yield 1


def run_recipe(
    sink: EventSink,
    settings: Optional[Settings] = None,
    layout_name: Optional[str] = None,
    recipe_id: Optional[int] = None,
    seed: Optional[int] = None,
    now: Optional[Callable[[], datetime]] = None,
    batch: bool = False,
) -> RunSummary:
    """
    Clear the sink and write one full recipe batch to it.

    Parameters
    ----------
    sink : EventSink
        Destination; only `clear()` and `insert()` are required.
    settings : Settings, optional
        Defaults to the cached process settings.
    layout_name : str, optional
        Overrides `settings.layout`.
    recipe_id : int, optional
        Overrides `settings.recipe_id`.
    seed : int, optional
        Overrides `settings.seed` for the randomized tail.
    now : callable, optional
        Wall clock; injected by tests. Defaults to local `datetime.now`.
    batch : bool
        Hand each phase to `sink.insert_many` when the sink has one.

    Returns
    -------
    RunSummary
        Per-phase row counts and doAt spans.
    """
    settings = settings or get_settings()
    layout, context, phases = plan_recipe(
        settings, layout_name=layout_name, recipe_id=recipe_id, seed=seed, now=now
    )

    summary = RunSummary(
        recipe_id=context.recipe_id,
        layout=layout.name,
        channel_count=layout.channel_count,
        sink=getattr(sink, "name", type(sink).__name__),
    )
    log.info(
        f"[RUN START] recipe={context.recipe_id} layout={layout.name}",
        extra={
            "recipe_id": context.recipe_id,
            "layout": layout.name,
            "channel_count": layout.channel_count,
        },
    )

    rows_written = 0
    try:
        sink.clear()
        for phase in phases:
            for stored in _persist(sink, phase.records, batch):
                rows_written += stored
            summary.phases.append(
                {
                    "phase": phase.name,
                    "rows": len(phase.records),
                    "first_do_at": phase.first_do_at,
                    "last_do_at": phase.last_do_at,
                }
            )
            log.info(
                f"[PHASE COMPLETE] {phase.name}",
                extra={
                    "phase": phase.name,
                    "rows": len(phase.records),
                    "channel_count": layout.channel_count,
                },
            )
    except Exception:
        log.exception(
            f"[RUN FAILED] recipe={context.recipe_id}",
            extra={"recipe_id": context.recipe_id, "rows_written": rows_written},
        )
        raise

    log.info(
        f"[RUN COMPLETE] {summary.total_rows} rows written",
        extra={"recipe_id": context.recipe_id, "rows": summary.total_rows},
    )
    return summary


__all__ = [
    "LAYOUTS",
    "Layout",
    "PhaseResult",
    "RunSummary",
    "available_layouts",
    "available_patterns",
    "build_context",
    "build_events",
    "plan_recipe",
    "resolve_layout",
    "resolve_pattern",
    "run_recipe",
]
