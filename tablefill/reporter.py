from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from tablefill.domain.layouts import LAYOUTS
from tablefill.domain.models import EventRecord
from tablefill.generator import RunSummary


def _fmt_time(value: Optional[datetime]) -> str:
    if value is None:
        return "-"
    return value.strftime("%H:%M:%S.%f")[:-3]


def _span_seconds(phase: Dict[str, Any]) -> str:
    first, last = phase.get("first_do_at"), phase.get("last_do_at")
    if first is None or last is None:
        return "-"
    return f"{(last - first).total_seconds():.3f}"


def print_summary(summary: RunSummary, console: Optional[Console] = None) -> None:
    """
    Render a run summary as a rich table, one row per phase.
    """
    console = console or Console()

    if not summary.phases:
        console.print("[yellow]No phases were written.[/yellow]")
        return

    table = Table(
        title=(
            f"TableFill Run | recipe {summary.recipe_id} | {summary.layout} "
            f"({summary.channel_count} channels)\n[dim]Sink: {summary.sink}[/dim]"
        ),
        box=box.ROUNDED,
        caption=f"{summary.total_rows:,} rows in doAt order",
    )
    table.add_column("Phase", style="cyan", no_wrap=True)
    table.add_column("Rows", justify="right", style="magenta")
    table.add_column("First doAt", justify="right", style="green")
    table.add_column("Last doAt", justify="right", style="green")
    table.add_column("Span (s)", justify="right", style="yellow")

    for phase in summary.phases:
        table.add_row(
            phase["phase"],
            f"{phase['rows']:,}",
            _fmt_time(phase.get("first_do_at")),
            _fmt_time(phase.get("last_do_at")),
            _span_seconds(phase),
        )

    console.print(table)


def print_records(
    records: Iterable[EventRecord],
    limit: Optional[int] = None,
    console: Optional[Console] = None,
) -> None:
    """
    Render event records as they would land in the table.
    """
    console = console or Console()
    rows = list(records)
    shown = rows if limit is None else rows[:limit]

    table = Table(title="Event Preview", box=box.SIMPLE_HEAVY)
    table.add_column("#", justify="right", style="dim")
    table.add_column("recipeID", justify="right")
    table.add_column("channelNmbr", justify="right", style="cyan")
    table.add_column("doAt", style="green")
    table.add_column("digitalValue", justify="center")
    table.add_column("notes", style="dim")

    for index, record in enumerate(shown):
        value = "[bold green]ON[/bold green]" if record.digital_value else "[red]OFF[/red]"
        table.add_row(
            str(index),
            str(record.recipe_id),
            str(record.channel_nmbr),
            _fmt_time(record.do_at),
            value,
            record.notes,
        )

    if len(shown) < len(rows):
        table.caption = f"Showing {len(shown)} of {len(rows)} records"
    console.print(table)


def print_layouts(console: Optional[Console] = None) -> None:
    """List the known layouts with their channel counts and patterns."""
    console = console or Console()
    table = Table(title="Layouts", box=box.ROUNDED)
    table.add_column("Layout", style="cyan", no_wrap=True)
    table.add_column("Channels", justify="right", style="magenta")
    table.add_column("Patterns")
    for name in sorted(LAYOUTS):
        layout = LAYOUTS[name]
        table.add_row(layout.name, str(layout.channel_count), " -> ".join(layout.patterns))
    console.print(table)


__all__ = ["print_layouts", "print_records", "print_summary"]
