from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from tablefill.config import get_settings
from tablefill.generator import plan_recipe, resolve_layout, run_recipe
from tablefill.infrastructure.db_factory import build_dsn
from tablefill.reporter import print_layouts, print_records, print_summary
from tablefill.sinks import CsvEventSink, MemoryEventSink, PostgresEventSink
from tablefill.sinks.abstract import BaseEventSink
from tablefill.utils.logging import configure_logging

app = typer.Typer(help="Seed the ControlEvent table with canned digital I/O test events.")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={build_dsn(settings, hide_password=True)} | "
        f"table={settings.db_schema}.{settings.db_table} | "
        f"layout={settings.layout} recipe={settings.recipe_id} seed={settings.seed}"
    )


@app.command()
def layouts() -> None:
    """
    List the available channel layouts.
    """
    print_layouts()


@app.command()
def run(
    layout: Optional[str] = typer.Option(
        None,
        "--layout",
        "-l",
        help="Channel layout to generate (io24, io40). Defaults to settings.",
    ),
    recipe_id: Optional[int] = typer.Option(
        None,
        "--recipe-id",
        "-r",
        help="Override the recipe ID written to every row.",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Seed for the randomized tail.",
    ),
    csv: Optional[Path] = typer.Option(
        None,
        "--csv",
        help="Write rows to this CSV file instead of the database.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Build the batch in memory only; touch neither database nor disk.",
    ),
    batch: bool = typer.Option(
        False,
        "--batch",
        help="Insert each phase with one executemany call instead of row by row.",
    ),
) -> None:
    """
    Truncate the target table and write one full test batch to it.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    # Unknown layouts fail here, before any connection or file is opened.
    resolve_layout(layout or settings.layout)

    sink: BaseEventSink
    if dry_run:
        sink = MemoryEventSink()
        done = "Dry run: nothing was written."
    elif csv is not None:
        sink = CsvEventSink(csv)
        done = f"All entries have been written to {csv}."
    else:
        sink = PostgresEventSink(settings=settings)
        done = "All entries have been written to the database."

    with sink:
        summary = run_recipe(
            sink,
            settings=settings,
            layout_name=layout,
            recipe_id=recipe_id,
            seed=seed,
            batch=batch,
        )

    print_summary(summary)
    typer.echo(f"{done}\n")
    typer.echo("We're done here, Sparky...\nHave a nice day . . . somewhere else.")


@app.command()
def preview(
    layout: Optional[str] = typer.Option(
        None,
        "--layout",
        "-l",
        help="Channel layout to preview. Defaults to settings.",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Seed for the randomized tail.",
    ),
    limit: int = typer.Option(
        50,
        "--limit",
        "-n",
        help="Number of records to show.",
    ),
) -> None:
    """
    Build a batch in memory and print its first records.
    """
    _, _, phases = plan_recipe(layout_name=layout, seed=seed)
    records = [record for phase in phases for record in phase.records]
    print_records(records, limit=limit)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
