"""CLI entry point for the timetable scheduler."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .exceptions import InputError, InvalidConfigError
from .exporters import ExcelExporter, JSONExporter, TextReportExporter
from .loader import load_input, validate_input
from .scheduler import (
    AlgorithmConfig,
    TimetableScheduler,
    build_time_slot_catalog,
    load_config,
    merge_config,
)
from .scheduler.models import ScheduleResult

app = typer.Typer(
    name="timetable-sa",
    help="Generate university timetables with simulated annealing",
    add_completion=False,
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_config(config_file: Optional[Path]) -> AlgorithmConfig:
    try:
        return load_config(config_file) if config_file else merge_config()
    except InvalidConfigError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1) from e


@app.command()
def solve(
    input_file: Annotated[
        Path,
        typer.Argument(help="Excel workbook or JSON file with rooms, lecturers and classes"),
    ],
    output_dir: Annotated[
        Path,
        typer.Option("-o", "--output-dir", help="Directory for result files"),
    ] = Path("out"),
    config_file: Annotated[
        Optional[Path],
        typer.Option("-c", "--config", help="JSON algorithm configuration"),
    ] = None,
    seed: Annotated[
        Optional[int],
        typer.Option("--seed", help="Random seed for reproducible runs"),
    ] = None,
    max_iterations: Annotated[
        Optional[int],
        typer.Option("--max-iterations", min=0, help="Override the iteration limit"),
    ] = None,
    restarts: Annotated[
        int,
        typer.Option("--restarts", min=1, help="Independent annealing chains"),
    ] = 1,
    workers: Annotated[
        int,
        typer.Option("--workers", min=1, help="Worker processes for the chains"),
    ] = 1,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show progress logs and detailed output"),
    ] = False,
) -> None:
    """Build a timetable and write the result files."""
    _configure_logging(verbose)
    config = _load_config(config_file)
    if max_iterations is not None:
        config.max_iterations = max_iterations

    try:
        with console.status("[bold green]Loading input..."):
            data = load_input(input_file)
    except InputError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1) from e

    console.print(f"\n[bold]Timetable Generation for:[/bold] {input_file.name}")
    console.print(f"  Rooms: {len(data.rooms)}")
    console.print(f"  Lecturers: {len(data.lecturers)}")
    console.print(f"  Class requirements: {len(data.classes)}")

    scheduler = TimetableScheduler(config=config, seed=seed, restarts=restarts, workers=workers)
    with console.status("[bold green]Optimizing schedule..."):
        result = scheduler.schedule(data.rooms, data.lecturers, data.classes)

    _show_summary(result, verbose)

    output_dir.mkdir(parents=True, exist_ok=True)
    outputs = [
        (JSONExporter(), output_dir / "timetable_result.json"),
        (ExcelExporter(), output_dir / "timetable_result.xlsx"),
        (JSONExporter(violations_only=True), output_dir / "violation_report.json"),
        (TextReportExporter(), output_dir / "violation_report.txt"),
    ]
    with console.status(f"[bold green]Exporting to {output_dir}..."):
        for exporter, path in outputs:
            exporter.export(result, path)

    console.print("\n[bold green]✓[/bold green] Results saved to:")
    for _, path in outputs:
        console.print(f"  {path}")


@app.command()
def slots(
    config_file: Annotated[
        Optional[Path],
        typer.Option("-c", "--config", help="JSON algorithm configuration"),
    ] = None,
) -> None:
    """Show the time-slot catalog produced by a configuration."""
    config = _load_config(config_file)
    catalog = build_time_slot_catalog(config.time_slot_config, config.custom_time_slots)

    mode = "custom (full override)" if config.custom_time_slots is not None else "generated"
    console.print(f"\n[bold]Time slots:[/bold] {mode}")

    for title, shift_slots in (
        ("Morning (pagi)", catalog.morning),
        ("Evening (sore)", catalog.evening),
        ("Evening-eligible", catalog.evening_eligible),
    ):
        table = Table(title=f"{title}: {len(shift_slots)} slots")
        table.add_column("Day", style="cyan")
        table.add_column("Period", style="blue")
        table.add_column("Start", style="green")
        table.add_column("End", style="green")

        for slot in shift_slots:
            table.add_row(slot.day, str(slot.period), slot.start_time, slot.end_time)

        console.print(table)


@app.command()
def validate(
    input_file: Annotated[
        Path,
        typer.Argument(help="Excel workbook or JSON file to check"),
    ],
) -> None:
    """Load input and report inconsistencies without scheduling."""
    try:
        with console.status("[bold green]Validating input..."):
            data = load_input(input_file)
    except InputError as e:
        console.print(f"[bold red]✗ Input could not be loaded:[/bold red] {e}")
        raise typer.Exit(1) from e

    warnings = validate_input(data)

    console.print(f"\n[bold]Validation Results for:[/bold] {input_file.name}")
    console.print(f"  Rooms: {len(data.rooms)}")
    console.print(f"  Lecturers: {len(data.lecturers)}")
    console.print(f"  Class requirements: {len(data.classes)}")

    if not warnings:
        console.print("[bold green]✓ Input is consistent[/bold green]")
        return

    console.print(f"\n[bold yellow]Warnings ({len(warnings)}):[/bold yellow]")
    for warning in warnings:
        console.print(f"  [yellow]• {warning}[/yellow]")


def _show_summary(result: ScheduleResult, verbose: bool) -> None:
    """Show scheduling results in tables."""
    stats = result.statistics
    report = result.violation_report

    overview_table = Table(title="Overview", show_header=False)
    overview_table.add_column("Metric", style="cyan")
    overview_table.add_column("Value", style="green")

    overview_table.add_row("Fitness", f"{result.solution.fitness:.2f}")
    overview_table.add_row("Placed Classes", f"{stats.total_placed} / {stats.total_classes}")
    overview_table.add_row("Unplaced Classes", str(stats.total_unplaced))
    overview_table.add_row("Hard Violations", str(report.total_hard))
    overview_table.add_row("Soft Violations", str(report.total_soft))
    overview_table.add_row("Iterations", str(stats.run.iterations))
    overview_table.add_row("Reheats", str(stats.run.reheats))
    overview_table.add_row("Elapsed", f"{stats.run.elapsed_seconds:.1f}s")

    console.print(overview_table)

    if report.violations_by_type:
        type_table = Table(title="Violations by Type")
        type_table.add_column("Constraint", style="cyan")
        type_table.add_column("Count", style="red")

        for kind, count in sorted(report.violations_by_type.items()):
            type_table.add_row(kind, str(count))

        console.print(type_table)

    if stats.by_day:
        console.print("\n[bold]Distribution by day:[/bold]")
        for day, count in stats.by_day.items():
            console.print(f"  {day}: {count}")

    if verbose and result.unplaced:
        console.print(f"\n[bold yellow]Unplaced classes ({len(result.unplaced)}):[/bold yellow]")
        for unplaced in result.unplaced[:10]:
            console.print(f"  [yellow]- {unplaced.class_id or '?'}: {unplaced.details}[/yellow]")
        if len(result.unplaced) > 10:
            console.print(f"  [yellow]... and {len(result.unplaced) - 10} more[/yellow]")


if __name__ == "__main__":
    app()
