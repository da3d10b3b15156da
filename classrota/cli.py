"""
Command-line interface for the class rotation scheduler.

Usage:
    python -m classrota build dataset.json --catalog catalog.json -o schedule.json
    python -m classrota validate dataset.json --catalog catalog.json
    python -m classrota next schedule.json --today 2024-09-03
    python -m classrota show schedule.json --teacher "Ann Lee"
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .data.loader import DataValidationError, load_catalog, load_dataset
from .data.models import (
    ContentCatalog,
    FlexNote,
    MaterializedEvent,
    ScheduleInput,
    format_date,
)
from .main import build_output
from .output.cache import ScheduleCache
from .output.locator import find_next_event
from .output.schema import NoUpcomingEvent, ScheduleInfo, ScheduleOutput

# Create Typer app
app = typer.Typer(
    name="classrota",
    help="Rotate teachers, devotionals and lessons across a class schedule.",
    add_completion=False,
)

# Rich console for pretty output
console = Console()


# =============================================================================
# Helper Functions
# =============================================================================

def configure_logging(verbose: bool) -> None:
    """Route package logging through rich; debug output only when verbose."""
    handler = RichHandler(console=console, show_path=False, log_time_format="[%X]")
    handler.setFormatter(logging.Formatter("%(message)s"))

    package_logger = logging.getLogger("classrota")
    package_logger.handlers = [handler]
    package_logger.setLevel(logging.DEBUG if verbose else logging.ERROR)


def load_input(input_path: Path) -> ScheduleInput:
    """Load and validate a dataset."""
    if not input_path.exists():
        console.print(f"[red]Error:[/red] Input file not found: {input_path}")
        raise typer.Exit(code=1)

    try:
        return load_dataset(input_path)
    except (json.JSONDecodeError, DataValidationError) as e:
        console.print(f"[red]Error loading input:[/red] {e}")
        raise typer.Exit(code=1)


def load_content(catalog_path: Path) -> ContentCatalog:
    """Load and validate a content catalog."""
    if not catalog_path.exists():
        console.print(f"[red]Error:[/red] Catalog file not found: {catalog_path}")
        raise typer.Exit(code=1)

    try:
        return load_catalog(catalog_path)
    except (json.JSONDecodeError, DataValidationError) as e:
        console.print(f"[red]Error loading catalog:[/red] {e}")
        raise typer.Exit(code=1)


def load_output(output_path: Path) -> ScheduleOutput:
    """Load a schedule output file, refusing stale versions."""
    if not output_path.exists():
        console.print(f"[red]Error:[/red] Output file not found: {output_path}")
        raise typer.Exit(code=1)

    try:
        with open(output_path) as f:
            data = json.load(f)
        output = ScheduleOutput.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        console.print(f"[red]Error loading output:[/red] {e}")
        raise typer.Exit(code=1)

    if not output.is_current:
        console.print(
            f"[yellow]Schedule version {output.version} is out of date; "
            f"rebuild it with the build command.[/yellow]"
        )
        raise typer.Exit(code=1)

    return output


def print_diagnostics(info: ScheduleInfo) -> None:
    """Print validator diagnostics, if any."""
    if not info.diagnostics:
        console.print("[green]No schedule issues found[/green]")
        return

    console.print("[yellow]Schedule issues:[/yellow]")
    for message in info.diagnostics:
        console.print(f"  [yellow]*[/yellow] {message}")


def print_summary(output: ScheduleOutput) -> None:
    """Print schedule summary to console."""
    table = Table(title="Summary", show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Events", str(len(output.schedule)))
    table.add_row("Class Lessons", str(output.info.total_class_lessons))
    table.add_row("Catalog Lessons", str(output.info.catalog_size))
    table.add_row("Catalog Version", output.catalog_version or "-")
    table.add_row("Schedule Version", output.version)

    console.print(table)
    print_teacher_load(output.info)


def print_teacher_load(info: ScheduleInfo) -> None:
    """Print events per teacher."""
    if not info.teacher_load:
        return

    table = Table(title="Teacher Load", show_header=True, header_style="bold cyan")
    table.add_column("Teacher")
    table.add_column("Events", justify="right")

    for teacher, count in info.teacher_load.items():
        table.add_row(teacher, str(count))

    console.print(table)


def _lesson_text(event: MaterializedEvent) -> str:
    if not event.lessons:
        return "-"
    parts = []
    for lesson in event.lessons:
        if isinstance(lesson, FlexNote):
            parts.append(f"[italic]{lesson}[/italic]")
        else:
            parts.append(str(lesson))
    return "\n".join(parts)


# =============================================================================
# Commands
# =============================================================================

@app.command()
def build(
    input_file: Path = typer.Argument(
        ...,
        help="Path to dataset JSON export",
    ),
    catalog: Path = typer.Option(
        ...,
        "--catalog", "-c",
        help="Path to content catalog JSON",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Path to write schedule JSON",
    ),
    cache_dir: Optional[Path] = typer.Option(
        None,
        "--cache-dir",
        help="Directory for the schedule cache",
    ),
    name: Optional[str] = typer.Option(
        None,
        "--name", "-n",
        help="Cache key (defaults to the dataset file name)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose output",
    ),
) -> None:
    """
    Build the schedule for a class.

    Resolves teacher, devotional and lessons for every date, validates the
    result, and optionally writes it to a file and the cache.

    Example:
        python -m classrota build dataset.json -c catalog.json -o schedule.json
    """
    configure_logging(verbose)

    console.print(f"\n[bold]Loading input from:[/bold] {input_file}")
    schedule_input = load_input(input_file)
    content = load_content(catalog)

    console.print(f"[green]Loaded:[/green] {len(schedule_input.events)} dates, "
                  f"{len(schedule_input.teachers)} teachers, {len(schedule_input.students)} students, "
                  f"{len(content)} lessons")

    schedule_output = build_output(schedule_input, content)

    console.print()
    print_summary(schedule_output)
    console.print()
    print_diagnostics(schedule_output.info)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w") as f:
            f.write(schedule_output.to_json())
        console.print(f"\n[green]Schedule saved to:[/green] {output}")

    if cache_dir:
        path = ScheduleCache(cache_dir).save(name or input_file.stem, schedule_output)
        console.print(f"[green]Cached at:[/green] {path}")

    console.print()


@app.command()
def validate(
    input_file: Path = typer.Argument(
        ...,
        help="Path to dataset JSON export to validate",
    ),
    catalog: Path = typer.Option(
        ...,
        "--catalog", "-c",
        help="Path to content catalog JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Show detailed validation results",
    ),
) -> None:
    """
    Validate a dataset against the schema and the content catalog.

    Checks for:
    - Valid JSON structure
    - Schema compliance
    - Lesson count against catalog size
    - Dates without a type

    Example:
        python -m classrota validate dataset.json -c catalog.json
    """
    configure_logging(verbose)

    console.print(f"\n[bold]Validating:[/bold] {input_file}\n")

    if not input_file.exists():
        console.print(f"[red]Error:[/red] File not found: {input_file}")
        raise typer.Exit(code=1)

    # Step 1: JSON parsing
    console.print("[cyan]1. Checking JSON syntax...[/cyan]")
    try:
        with open(input_file) as f:
            json.load(f)
        console.print("   [green]JSON syntax is valid[/green]")
    except json.JSONDecodeError as e:
        console.print(f"   [red]Invalid JSON:[/red] {e}")
        raise typer.Exit(code=1)

    # Step 2: Schema validation
    console.print("[cyan]2. Validating against schema...[/cyan]")
    try:
        schedule_input = load_dataset(input_file)
        console.print("   [green]Schema validation passed[/green]")
    except DataValidationError as e:
        console.print("   [red]Schema validation failed:[/red]")
        for line in str(e).split("\n"):
            console.print(f"   {line}")
        raise typer.Exit(code=1)

    content = load_content(catalog)

    # Step 3: Schedule consistency
    console.print("[cyan]3. Checking schedule consistency...[/cyan]")
    schedule_output = build_output(schedule_input, content)
    print_diagnostics(schedule_output.info)

    # Summary
    console.print("\n[bold]Summary:[/bold]")
    table = Table(show_header=False, box=None)
    table.add_column("Entity", style="cyan")
    table.add_column("Count", style="white")

    summary = schedule_input.summary()
    table.add_row("Dates", str(summary["events"]))
    table.add_row("Teachers", str(summary["teachers"]))
    table.add_row("Students", str(summary["students"]))
    table.add_row("Class lessons", str(summary["total_class_lessons"]))
    table.add_row("Catalog lessons", str(len(content)))

    console.print(table)

    if verbose:
        console.print("\n[bold]Dates by type:[/bold]")
        for kind, count in sorted(summary["by_type"].items()):
            console.print(f"  {kind}: {count}")
        print_teacher_load(schedule_output.info)

    console.print("\n[green]Validation complete.[/green]\n")


@app.command("next")
def next_class(
    output_file: Path = typer.Argument(
        ...,
        help="Path to schedule JSON file",
    ),
    today: Optional[datetime] = typer.Option(
        None,
        "--today",
        formats=["%Y-%m-%d"],
        help="Reference day (defaults to today)",
    ),
) -> None:
    """
    Show the next scheduled class.

    Example:
        python -m classrota next schedule.json
    """
    schedule_output = load_output(output_file)
    result = find_next_event(schedule_output.schedule, today.date() if today else None)

    if isinstance(result, NoUpcomingEvent):
        console.print(f"[yellow]{result.day_name}[/yellow]")
        return

    kind = result.type.value if result.type else "untyped"
    lines = [f"[bold]{format_date(result.date)}[/bold] ({kind})"]
    if result.teacher:
        lines.append(f"Teacher: {result.teacher}")
    if result.devotional:
        lines.append(str(result.devotional))
    if result.lessons:
        lines.append(_lesson_text(result))

    console.print(Panel("\n".join(lines), title=result.day_name))


@app.command()
def show(
    output_file: Path = typer.Argument(
        ...,
        help="Path to schedule JSON file",
    ),
    teacher: Optional[str] = typer.Option(
        None,
        "--teacher", "-T",
        help="Only show dates taught by this teacher",
    ),
) -> None:
    """
    Display the full schedule.

    Examples:
        python -m classrota show schedule.json
        python -m classrota show schedule.json --teacher "Ann Lee"
    """
    schedule_output = load_output(output_file)
    events = schedule_output.schedule

    if teacher:
        if teacher not in schedule_output.info.teacher_load:
            console.print(f"[red]Error:[/red] Teacher '{teacher}' not found")
            console.print(f"Available teachers: {', '.join(schedule_output.info.teacher_load)}")
            raise typer.Exit(code=1)
        events = [e for e in events if e.teacher == teacher]

    table = Table(title="Schedule", show_header=True, header_style="bold cyan")
    table.add_column("Date", style="cyan")
    table.add_column("Type")
    table.add_column("Teacher")
    table.add_column("Devotional")
    table.add_column("Lessons")

    for event in sorted(events, key=lambda e: e.date):
        style = None if event.is_duty_bearing else "dim"
        table.add_row(
            format_date(event.date),
            Text(event.type.value if event.type else "?", style="red" if event.type is None else ""),
            event.teacher or "-",
            str(event.devotional) if event.devotional else "-",
            _lesson_text(event),
            style=style,
        )

    console.print(table)

    if schedule_output.info.diagnostics:
        console.print()
        print_diagnostics(schedule_output.info)


# =============================================================================
# Main Entry Point
# =============================================================================

def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
