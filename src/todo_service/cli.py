"""CLI for trying the task parsing pipeline locally."""

from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .errors import TodoServiceError
from .services.date_anchors import WEEKDAY_NAMES, format_date, resolve_date_anchors
from .services.generation import get_generation_client
from .services.input_normalizer import normalize_input, validate_input
from .services.keywords import classify_category, classify_priority
from .services.task_parser import current_time, parse_task

app = typer.Typer(help="AI todo service tools")
console = Console()

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


@app.command()
def anchors():
    """Show the date anchors the extraction prompt uses right now."""
    now = current_time()
    table_anchors = resolve_date_anchors(now)

    table = Table(title=f"Anchors for {format_date(table_anchors.today)} ({table_anchors.weekday_name.title()})")
    table.add_column("Weekday")
    table.add_column("This week", style="cyan")
    table.add_column("Next week", style="magenta")
    for name in WEEKDAY_NAMES:
        table.add_row(
            name.title(),
            format_date(table_anchors.this_week[name]),
            format_date(table_anchors.next_week[name]),
        )

    console.print(f"Today: [bold]{format_date(table_anchors.today)}[/bold]")
    console.print(f"Tomorrow: {format_date(table_anchors.tomorrow)}")
    console.print(f"Day after tomorrow: {format_date(table_anchors.day_after_tomorrow)}")
    console.print(table)


@app.command()
def parse(
    text: str = typer.Argument(..., help="Task text, e.g. '내일 오후 3시까지 프로젝트 발표 준비하기'"),
    offline: bool = typer.Option(
        False,
        "--offline/--online",
        help="Only validate and classify by keywords, without calling Bedrock",
    ),
):
    """Parse task text into a structured task."""
    processed = normalize_input(text)

    try:
        validate_input(processed)
    except TodoServiceError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(1)

    if offline:
        day_anchors = resolve_date_anchors(current_time())
        console.print(Panel.fit(
            f"[bold]{processed}[/bold]\n"
            f"Today: {format_date(day_anchors.today)}, tomorrow: {format_date(day_anchors.tomorrow)}\n"
            f"Priority (keywords): {classify_priority(processed).value}\n"
            f"Category (keywords): {classify_category(processed).value}",
            title="offline",
        ))
        return

    try:
        parsed = asyncio.run(parse_task(processed, get_generation_client()))
    except TodoServiceError as e:
        console.print(f"[red]{type(e).__name__}: {e.message}[/red]")
        raise typer.Exit(1)

    table = Table(title="Parsed task")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("title", parsed.title)
    table.add_row("description", parsed.description or "-")
    table.add_row("due_date", parsed.due_date.isoformat())
    table.add_row("priority", parsed.priority.value)
    table.add_row("category", parsed.category.value)
    console.print(table)


if __name__ == "__main__":
    app()
