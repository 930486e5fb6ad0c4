"""Command-line interface for readpace.

Built with Typer for commands and Rich for beautiful output.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import get_config
from .formatting import format_duration, format_projected_date, format_projected_date_compact
from .reading import BookProgress, ProjectionEngine, ReadingProjection, classify_status
from .records import LibrarySnapshot, SnapshotError, load_snapshot

# Create the main app
app = typer.Typer(
    name="readpace",
    help="Forecast when you will finish the books you are reading.",
    no_args_is_help=True,
)

# Rich console for pretty output
console = Console()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")


def _load(snapshot_path: Path) -> LibrarySnapshot:
    try:
        return load_snapshot(snapshot_path)
    except SnapshotError as e:
        print_error(str(e))
        raise typer.Exit(1)


def _parse_today(value: Optional[str]) -> date:
    if value is None:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        print_error(f"Invalid date: {value} (expected YYYY-MM-DD)")
        raise typer.Exit(1)


def _progress_bar(pct: float, width: int = 10) -> str:
    filled = int((pct / 100) * width)
    return "█" * filled + "░" * (width - filled)


def format_projection_cell(projection: ReadingProjection) -> str:
    """Calendar, compact date and delay marker for the dashboard table."""
    if not projection.can_show:
        return "-"

    parts = []
    if projection.estimated_date:
        parts.append(f"📅 {format_projected_date_compact(projection.estimated_date)}")
    if projection.is_delayed:
        parts.append(f"[red]⚠ {projection.delay_days}d[/red]")
    if not parts:
        return f"[dim]{projection.reading_days_observed} reading day(s)[/dim]"
    return " ".join(parts)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Forecast when you will finish the books you are reading."""
    try:
        config = get_config()
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)
    for problem in config.validate():
        print_warning(problem)

    level = logging.DEBUG if verbose else logging.getLevelName(config.log_level)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


# ============================================================================
# Commands
# ============================================================================


@app.command()
def version() -> None:
    """Show version."""
    console.print(f"readpace {__version__}")


@app.command()
def status(
    pages_read: int = typer.Argument(..., min=0, help="Pages read so far"),
    total_pages: int = typer.Argument(..., min=1, help="Book page count"),
) -> None:
    """Classify a book's status from its page counts."""
    console.print(classify_status(pages_read, total_pages).value)


@app.command()
def project(
    snapshot_path: Path = typer.Argument(..., help="Library snapshot (JSON)"),
    book_id: Optional[str] = typer.Option(None, "--book", "-b", help="Show a single book"),
    today: Optional[str] = typer.Option(None, "--today", help="Reference date (YYYY-MM-DD)"),
    show_all: bool = typer.Option(False, "--all", "-a", help="Include books without a projection"),
) -> None:
    """Show projected completion dates for books being read."""
    snapshot = _load(snapshot_path)
    reference = _parse_today(today)
    engine = ProjectionEngine(config=get_config())

    if book_id:
        book = snapshot.get_book(book_id)
        if not book:
            print_error(f"Book not found: {book_id}")
            raise typer.Exit(1)

        projection = engine.project(book, snapshot.status_for(book.id), snapshot.sessions, reference)
        _show_projection_panel(book.title or book.id, projection)
        return

    projections = engine.project_many(
        snapshot.books, snapshot.status_map(), snapshot.sessions, reference
    )

    table = Table(title="Reading Projections", show_header=True, header_style="bold magenta")
    table.add_column("Title", style="cyan", max_width=35)
    table.add_column("Progress", justify="center")
    table.add_column("Forecast")
    table.add_column("Pace", justify="right")
    table.add_column("Days Left", justify="right")

    rows = 0
    for book in snapshot.books:
        projection = projections[book.id]
        if not projection.can_show and not show_all:
            continue

        entry = snapshot.status_for(book.id)
        pages_read = entry.pages_read if entry else 0
        pct = min(100, int((pages_read / book.total_pages) * 100))

        table.add_row(
            escape((book.title or book.id)[:35]),
            f"[{_progress_bar(pct)}] {pct}%",
            format_projection_cell(projection),
            f"{projection.pages_per_day} p/d" if projection.pages_per_day else "-",
            str(projection.days_remaining) if projection.estimated_date else "-",
        )
        rows += 1

    if rows == 0:
        console.print("[dim]No books currently being read.[/dim]")
        return

    console.print(table)


def _show_projection_panel(title: str, projection: ReadingProjection) -> None:
    """Tooltip-style breakdown of one projection."""
    lines = [f"[bold]{escape(title)}[/bold]", ""]

    if not projection.can_show:
        lines.append("[dim]No projection available.[/dim]")
        console.print(Panel("\n".join(lines), title="Projection"))
        return

    if projection.estimated_date:
        label = "Target date" if projection.has_target_date else "Estimated finish"
        lines.append(f"{label}: {format_projected_date(projection.estimated_date)}")
        lines.append(f"Days remaining: {projection.days_remaining}")
    else:
        lines.append("[dim]Not enough reading days for a forecast yet.[/dim]")

    if projection.pages_per_day:
        lines.append(f"Pace: {projection.pages_per_day} pages/day")
    lines.append(f"Reading days: {projection.reading_days_observed}")

    if projection.is_delayed:
        lines.append(f"[red]Delayed by {projection.delay_days} day(s)[/red]")

    console.print(Panel("\n".join(lines), title="Projection"))


@app.command()
def metrics(
    snapshot_path: Path = typer.Argument(..., help="Library snapshot (JSON)"),
    book_id: str = typer.Argument(..., help="Book ID"),
    today: Optional[str] = typer.Option(None, "--today", help="Reference date (YYYY-MM-DD)"),
) -> None:
    """Show reading metrics for a book."""
    snapshot = _load(snapshot_path)
    reference = _parse_today(today)

    book = snapshot.get_book(book_id)
    if not book:
        print_error(f"Book not found: {book_id}")
        raise typer.Exit(1)

    progress = BookProgress.from_records(
        book, snapshot.status_for(book.id), snapshot.sessions, reference
    )

    lines = [
        f"[bold]{escape(book.title or book.id)}[/bold]",
        "",
        f"Progress: [{_progress_bar(progress.progress_percent, 30)}] {progress.progress_percent}%",
        f"Page {progress.pages_read} of {progress.total_pages}",
        "",
        f"Reading sessions: {progress.sessions_count}",
        f"Reading days: {progress.reading_days}",
        f"Avg pages/day: {progress.avg_pages_per_day}",
    ]
    if progress.total_minutes:
        lines.append(f"Time spent: {format_duration(progress.total_minutes)}")
        lines.append(f"Avg time/day: {format_duration(progress.avg_minutes_per_day)}")
        lines.append(f"Pages/minute: {progress.pages_per_minute}")
    if progress.last_read_date:
        lines.append(f"Last read: {format_projected_date_compact(progress.last_read_date)}")

    console.print(Panel("\n".join(lines), title="Reading Metrics"))
