"""Operator CLI for the household calendar.

Works directly on the configured calendar file (DATA_FILE), so it should not
be used to edit while the server is running: the server keeps its own copy
in memory and the next client push would overwrite CLI edits.
"""

from datetime import date, datetime

import typer
import uvicorn
from loguru import logger
from rich.console import Console
from rich.table import Table

from app.calendar.board import add_person, all_people, ensure_weeks, is_default_person, remove_person, repeat_week, select_week
from app.calendar.constants import DAYS, MAX_WEEK_INDEX, TIME_BANDS
from app.calendar.errors import EmptyWeekError
from app.calendar.grid import is_empty, normalize_week
from app.calendar.store import CalendarStore
from app.calendar.week_keys import format_short, key_for, start_date_for, week_dates
from app.config.settings import settings
from app.core.logger import configure_logging
from app.notifications.mailer import SmtpMailer
from app.notifications.weekly import send_final_plan, send_weekly_proposal

console = Console()

app = typer.Typer(
    name="household-calendar",
    help="Household calendar CLI - inspect and edit the shared weekly board",
    add_completion=False,
)

BAND_CHOICES = ", ".join(band.id for band in TIME_BANDS)


def _setup_logging(debug: bool = False) -> None:
    configure_logging(settings, console_level="DEBUG" if debug else "WARNING")


def _open_store() -> CalendarStore:
    store = CalendarStore(settings.data_file)
    store.load()
    return store


def _resolve_week(week: int | None, store: CalendarStore) -> int:
    return store.snapshot().current_week_index if week is None else week


def _parse_day(day: str) -> str:
    normalized = day[:3].title()
    if normalized not in DAYS:
        raise typer.BadParameter(f"Unknown day '{day}', expected one of {', '.join(DAYS)}")
    return normalized


def _parse_band(band: str) -> str:
    normalized = band.lower()
    if normalized not in {b.id for b in TIME_BANDS}:
        raise typer.BadParameter(f"Unknown time band '{band}', expected one of {BAND_CHOICES}")
    return normalized


def _save(store: CalendarStore, state) -> None:
    if not store.replace(state):
        console.print(f"[red]Error:[/red] could not write {store.path}", style="bold red")
        raise typer.Exit(code=1)


@app.command()
def server(
    host: str = typer.Option("127.0.0.1", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(3000, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
) -> None:
    """Run the FastAPI server."""
    logger.info(f"Starting FastAPI server on {host}:{port} (reload={reload})")
    uvicorn.run("app.main:app", host=host, port=port, reload=reload)


@app.command()
def show(
    week: int | None = typer.Option(None, "--week", "-w", min=0, max=MAX_WEEK_INDEX, help="Week index (default: selected week)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Print one week as a table."""
    _setup_logging(debug)
    store = _open_store()
    index = _resolve_week(week, store)
    week_start = start_date_for(index)
    stored = store.snapshot().week(key_for(index))
    grid = normalize_week(stored)

    table = Table(title=f"Week {index + 1}: {format_short(week_start)} - {format_short(week_dates(week_start)[-1])}")
    table.add_column("Time", style="bold cyan")
    for day, day_date in zip(DAYS, week_dates(week_start)):
        table.add_column(f"{day} {format_short(day_date)}")
    for band in TIME_BANDS:
        table.add_row(band.label, *(", ".join(grid[day][band.id]) or "-" for day in DAYS))
    console.print(table)
    if is_empty(stored):
        console.print("[dim]Nobody scheduled this week[/dim]")


@app.command()
def add(
    day: str = typer.Argument(..., help="Day (Mon..Sun)"),
    band: str = typer.Argument(..., help=f"Time band ({BAND_CHOICES})"),
    person: str = typer.Argument(..., help="Name to add"),
    week: int | None = typer.Option(None, "--week", "-w", min=0, max=MAX_WEEK_INDEX, help="Week index (default: selected week)"),
) -> None:
    """Add a person to a slot."""
    _setup_logging()
    store = _open_store()
    try:
        state = add_person(store.snapshot(), _parse_day(day), _parse_band(band), person, week_index=_resolve_week(week, store))
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}", style="bold red")
        raise typer.Exit(code=1) from e
    _save(store, ensure_weeks(state, settings.number_of_weeks))
    console.print(f"[green]Added {person.strip()}[/green]")


@app.command()
def remove(
    day: str = typer.Argument(..., help="Day (Mon..Sun)"),
    band: str = typer.Argument(..., help=f"Time band ({BAND_CHOICES})"),
    position: int = typer.Argument(..., help="Zero-based position in the slot"),
    week: int | None = typer.Option(None, "--week", "-w", min=0, max=MAX_WEEK_INDEX, help="Week index (default: selected week)"),
) -> None:
    """Remove the person at a position in a slot."""
    _setup_logging()
    store = _open_store()
    state = remove_person(store.snapshot(), _parse_day(day), _parse_band(band), position, week_index=_resolve_week(week, store))
    _save(store, state)
    console.print("[green]Slot updated[/green]")


@app.command()
def repeat(
    weeks: int = typer.Option(4, "--weeks", "-n", min=1, help="How many following weeks to overwrite"),
    week: int | None = typer.Option(None, "--week", "-w", min=0, max=MAX_WEEK_INDEX, help="Source week index (default: selected week)"),
) -> None:
    """Copy a week into the following weeks."""
    _setup_logging()
    store = _open_store()
    try:
        state, copied = repeat_week(store.snapshot(), weeks, settings.number_of_weeks, source_index=_resolve_week(week, store))
    except EmptyWeekError as e:
        console.print(f"[yellow]{e}[/yellow]")
        raise typer.Exit(code=1) from e
    _save(store, state)
    console.print(f"[green]Week copied to the following {copied} week(s)[/green]")


@app.command()
def select(
    week: int = typer.Argument(..., min=0, help="Week index to make the selected week"),
) -> None:
    """Change the selected week."""
    _setup_logging()
    store = _open_store()
    try:
        state = select_week(store.snapshot(), week, settings.number_of_weeks)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}", style="bold red")
        raise typer.Exit(code=1) from e
    _save(store, state)
    console.print(f"[green]Week {week + 1} ({format_short(start_date_for(week))}) selected[/green]")


@app.command()
def people() -> None:
    """List the default and custom roster."""
    _setup_logging()
    table = Table(title="People")
    table.add_column("Name", style="bold")
    table.add_column("Roster")
    for name in all_people(_open_store().snapshot()):
        table.add_row(name, "default" if is_default_person(name) else "custom")
    console.print(table)


def _parse_today(today: str | None) -> date | None:
    if today is None:
        return None
    try:
        return datetime.strptime(today, "%Y-%m-%d").date()
    except ValueError as e:
        raise typer.BadParameter(f"Expected YYYY-MM-DD, got '{today}'") from e


@app.command()
def send_proposal(
    to: str | None = typer.Option(None, "--to", help="Recipient (default: NOTIFY_RECIPIENT)"),
    today: str | None = typer.Option(None, "--today", help="Pretend today is YYYY-MM-DD"),
) -> None:
    """Send the 'proposed plan' digest now."""
    _setup_logging()
    if not send_weekly_proposal(_open_store(), SmtpMailer(settings), to or settings.recipient, _parse_today(today)):
        console.print("[red]Error:[/red] proposal email was not sent (see log)", style="bold red")
        raise typer.Exit(code=1)
    console.print("[green]Proposal email sent[/green]")


@app.command()
def send_final(
    to: str | None = typer.Option(None, "--to", help="Recipient (default: NOTIFY_RECIPIENT)"),
    today: str | None = typer.Option(None, "--today", help="Pretend today is YYYY-MM-DD"),
) -> None:
    """Send the 'final plan' digest now."""
    _setup_logging()
    if not send_final_plan(_open_store(), SmtpMailer(settings), to or settings.recipient, _parse_today(today)):
        console.print("[red]Error:[/red] final-plan email was not sent (see log)", style="bold red")
        raise typer.Exit(code=1)
    console.print("[green]Final-plan email sent[/green]")


if __name__ == "__main__":
    app()
