"""Shared utilities for CLI commands."""

from dataclasses import dataclass
from datetime import UTC, datetime

import typer
from rich.console import Console
from rich.table import Table

from src.ticketing.core.services import BookingOutcome, BookingResult, BookingService, SeatPosition
from src.ticketing.core.storage import get_record_store
from src.ticketing.entities import BookableEntity, EntityKind
from src.ticketing.runtime.config.config_data import ConfigData
from src.ticketing.runtime.context import get_config

# Initialize Rich console for colored output
console = Console()


@dataclass
class CliState:
    """Configuration resolved from the global CLI options."""

    config: ConfigData


def get_state(ctx: typer.Context) -> CliState:
    """Return the state set up by the root callback, or one built from defaults."""
    if isinstance(ctx.obj, CliState):
        return ctx.obj
    return CliState(config=get_config())


def get_booking_service(ctx: typer.Context, kind: EntityKind) -> BookingService:
    """Build a booking service over the configured store for ``kind``."""
    store = get_record_store(kind, config=get_state(ctx).config)
    return BookingService(store)


def report_cancel(result: BookingResult) -> None:
    """Print a cancel outcome; anything but a cancellation exits with code 1."""
    if result.outcome is BookingOutcome.CANCELLED:
        console.print(f"[green]✅ {result.message}[/green]")
        return

    if result.outcome is BookingOutcome.SAVE_FAILED:
        console.print(f"[red]❌ {result.message}[/red]")
    else:
        console.print(f"[yellow]{result.message}[/yellow]")
    raise typer.Exit(code=1)


def format_time(timestamp: int) -> str:
    if not timestamp:
        return "-"
    return datetime.fromtimestamp(timestamp, tz=UTC).strftime("%Y-%m-%d %H:%M:%S UTC")


def entities_table(kind: EntityKind, entities: list[BookableEntity]) -> Table:
    table = Table(title=f"{kind.label} bookings")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Source", style="blue")
    table.add_column("Destination", style="blue")
    table.add_column("Booked at", style="magenta")
    table.add_column("Passengers", style="yellow", justify="right")

    for entity in entities:
        table.add_row(
            entity.id,
            entity.name,
            entity.source,
            entity.destination,
            format_time(entity.departure_time),
            str(len(entity.occupants())),
        )
    return table


def seats_table(kind: EntityKind, entity: BookableEntity, seats: list[SeatPosition]) -> Table:
    table = Table(
        title=f"{kind.label} {entity.id}: {entity.name} ({entity.source} → {entity.destination})"
    )
    table.add_column("Row", style="cyan", justify="right")
    table.add_column("Col", style="cyan", justify="right")
    table.add_column("User ID", style="green")
    table.add_column("Name", style="white")
    table.add_column("National ID", style="magenta")

    for seat in seats:
        table.add_row(
            str(seat.row),
            str(seat.column),
            seat.user.user_id,
            seat.user.name,
            seat.user.national_id,
        )
    return table
