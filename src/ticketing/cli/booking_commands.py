"""Booking CLI commands, one command group per entity kind."""

import typer

from src.ticketing.core.storage import StoreError
from src.ticketing.entities import EntityKind, User

from .utils import console, entities_table, get_booking_service, report_cancel, seats_table


def build_kind_app(kind: EntityKind) -> typer.Typer:
    """Create the ``book``/``cancel``/``show``/``list`` commands for one kind."""
    kind_app = typer.Typer(help=f"Manage {kind.name} bookings", no_args_is_help=True)

    @kind_app.command("book")
    def book(
        ctx: typer.Context,
        entity_id: str = typer.Argument(..., help=f"{kind.label} ID"),
        name: str = typer.Option(..., "--name", "-n", help=f"{kind.label} name"),
        source: str = typer.Option(..., "--source", "-s", help="Source station"),
        destination: str = typer.Option(..., "--destination", "-d", help="Destination station"),
        user_id: str = typer.Option(..., "--user-id", "-u", help="Passenger user ID"),
        user_name: str = typer.Option(..., "--user-name", help="Passenger name"),
        national_id: str = typer.Option(..., "--national-id", help="Passenger national ID card number"),
    ) -> None:
        """Book a seat for a passenger."""
        service = get_booking_service(ctx, kind)
        user = User(user_id=user_id, name=user_name, national_id=national_id)

        try:
            service.book(entity_id, user, name, source, destination)
        except StoreError as e:
            console.print(f"[red]❌ Failed to book {kind.name} {entity_id}: {e}[/red]")
            raise typer.Exit(code=1) from e

        console.print(f"[green]✅ {kind.label} booked successfully![/green]")

    @kind_app.command("cancel")
    def cancel(
        ctx: typer.Context,
        entity_id: str = typer.Argument(..., help=f"{kind.label} ID"),
        user_id: str = typer.Argument(..., help="Passenger user ID"),
    ) -> None:
        """Cancel every seat a passenger holds on a booking."""
        service = get_booking_service(ctx, kind)

        try:
            result = service.cancel_booking(entity_id, user_id)
        except StoreError as e:
            console.print(f"[red]❌ Failed to cancel booking: {e}[/red]")
            raise typer.Exit(code=1) from e

        report_cancel(result)

    @kind_app.command("show")
    def show(
        ctx: typer.Context,
        entity_id: str = typer.Argument(..., help=f"{kind.label} ID"),
        user_id: str = typer.Argument(..., help="Passenger user ID"),
    ) -> None:
        """Show where a passenger is seated."""
        service = get_booking_service(ctx, kind)

        try:
            result = service.print_booking(entity_id, user_id)
        except StoreError as e:
            console.print(f"[red]❌ Failed to read bookings: {e}[/red]")
            raise typer.Exit(code=1) from e

        if not result.ok:
            console.print(f"[yellow]{result.message}[/yellow]")
            return

        console.print(seats_table(kind, result.entity, result.seats))

    @kind_app.command("list")
    def list_bookings(
        ctx: typer.Context,
        strict: bool = typer.Option(
            False, "--strict", help="Fail on a corrupt record file instead of showing it as empty"
        ),
    ) -> None:
        """List every stored booking record."""
        service = get_booking_service(ctx, kind)

        try:
            entities = service.store.load_strict() if strict else service.list_entities()
        except StoreError as e:
            console.print(f"[red]❌ Failed to read {service.store.location}: {e}[/red]")
            raise typer.Exit(code=1) from e

        if not entities:
            console.print(f"[yellow]No {kind.name} bookings found in {service.store.location}[/yellow]")
            return

        console.print(entities_table(kind, entities))
        console.print(f"\n[green]Found {len(entities)} {kind.name} booking(s)[/green]")

    return kind_app
