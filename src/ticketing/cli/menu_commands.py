"""Interactive booking menu."""

import typer
from rich.panel import Panel
from rich.prompt import Prompt

from src.ticketing.core.services import BookingService
from src.ticketing.core.storage import StoreError
from src.ticketing.entities import ENTITY_KINDS, TRAIN, VEHICLE, EntityKind, User

from .utils import console, get_booking_service, report_cancel, seats_table

MENU_OPTIONS = {
    "1": "Book a train",
    "2": "Book a vehicle",
    "3": "Cancel a booking",
    "4": "Show a booking",
}


def prompt_user() -> User:
    """Collect the passenger's details."""
    user_id = Prompt.ask("[cyan]Enter User ID").strip()
    name = Prompt.ask("[cyan]Enter Name").strip()
    national_id = Prompt.ask("[cyan]Enter National ID Card Number").strip()
    return User(user_id=user_id, name=name, national_id=national_id)


def prompt_kind() -> EntityKind:
    choice = Prompt.ask("[cyan]Booking type", choices=sorted(ENTITY_KINDS), default=TRAIN.name)
    return ENTITY_KINDS[choice]


def run_book(service: BookingService, kind: EntityKind, user: User) -> None:
    entity_id = Prompt.ask(f"[cyan]Enter {kind.label} ID").strip()
    name = Prompt.ask(f"[cyan]Enter {kind.label} Name").strip()
    source = Prompt.ask("[cyan]Enter Source Station").strip()
    destination = Prompt.ask("[cyan]Enter Destination Station").strip()

    service.book(entity_id, user, name, source, destination)
    console.print(f"[green]✅ {kind.label} booked successfully![/green]")


def run_cancel(service: BookingService, kind: EntityKind, user: User) -> None:
    entity_id = Prompt.ask(f"[cyan]Enter {kind.label} ID").strip()
    report_cancel(service.cancel_booking(entity_id, user.user_id))


def run_show(service: BookingService, kind: EntityKind, user: User) -> None:
    entity_id = Prompt.ask(f"[cyan]Enter {kind.label} ID").strip()
    result = service.print_booking(entity_id, user.user_id)
    if result.ok:
        console.print(seats_table(kind, result.entity, result.seats))
    else:
        console.print(f"[yellow]{result.message}[/yellow]")


def menu(ctx: typer.Context) -> None:
    """Book, cancel or look up a seat through interactive prompts."""
    user = prompt_user()

    console.print(
        Panel(
            "\n".join(f"{key}. {label}" for key, label in MENU_OPTIONS.items()),
            title="Enter the option",
        )
    )
    option = Prompt.ask("[cyan]Option", choices=list(MENU_OPTIONS))

    if option == "1":
        kind, action = TRAIN, run_book
    elif option == "2":
        kind, action = VEHICLE, run_book
    elif option == "3":
        kind, action = prompt_kind(), run_cancel
    else:
        kind, action = prompt_kind(), run_show

    service = get_booking_service(ctx, kind)
    try:
        action(service, kind, user)
    except StoreError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1) from e
