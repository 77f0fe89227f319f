"""Booking workflow shared by every entity kind.

One ``BookingService`` instance drives one record store. Booking appends a new
entity record; cancelling and lookups work on the first record whose identity
matches. Lookups and cancellations that find nothing are reported through a
``BookingResult`` rather than raised.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic

from loguru import logger

from src.ticketing.core.storage.record_store import RecordStore, StoreIOError
from src.ticketing.entities import User
from src.ticketing.entities.core._base import EntityT


class BookingOutcome(str, Enum):
    """Result of a cancel or lookup call."""

    CANCELLED = "cancelled"
    FOUND = "found"
    ENTITY_NOT_FOUND = "entity_not_found"
    USER_NOT_FOUND = "user_not_found"
    SAVE_FAILED = "save_failed"


@dataclass(frozen=True)
class SeatPosition:
    """A cell of an entity's seating grid occupied by a user."""

    row: int
    column: int
    user: User

    def describe(self) -> str:
        return (
            f"Booked seat - row: {self.row} col: {self.column}"
            f" | User ID: {self.user.user_id} | Name: {self.user.name}"
        )


@dataclass
class BookingResult(Generic[EntityT]):
    """Caller-visible outcome of a booking operation."""

    outcome: BookingOutcome
    message: str
    entity: EntityT | None = None
    seats: list[SeatPosition] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.outcome in (BookingOutcome.CANCELLED, BookingOutcome.FOUND)


def remove_user(
    seats: Sequence[Sequence[User]], user_id: str
) -> tuple[list[list[User]], int]:
    """Drop every occurrence of a user and prune rows left empty.

    Returns:
        The new seating grid and the number of seats freed
    """
    removed = 0
    remaining = []
    for row in seats:
        kept = [user for user in row if user.user_id != user_id]
        removed += len(row) - len(kept)
        if kept:
            remaining.append(kept)
    return remaining, removed


class BookingService(Generic[EntityT]):
    """Book, cancel and look up seats for one entity kind."""

    def __init__(self, store: RecordStore[EntityT], clock: Callable[[], float] = time.time):
        self._store = store
        self._kind = store.kind
        self._clock = clock

    @property
    def store(self) -> RecordStore[EntityT]:
        return self._store

    def list_entities(self) -> list[EntityT]:
        return self._store.load()

    def find_entity(self, entity_id: str) -> EntityT | None:
        """Return the first stored record with the given identity."""
        return _first_with_id(self._store.load(), entity_id)

    def find_seats(self, entity: EntityT, user_id: str) -> list[SeatPosition]:
        """Every grid cell of ``entity`` holding ``user_id``, in row-major order."""
        return [
            SeatPosition(row=r, column=c, user=user)
            for r, row in enumerate(entity.seats)
            for c, user in enumerate(row)
            if user.user_id == user_id
        ]

    def book(
        self, entity_id: str, user: User, name: str, source: str, destination: str
    ) -> EntityT:
        """Create a new entity record with ``user`` as its only occupant.

        Every call appends a fresh record, even when one with the same id is
        already stored.

        Raises:
            StoreIOError: If the record could not be persisted
        """
        entity = self._kind.create(
            entity_id=entity_id,
            name=name,
            source=source,
            destination=destination,
            departure_time=int(self._clock()),
            seats=[[user]],
        )
        self._store.append_and_save(entity)
        logger.info(
            "Booked {} {} for user {}", self._kind.name, entity_id, user.user_id
        )
        return entity

    def cancel_booking(self, entity_id: str, user_id: str) -> BookingResult[EntityT]:
        """Remove a user from every row of the first matching entity.

        The collection is only rewritten when at least one seat was freed. A
        failed write is reported as ``SAVE_FAILED``; callers must reload to see
        the stored state.

        Raises:
            StoreIOError: If the stored collection exists but cannot be read
        """
        with self._store.lock():
            records = self._store.load_for_update()
            entity = _first_with_id(records, entity_id)
            if entity is None:
                return self._entity_not_found(entity_id)

            remaining, removed = remove_user(entity.seats, user_id)
            if not removed:
                return self._user_not_found(entity, user_id)

            entity.seats = remaining
            try:
                self._store.save_all(records)
            except StoreIOError as e:
                logger.error(
                    "Failed to save cancellation for user {} on {} {}: {}",
                    user_id, self._kind.name, entity_id, e,
                )
                return BookingResult(
                    outcome=BookingOutcome.SAVE_FAILED,
                    message=f"Failed to save updated booking: {e}",
                    entity=None,
                )

        logger.info("Cancelled {} seat(s) for user {} on {} {}", removed, user_id, self._kind.name, entity_id)
        return BookingResult(
            outcome=BookingOutcome.CANCELLED,
            message=f"Cancelled booking for user {user_id} on {self._kind.name} {entity_id}",
            entity=entity,
        )

    def print_booking(self, entity_id: str, user_id: str) -> BookingResult[EntityT]:
        """Look up where a user is seated on an entity without changing anything."""
        entity = self.find_entity(entity_id)
        if entity is None:
            return self._entity_not_found(entity_id)

        seats = self.find_seats(entity, user_id)
        if not seats:
            return self._user_not_found(entity, user_id)

        return BookingResult(
            outcome=BookingOutcome.FOUND,
            message="\n".join(seat.describe() for seat in seats),
            entity=entity,
            seats=seats,
        )

    def _entity_not_found(self, entity_id: str) -> BookingResult[EntityT]:
        logger.info("{} {} not found in {}", self._kind.label, entity_id, self._store.location)
        return BookingResult(
            outcome=BookingOutcome.ENTITY_NOT_FOUND,
            message=f"{self._kind.label} with ID {entity_id} not found",
        )

    def _user_not_found(self, entity: EntityT, user_id: str) -> BookingResult[EntityT]:
        logger.info("User {} has no seat on {} {}", user_id, self._kind.name, entity.id)
        return BookingResult(
            outcome=BookingOutcome.USER_NOT_FOUND,
            message=f"No booking found for user {user_id} on {self._kind.name} {entity.id}",
            entity=entity,
        )


def _first_with_id(records: Sequence[EntityT], entity_id: str) -> EntityT | None:
    return next((record for record in records if record.id == entity_id), None)
