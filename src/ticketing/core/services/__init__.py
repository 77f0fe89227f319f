"""Core services."""

from .booking_service import (
    BookingOutcome,
    BookingResult,
    BookingService,
    SeatPosition,
    remove_user,
)

__all__ = [
    "BookingOutcome",
    "BookingResult",
    "BookingService",
    "SeatPosition",
    "remove_user",
]
