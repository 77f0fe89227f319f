"""Entities module with hybrid entity-centric structure.

Each bookable kind has its own package under ``service`` containing the record
class and its ``EntityKind`` descriptor. The shared base and the User record
live under ``core``.
"""

from .core._base import BookableEntity, EntityKind
from .core.user import User
from .service.train import TRAIN, Train
from .service.vehicle import VEHICLE, Vehicle

ENTITY_KINDS: dict[str, EntityKind] = {kind.name: kind for kind in (TRAIN, VEHICLE)}


def get_entity_kind(name: str) -> EntityKind:
    """Look up a registered entity kind by name (case-insensitive)."""
    try:
        return ENTITY_KINDS[name.lower()]
    except KeyError:
        known = ", ".join(sorted(ENTITY_KINDS))
        raise KeyError(f"Unknown entity kind {name!r}; expected one of: {known}") from None


__all__ = [
    "BookableEntity",
    "EntityKind",
    "ENTITY_KINDS",
    "TRAIN",
    "Train",
    "User",
    "VEHICLE",
    "Vehicle",
    "get_entity_kind",
]
