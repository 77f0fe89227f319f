"""Entity: Vehicle."""

from pydantic import Field

from src.ticketing.entities.core._base import BookableEntity, EntityKind
from src.ticketing.entities.core._types import LenientStr


class Vehicle(BookableEntity):
    """Generic vehicle entity, stored under the ``vehicleId`` key."""

    id: LenientStr = Field(
        default="", alias="vehicleId", description="Vehicle identifier"
    )


VEHICLE = EntityKind(
    name="vehicle", id_key="vehicleId", model=Vehicle, default_file="vehicles.json"
)
