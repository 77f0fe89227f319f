"""Base classes shared by the bookable entity kinds.

Train and Vehicle records only differ in their class name and in the JSON key
that carries their identity, so everything else lives here:

- BookableEntity: the seating-grid record both kinds inherit from
- EntityKind: descriptor binding a record class to its identity key and file
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from src.ticketing.entities.core._types import LenientInt, LenientStr
from src.ticketing.entities.core.user import User


def _as_grid(value: Any) -> list[list[Any]]:
    """Normalise a raw seating grid without dropping any cell.

    A row that is not a list becomes an empty row and a user that is not an
    object becomes a user with empty fields, so row and column positions
    always match the stored document.
    """
    if not isinstance(value, list):
        return []
    return [
        [user if isinstance(user, (dict, User)) else {} for user in row]
        if isinstance(row, list)
        else []
        for row in value
    ]


SeatGrid = Annotated[list[list[User]], BeforeValidator(_as_grid)]


class BookableEntity(BaseModel):
    """A bookable resource holding a sparse 2-D grid of seated users.

    Subclasses redeclare ``id`` with the JSON alias of their kind.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: LenientStr = Field(default="", description="Identity of the entity")
    name: LenientStr = Field(default="", description="Display name")
    source: LenientStr = Field(default="", description="Departure station")
    destination: LenientStr = Field(default="", description="Arrival station")
    departure_time: LenientInt = Field(
        default=0, alias="time", description="Unix seconds when the booking was made"
    )
    seats: SeatGrid = Field(
        default_factory=list, description="Rows of users, one inner list per row"
    )

    def occupants(self) -> list[User]:
        """All users seated on this entity, row by row."""
        return [user for row in self.seats for user in row]


EntityT = TypeVar("EntityT", bound=BookableEntity)


@dataclass(frozen=True)
class EntityKind(Generic[EntityT]):
    """Descriptor for one entity variant.

    Attributes:
        name: Short lowercase kind name, e.g. ``"train"``
        id_key: JSON key holding the identity field, e.g. ``"trainId"``
        model: Record class for this kind
        default_file: Backing file used when configuration does not name one
    """

    name: str
    id_key: str
    model: type[EntityT]
    default_file: str

    def __post_init__(self) -> None:
        alias = self.model.model_fields["id"].alias
        if alias != self.id_key:
            raise ValueError(
                f"{self.model.__name__}.id is aliased to {alias!r}, expected {self.id_key!r}"
            )

    @property
    def label(self) -> str:
        return self.name.capitalize()

    def create(
        self,
        entity_id: str,
        name: str,
        source: str,
        destination: str,
        departure_time: int,
        seats: list[list[User]],
    ) -> EntityT:
        return self.model(
            id=entity_id,
            name=name,
            source=source,
            destination=destination,
            departure_time=departure_time,
            seats=seats,
        )

    def encode(self, record: EntityT) -> dict[str, Any]:
        """Serialise a record to its JSON object, identity key first."""
        return {
            self.id_key: record.id,
            "name": record.name,
            "source": record.source,
            "destination": record.destination,
            "time": record.departure_time,
            "seats": [
                [user.model_dump(by_alias=True) for user in row] for row in record.seats
            ],
        }

    def decode(self, item: Any) -> EntityT:
        """Build a record from one element of the stored JSON array.

        Anything that is not a JSON object decodes to an all-default record.
        """
        if not isinstance(item, dict):
            item = {}
        return self.model.model_validate(item)
