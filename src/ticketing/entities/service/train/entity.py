"""Entity: Train."""

from pydantic import Field

from src.ticketing.entities.core._base import BookableEntity, EntityKind
from src.ticketing.entities.core._types import LenientStr


class Train(BookableEntity):
    """Train entity holding the passengers booked on it.

    Stored under the ``trainId`` key; every other field is shared with Vehicle.
    """

    id: LenientStr = Field(default="", alias="trainId", description="Train identifier")


TRAIN = EntityKind(name="train", id_key="trainId", model=Train, default_file="trains.json")
