"""User domain entity."""

from pydantic import BaseModel, ConfigDict, Field

from src.ticketing.entities.core._types import LenientStr


class User(BaseModel):
    """Passenger identity seated on a bookable entity.

    Users only exist inside a booking; there is no standalone registry.
    Field names are snake_case in Python and camelCase in the stored JSON.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    user_id: LenientStr = Field(
        default="", alias="userId", description="User identifier within a booking"
    )
    name: LenientStr = Field(default="", description="Passenger name")
    national_id: LenientStr = Field(
        default="", alias="aadharCard", description="National identity card number"
    )
