from datetime import date
from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator

from .domain import CustomerInfo, MealPeriod


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class SlotQuery(BaseModel):
    """Query string of /availability and /table-status."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    day: date = Field(..., alias="date")
    meal_type: MealPeriod = Field(..., validation_alias=AliasChoices("mealType", "meal"))
    time_slot: str = Field(..., alias="timeSlot", min_length=1)
    party_size: int | None = Field(None, alias="partySize", gt=0)

    @field_validator("party_size", mode="before")
    @classmethod
    def blank_is_none(cls, v):
        return _blank_to_none(v)


class ListReservationsQuery(BaseModel):
    day: date | None = Field(None, alias="date")

    @field_validator("day", mode="before")
    @classmethod
    def blank_is_none(cls, v):
        return _blank_to_none(v)


class CreateReservationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=32)
    party_size: int = Field(..., alias="partySize")
    day: date = Field(..., alias="date")
    meal_type: MealPeriod = Field(..., alias="mealType")
    time_slot: str = Field(..., alias="timeSlot", min_length=1)
    table_id: int | None = Field(None, alias="tableId")

    @field_validator("email", "phone", "table_id", mode="before")
    @classmethod
    def blank_is_none(cls, v):
        return _blank_to_none(v)

    def customer(self) -> CustomerInfo:
        return CustomerInfo(
            name=self.name,
            email=self.email.lower() if self.email else None,
            phone=self.phone,
        )
