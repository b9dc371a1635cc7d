from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class MealPeriod(str, Enum):
    LUNCH = "lunch"
    DINNER = "dinner"


@dataclass(frozen=True)
class Table:
    id: int
    capacity: int


@dataclass(frozen=True)
class DinnerRound:
    id: str
    label: str


@dataclass(frozen=True)
class SlotKey:
    """A bookable window: (date, meal period, time identifier)."""
    date: date
    meal_period: MealPeriod
    time_identifier: str


@dataclass(frozen=True)
class CustomerInfo:
    name: str
    email: str | None = None
    phone: str | None = None

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Customer name must not be empty.")


@dataclass(frozen=True)
class Reservation:
    id: int
    customer_name: str
    email: str | None
    phone: str | None
    party_size: int
    slot_key: SlotKey
    table_id: int
    created_at: datetime


@dataclass(frozen=True)
class TableStatus:
    table_id: int
    capacity: int
    reserved_seats: int
