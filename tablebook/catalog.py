from dataclasses import dataclass
from datetime import date
from functools import cached_property

from .domain import DinnerRound, MealPeriod, SlotKey, Table
from .errors import InvalidSlot


@dataclass(frozen=True)
class SlotCatalog:
    lunch_slots: tuple[str, ...]
    dinner_rounds: tuple[DinnerRound, ...]

    def time_identifiers(self, meal: MealPeriod) -> tuple[str, ...]:
        if meal is MealPeriod.LUNCH:
            return self.lunch_slots
        return tuple(r.id for r in self.dinner_rounds)

    def contains(self, meal: MealPeriod, time_identifier: str) -> bool:
        return time_identifier in self.time_identifiers(meal)


@dataclass(frozen=True)
class Catalog:
    """Tables and slot definitions, built once at startup and shared read-only."""
    tables: tuple[Table, ...]
    slots: SlotCatalog

    @cached_property
    def _by_id(self) -> dict[int, Table]:
        return {t.id: t for t in self.tables}

    def table(self, table_id: int) -> Table | None:
        return self._by_id.get(table_id)

    @property
    def max_capacity(self) -> int:
        return max(t.capacity for t in self.tables)

    def slot_key(self, day: date, meal: MealPeriod | str, time_identifier: str) -> SlotKey:
        """Builds a SlotKey, rejecting anything outside the catalog."""
        try:
            meal = MealPeriod(meal)
        except ValueError:
            raise InvalidSlot(f"Unknown meal period {meal!r}.") from None
        if not self.slots.contains(meal, time_identifier):
            raise InvalidSlot(f"Invalid {meal.value} timeSlot {time_identifier!r}.")
        return SlotKey(date=day, meal_period=meal, time_identifier=time_identifier)

    def require_slot(self, slot_key: SlotKey) -> None:
        if not self.slots.contains(slot_key.meal_period, slot_key.time_identifier):
            raise InvalidSlot(
                f"Invalid {slot_key.meal_period.value} timeSlot {slot_key.time_identifier!r}."
            )

    def describe(self) -> dict:
        return {
            "lunchSlots": list(self.slots.lunch_slots),
            "dinnerRounds": [{"id": r.id, "label": r.label} for r in self.slots.dinner_rounds],
        }


def build_catalog(config) -> Catalog:
    """Creates the catalog from a Flask config mapping (or any dict)."""
    capacities = list(config["TABLE_CAPACITIES"])
    if not capacities:
        raise ValueError("TABLE_CAPACITIES must list at least one table.")
    if any(c <= 0 for c in capacities):
        raise ValueError("Table capacities must be positive.")

    lunch = tuple(config["LUNCH_SLOTS"])
    dinner = tuple(DinnerRound(id=rid, label=label) for rid, label in config["DINNER_ROUNDS"])
    if not lunch or not dinner:
        raise ValueError("LUNCH_SLOTS and DINNER_ROUNDS must not be empty.")

    tables = tuple(Table(id=i + 1, capacity=c) for i, c in enumerate(capacities))
    return Catalog(tables=tables, slots=SlotCatalog(lunch_slots=lunch, dinner_rounds=dinner))
