"""Table allocation policy.

Everything here is a pure function of its arguments: the caller supplies the
occupancy snapshot and is responsible for holding whatever lock makes that
snapshot current.
"""
from collections.abc import Collection

from .catalog import Catalog
from .domain import SlotKey, Table
from .errors import (
    CapacityExceeded,
    NoTableAvailable,
    PartyTooLarge,
    TableAlreadyReserved,
    UnknownTable,
)


def free_tables(catalog: Catalog, occupied: Collection[int], party_size: int | None = None) -> list[Table]:
    """Tables not in ``occupied``, optionally only those seating ``party_size``."""
    return [
        t for t in catalog.tables
        if t.id not in occupied and (party_size is None or t.capacity >= party_size)
    ]


def best_fit(candidates: list[Table]) -> Table | None:
    """Smallest table that qualifies; the lower id wins a tie."""
    if not candidates:
        return None
    return min(candidates, key=lambda t: (t.capacity, t.id))


def allocate(
    catalog: Catalog,
    slot_key: SlotKey,
    party_size: int,
    occupied: Collection[int],
    requested_table_id: int | None = None,
) -> Table:
    """Decides which table a party gets for ``slot_key``.

    With ``requested_table_id`` the caller's choice is validated (existence,
    capacity, then occupancy). Without it the best-fit free table is chosen.
    Raises an ``AllocationError`` subclass when the request cannot be met.
    """
    catalog.require_slot(slot_key)

    requested = None
    if requested_table_id is not None:
        requested = catalog.table(requested_table_id)
        if requested is None:
            raise UnknownTable(f"Invalid tableId {requested_table_id}.")

    largest = catalog.max_capacity
    if party_size < 1 or party_size > largest:
        raise PartyTooLarge(
            f"Party size must be between 1 and {largest}. Largest table capacity is {largest}."
        )

    if requested is not None:
        if requested.capacity < party_size:
            raise CapacityExceeded(
                f"Party size exceeds capacity of table {requested.id} ({requested.capacity})."
            )
        if requested.id in occupied:
            raise TableAlreadyReserved(f"Table {requested.id} is already reserved for this time slot.")
        return requested

    chosen = best_fit(free_tables(catalog, occupied, party_size))
    if chosen is None:
        raise NoTableAvailable("No table available for this party size at chosen time.")
    return chosen
