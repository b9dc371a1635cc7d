"""
Reservation store interface.

Every implementation keeps the same contract: ``create_reservation`` and
``cancel_reservation`` run their read-decide-write sequence under the
per-slot lock, so two calls for the same slot never interleave while calls for
different slots proceed side by side.
"""
from abc import ABC, abstractmethod
from datetime import date

from ..allocation import free_tables
from ..catalog import Catalog
from ..domain import CustomerInfo, Reservation, SlotKey, Table, TableStatus
from .locks import SlotLocks


class ReservationStore(ABC):

    def __init__(self, catalog: Catalog, timeout: float = 5.0):
        self.catalog = catalog
        self.locks = SlotLocks(timeout)

    @abstractmethod
    def occupied_tables(self, slot_key: SlotKey) -> frozenset[int]:
        """Ids of tables with at least one committed reservation for ``slot_key``."""

    @abstractmethod
    def create_reservation(
        self,
        slot_key: SlotKey,
        party_size: int,
        customer: CustomerInfo,
        requested_table_id: int | None = None,
    ) -> Reservation:
        """Atomically allocates a table and records the reservation."""

    @abstractmethod
    def cancel_reservation(self, reservation_id: int) -> Reservation:
        """Deletes a reservation and returns it; raises NotFound if it is gone."""

    @abstractmethod
    def list_reservations(self, day: date | None = None) -> list[Reservation]:
        ...

    @abstractmethod
    def reserved_seats(self, slot_key: SlotKey) -> dict[int, int]:
        """Total party size booked per table id for ``slot_key``."""

    def availability(self, slot_key: SlotKey, party_size: int | None = None) -> list[Table]:
        self.catalog.require_slot(slot_key)
        return free_tables(self.catalog, self.occupied_tables(slot_key), party_size)

    def table_status(self, slot_key: SlotKey) -> list[TableStatus]:
        self.catalog.require_slot(slot_key)
        seats = self.reserved_seats(slot_key)
        return [
            TableStatus(table_id=t.id, capacity=t.capacity, reserved_seats=seats.get(t.id, 0))
            for t in self.catalog.tables
        ]
