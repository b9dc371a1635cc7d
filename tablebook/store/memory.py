import itertools
import logging
import threading
from datetime import date

from ..allocation import allocate
from ..domain import CustomerInfo, Reservation, SlotKey
from ..errors import AllocationError, NotFound
from ..utils.time import utc_now
from .base import ReservationStore

logger = logging.getLogger(__name__)


class MemoryStore(ReservationStore):
    """Process-local store. Used by tests and for running without a database."""

    def __init__(self, catalog, timeout: float = 5.0):
        super().__init__(catalog, timeout)
        self._rows: dict[int, Reservation] = {}
        self._ids = itertools.count(1)
        self._rows_lock = threading.Lock()

    def _rows_snapshot(self) -> list[Reservation]:
        with self._rows_lock:
            return list(self._rows.values())

    def _for_slot(self, slot_key: SlotKey) -> list[Reservation]:
        return [r for r in self._rows_snapshot() if r.slot_key == slot_key]

    def occupied_tables(self, slot_key):
        return frozenset(r.table_id for r in self._for_slot(slot_key))

    def reserved_seats(self, slot_key):
        seats: dict[int, int] = {}
        for r in self._for_slot(slot_key):
            seats[r.table_id] = seats.get(r.table_id, 0) + r.party_size
        return seats

    def create_reservation(self, slot_key, party_size, customer: CustomerInfo, requested_table_id=None):
        with self.locks.hold(slot_key):
            try:
                table = allocate(
                    self.catalog, slot_key, party_size, self.occupied_tables(slot_key), requested_table_id
                )
            except AllocationError as e:
                logger.info("Rejected reservation for %s: %s", slot_key, e.code)
                raise

            with self._rows_lock:
                reservation = Reservation(
                    id=next(self._ids),
                    customer_name=customer.name,
                    email=customer.email,
                    phone=customer.phone,
                    party_size=party_size,
                    slot_key=slot_key,
                    table_id=table.id,
                    created_at=utc_now(),
                )
                self._rows[reservation.id] = reservation

        logger.info("Reservation %s assigned table %s for %s", reservation.id, table.id, slot_key)
        return reservation

    def cancel_reservation(self, reservation_id):
        with self._rows_lock:
            existing = self._rows.get(reservation_id)
        if existing is None:
            raise NotFound(f"Reservation {reservation_id} not found.")

        with self.locks.hold(existing.slot_key):
            with self._rows_lock:
                removed = self._rows.pop(reservation_id, None)
        if removed is None:
            raise NotFound(f"Reservation {reservation_id} not found.")

        logger.info("Reservation %s cancelled, table %s freed", reservation_id, removed.table_id)
        return removed

    def list_reservations(self, day: date | None = None):
        rows = self._rows_snapshot()
        if day is None:
            return sorted(rows, key=lambda r: (r.slot_key.date, r.slot_key.time_identifier, r.table_id))
        rows = [r for r in rows if r.slot_key.date == day]
        return sorted(rows, key=lambda r: (r.slot_key.time_identifier, r.table_id))
