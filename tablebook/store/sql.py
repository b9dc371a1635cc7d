import logging
from contextlib import contextmanager
from datetime import date

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..allocation import allocate
from ..domain import CustomerInfo, SlotKey
from ..errors import AllocationError, NotFound, StoreUnavailable
from ..extensions import db
from ..models import ReservationRecord
from ..utils.time import db_utc_naive, utc_now
from .base import ReservationStore

logger = logging.getLogger(__name__)


def _is_table_conflict(e: IntegrityError) -> bool:
    """True when ``e`` is the (slot, table) unique constraint, not some other data error."""
    message = str(e.orig)
    if "uq_reservation_slot_table" in message:
        return True
    # SQLite names the columns instead of the constraint
    return "UNIQUE constraint failed" in message and "reservations.table_id" in message


def _slot_filter(slot_key: SlotKey):
    return (
        ReservationRecord.date == slot_key.date,
        ReservationRecord.meal_period == slot_key.meal_period.value,
        ReservationRecord.time_identifier == slot_key.time_identifier,
    )


class SqlStore(ReservationStore):
    """Store backed by the Flask-SQLAlchemy session of the current app context.

    The per-slot lock serializes requests inside this process. The unique
    constraint on (slot, table) catches races with other processes; such a
    conflict rolls back and re-runs the allocation against fresh occupancy.
    """

    def __init__(self, catalog, timeout: float = 5.0, conflict_retries: int = 3):
        super().__init__(catalog, timeout)
        self.conflict_retries = max(conflict_retries, 1)

    @contextmanager
    def _unavailable_on_error(self):
        try:
            yield
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            logger.error("Reservation store error: %s", e)
            raise StoreUnavailable("Reservation store is unavailable.") from e

    @contextmanager
    def transaction(self):
        """Commits on normal exit, rolls back on any exception."""
        session = db.session
        try:
            yield session
            session.commit()
        except BaseException:
            session.rollback()
            raise

    def _find(self, reservation_id):
        return db.session.execute(
            select(ReservationRecord).where(ReservationRecord.id == reservation_id)
        ).scalar_one_or_none()

    def occupied_tables(self, slot_key):
        with self._unavailable_on_error():
            rows = db.session.execute(
                select(ReservationRecord.table_id).where(*_slot_filter(slot_key))
            ).scalars()
            return frozenset(rows)

    def reserved_seats(self, slot_key):
        with self._unavailable_on_error():
            rows = db.session.execute(
                select(ReservationRecord.table_id, func.sum(ReservationRecord.party_size))
                .where(*_slot_filter(slot_key))
                .group_by(ReservationRecord.table_id)
            ).all()
            return {table_id: int(seats) for table_id, seats in rows}

    def create_reservation(self, slot_key, party_size, customer: CustomerInfo, requested_table_id=None):
        with self.locks.hold(slot_key), self._unavailable_on_error():
            for attempt in range(1, self.conflict_retries + 1):
                try:
                    with self.transaction() as session:
                        occupied = self.occupied_tables(slot_key)
                        table = allocate(self.catalog, slot_key, party_size, occupied, requested_table_id)
                        row = ReservationRecord(
                            customer_name=customer.name,
                            email=customer.email,
                            phone=customer.phone,
                            party_size=party_size,
                            date=slot_key.date,
                            meal_period=slot_key.meal_period.value,
                            time_identifier=slot_key.time_identifier,
                            table_id=table.id,
                            created_at=db_utc_naive(utc_now()),
                        )
                        session.add(row)
                        session.flush()
                        reservation = row.to_reservation()
                except AllocationError as e:
                    logger.info("Rejected reservation for %s: %s", slot_key, e.code)
                    raise
                except IntegrityError as e:
                    if not _is_table_conflict(e):
                        logger.error("Rejected reservation for %s: %s", slot_key, e.orig)
                        raise
                    logger.warning(
                        "Table conflict for %s on attempt %d/%d, retrying",
                        slot_key, attempt, self.conflict_retries,
                    )
                    continue

                logger.info("Reservation %s assigned table %s for %s", reservation.id, table.id, slot_key)
                return reservation

        raise StoreUnavailable(f"Could not book {slot_key} after {self.conflict_retries} conflicting attempts.")

    def cancel_reservation(self, reservation_id):
        with self._unavailable_on_error():
            existing = self._find(reservation_id)
            if existing is None:
                raise NotFound(f"Reservation {reservation_id} not found.")

            # re-read under the slot lock, a concurrent cancel may have won
            with self.locks.hold(existing.slot_key), self.transaction():
                row = self._find(reservation_id)
                if row is None:
                    raise NotFound(f"Reservation {reservation_id} not found.")
                removed = row.to_reservation()
                db.session.execute(delete(ReservationRecord).where(ReservationRecord.id == reservation_id))

        logger.info("Reservation %s cancelled, table %s freed", reservation_id, removed.table_id)
        return removed

    def list_reservations(self, day: date | None = None):
        q = select(ReservationRecord)
        if day is None:
            q = q.order_by(
                ReservationRecord.date.asc(),
                ReservationRecord.time_identifier.asc(),
                ReservationRecord.table_id.asc(),
            )
        else:
            q = q.where(ReservationRecord.date == day).order_by(
                ReservationRecord.time_identifier.asc(),
                ReservationRecord.table_id.asc(),
            )
        with self._unavailable_on_error():
            return [row.to_reservation() for row in db.session.execute(q).scalars()]

    def clear(self) -> int:
        """Deletes every reservation; returns how many were removed."""
        with self._unavailable_on_error(), self.transaction() as session:
            return session.execute(delete(ReservationRecord)).rowcount
