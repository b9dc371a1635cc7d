
from sqlalchemy import Index, UniqueConstraint
from .domain import MealPeriod, Reservation, SlotKey
from .extensions import db
from .utils.time import to_utc

class ReservationRecord(db.Model):
    __tablename__ = "reservations"
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    customer_name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255))
    phone = db.Column(db.String(32))
    party_size = db.Column(db.Integer, nullable=False)
    date = db.Column(db.Date, nullable=False)
    meal_period = db.Column(db.String(16), nullable=False)
    time_identifier = db.Column(db.String(32), nullable=False)
    table_id = db.Column(db.Integer, nullable=False)
    # naive UTC
    created_at = db.Column(db.DateTime, nullable=False)

    __table_args__ = (
        Index("ix_reservations_slot", "date", "meal_period", "time_identifier"),
        UniqueConstraint(
            "date", "meal_period", "time_identifier", "table_id", name="uq_reservation_slot_table"
        ),
    )

    @property
    def slot_key(self) -> SlotKey:
        return SlotKey(
            date=self.date,
            meal_period=MealPeriod(self.meal_period),
            time_identifier=self.time_identifier,
        )

    def to_reservation(self) -> Reservation:
        return Reservation(
            id=self.id,
            customer_name=self.customer_name,
            email=self.email,
            phone=self.phone,
            party_size=self.party_size,
            slot_key=self.slot_key,
            table_id=self.table_id,
            created_at=to_utc(self.created_at),
        )
