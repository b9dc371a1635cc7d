"""Behaviour shared by every ReservationStore implementation."""
from datetime import date, timedelta

import pytest

from conftest import DAY, guest
from tablebook.domain import CustomerInfo, MealPeriod, SlotKey, Table, TableStatus
from tablebook.errors import (
    InvalidSlot,
    NoTableAvailable,
    NotFound,
    TableAlreadyReserved,
    UnknownTable,
)


def test_scenario_best_fit_until_full(store, slot):
    first = store.create_reservation(slot, 3, guest("Ann One"))
    second = store.create_reservation(slot, 3, guest("Ben Two"))
    third = store.create_reservation(slot, 2, guest("Cat Three"))

    assert (first.table_id, second.table_id, third.table_id) == (2, 3, 1)
    with pytest.raises(NoTableAvailable):
        store.create_reservation(slot, 1, guest("Dan Four"))
    assert len(store.list_reservations(DAY)) == 3


def test_created_reservation_carries_request_fields(store, slot):
    res = store.create_reservation(slot, 4, guest("Ada Lovelace"))
    assert res.id > 0
    assert res.customer_name == "Ada Lovelace"
    assert res.email == "ada@example.com"
    assert res.phone == "555-0100"
    assert res.party_size == 4
    assert res.slot_key == slot
    assert res.table_id == 2
    assert res.created_at.tzinfo is not None


def test_round_trip_through_listing(store, slot):
    created = store.create_reservation(slot, 2, guest())
    listed = store.list_reservations(DAY)
    assert listed == [created]
    assert store.list_reservations(DAY) == listed


def test_requested_table_conflict(store, slot):
    store.create_reservation(slot, 2, guest(), requested_table_id=3)
    with pytest.raises(TableAlreadyReserved):
        store.create_reservation(slot, 2, guest("Bob Smith"), requested_table_id=3)
    with pytest.raises(UnknownTable):
        store.create_reservation(slot, 2, guest("Bob Smith"), requested_table_id=7)


def test_failed_create_leaves_no_trace(store, slot):
    store.create_reservation(slot, 10, guest())
    with pytest.raises(NoTableAvailable):
        store.create_reservation(slot, 10, guest("Bob Smith"))
    assert store.occupied_tables(slot) == frozenset({3})
    assert len(store.list_reservations()) == 1


def test_same_table_free_in_other_slots(store, slot):
    store.create_reservation(slot, 2, guest(), requested_table_id=1)
    other_round = SlotKey(DAY, MealPeriod.DINNER, "D2")
    other_day = SlotKey(DAY + timedelta(days=1), MealPeriod.DINNER, "D1")
    assert store.create_reservation(other_round, 2, guest(), requested_table_id=1).table_id == 1
    assert store.create_reservation(other_day, 2, guest(), requested_table_id=1).table_id == 1
    assert store.occupied_tables(slot) == frozenset({1})


def test_cancel_twice_reports_not_found(store, slot):
    res = store.create_reservation(slot, 2, guest())
    assert store.cancel_reservation(res.id) == res
    with pytest.raises(NotFound):
        store.cancel_reservation(res.id)


def test_cancel_unknown_id(store):
    with pytest.raises(NotFound):
        store.cancel_reservation(12345)


def test_cancel_frees_the_table(store, slot):
    res = store.create_reservation(slot, 3, guest())
    assert res.table_id == 2
    store.cancel_reservation(res.id)
    assert store.occupied_tables(slot) == frozenset()
    assert store.create_reservation(slot, 3, guest("Bob Smith")).table_id == 2


def test_availability_lists_free_tables(store, slot):
    store.create_reservation(slot, 3, guest())
    assert store.availability(slot) == [Table(1, 2), Table(3, 10)]
    assert store.availability(slot, party_size=3) == [Table(3, 10)]


def test_availability_rejects_out_of_catalog_slot(store):
    with pytest.raises(InvalidSlot):
        store.availability(SlotKey(DAY, MealPeriod.LUNCH, "D1"))


def test_table_status_sums_booked_seats(store, slot):
    store.create_reservation(slot, 3, guest())
    store.create_reservation(slot, 7, guest("Bob Smith"))
    assert store.table_status(slot) == [
        TableStatus(table_id=1, capacity=2, reserved_seats=0),
        TableStatus(table_id=2, capacity=4, reserved_seats=3),
        TableStatus(table_id=3, capacity=10, reserved_seats=7),
    ]


def test_listing_order(store):
    d1 = SlotKey(date(2024, 6, 2), MealPeriod.DINNER, "D1")
    d2 = SlotKey(date(2024, 6, 1), MealPeriod.DINNER, "D2")
    lunch = SlotKey(date(2024, 6, 1), MealPeriod.LUNCH, "11:30-12:30")

    a = store.create_reservation(d1, 2, guest())
    b = store.create_reservation(d2, 5, guest())
    c = store.create_reservation(d2, 2, guest())
    d = store.create_reservation(lunch, 2, guest())

    # "11:30-12:30" sorts before "D2" within the day
    assert [r.id for r in store.list_reservations()] == [d.id, c.id, b.id, a.id]
    assert [r.id for r in store.list_reservations(date(2024, 6, 1))] == [d.id, c.id, b.id]
    assert store.list_reservations(date(2024, 7, 1)) == []


@pytest.mark.parametrize("name", ["", "   ", None])
def test_customer_without_name_is_rejected(store, slot, name):
    with pytest.raises(ValueError):
        store.create_reservation(slot, 2, CustomerInfo(name=name))
    assert store.list_reservations() == []
    assert store.occupied_tables(slot) == frozenset()
