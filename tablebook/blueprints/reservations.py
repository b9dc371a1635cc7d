from flask import Blueprint, request, jsonify
from pydantic import ValidationError
from ..domain import Reservation, Table
from ..extensions import get_catalog, get_store
from ..http import jerror
from ..schemas import CreateReservationRequest, ListReservationsQuery, SlotQuery
from ..utils.time import api_iso_z

bp = Blueprint("reservations", __name__)


def _table_json(t: Table) -> dict:
    return {"id": t.id, "capacity": t.capacity}


def _reservation_json(r: Reservation) -> dict:
    return {
        "id": r.id,
        "name": r.customer_name,
        "email": r.email,
        "phone": r.phone,
        "partySize": r.party_size,
        "date": r.slot_key.date.isoformat(),
        "mealType": r.slot_key.meal_period.value,
        "timeSlot": r.slot_key.time_identifier,
        "tableId": r.table_id,
        "createdAt": api_iso_z(r.created_at),
    }


def _validation_error(e: ValidationError):
    return jerror(422, "VALIDATION_ERROR", "Invalid input.", details=e.errors(include_url=False, include_context=False))


def _slot_query():
    """Parses the slot query string; returns (query, slot_key)."""
    query = SlotQuery.model_validate(request.args.to_dict())
    return query, get_catalog().slot_key(query.day, query.meal_type, query.time_slot)


@bp.get("/config")
def config():
    catalog = get_catalog()
    return jsonify(
        status="ok",
        totalTables=len(catalog.tables),
        tables=[_table_json(t) for t in catalog.tables],
        **catalog.describe(),
    )


@bp.get("/tables")
def tables():
    return jsonify(tables=[_table_json(t) for t in get_catalog().tables])


@bp.get("/availability")
def availability():
    try:
        query, slot_key = _slot_query()
    except ValidationError as e:
        return _validation_error(e)

    free = get_store().availability(slot_key, query.party_size)
    return jsonify(
        freeTables=[_table_json(t) for t in free],
        count=len(free),
        totalTables=len(get_catalog().tables),
    )


@bp.get("/table-status")
def table_status():
    try:
        _, slot_key = _slot_query()
    except ValidationError as e:
        return _validation_error(e)

    rows = get_store().table_status(slot_key)
    return jsonify(tables=[
        {"tableId": s.table_id, "capacity": s.capacity, "reservedSeats": s.reserved_seats}
        for s in rows
    ])


@bp.post("/reservations")
def create_reservation():
    payload = request.get_json(silent=True)
    if not payload:
        return jerror(400, "INVALID_PAYLOAD", "Missing or invalid JSON payload.")

    try:
        data = CreateReservationRequest.model_validate(payload)
    except ValidationError as e:
        return _validation_error(e)

    slot_key = get_catalog().slot_key(data.day, data.meal_type, data.time_slot)
    res = get_store().create_reservation(slot_key, data.party_size, data.customer(), data.table_id)
    return jsonify(success=True, reservation=_reservation_json(res)), 201


@bp.get("/reservations")
def list_reservations():
    """
    Lists reservations, optionally for a single day.
    Query: ?date=YYYY-MM-DD
    """
    try:
        query = ListReservationsQuery.model_validate(request.args.to_dict())
    except ValidationError as e:
        return _validation_error(e)

    rows = get_store().list_reservations(query.day)
    return jsonify(reservations=[_reservation_json(r) for r in rows])


@bp.delete("/reservations/<int:reservation_id>")
def cancel_reservation(reservation_id: int):
    get_store().cancel_reservation(reservation_id)
    return jsonify(success=True, deletedId=reservation_id)
