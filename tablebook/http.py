from flask import jsonify

from .errors import ReservationError

def jerror(status: int, code: str, message: str, details=None):
    payload = {"code": code, "message": message}
    if details:
        payload["details"] = details
    return jsonify(payload), status

def reservation_error(e: ReservationError):
    return jerror(e.status, e.code, str(e))
