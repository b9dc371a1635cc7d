class ReservationError(Exception):
    """Base class for every failure the reservation core reports.

    ``code`` is stable and machine-readable; ``status`` is the HTTP status the
    API layer answers with.
    """
    code = "RESERVATION_ERROR"
    status = 400


class AllocationError(ReservationError):
    status = 409


class InvalidSlot(AllocationError):
    code = "INVALID_SLOT"
    status = 400


class PartyTooLarge(AllocationError):
    code = "PARTY_TOO_LARGE"


class UnknownTable(AllocationError):
    code = "UNKNOWN_TABLE"
    status = 400


class CapacityExceeded(AllocationError):
    code = "CAPACITY_EXCEEDED"


class TableAlreadyReserved(AllocationError):
    code = "TABLE_ALREADY_RESERVED"


class NoTableAvailable(AllocationError):
    code = "NO_TABLE_AVAILABLE"


class NotFound(ReservationError):
    code = "NOT_FOUND"
    status = 404


class StoreUnavailable(ReservationError):
    code = "STORE_UNAVAILABLE"
    status = 503
