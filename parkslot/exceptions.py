# parkslot/exceptions.py
"""
Engine error taxonomy.
Every error carries a stable code and the HTTP status main.py renders it with.
A rejected booking request is a normal result, not an exception.
"""


class EngineError(Exception):
    """Base class for all engine errors."""
    code = "ENGINE_ERROR"
    status_code = 500

    def __init__(self, message: str = None):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__


class InvalidVehicleClass(EngineError):
    """Unrecognized vehicle class."""
    code = "INVALID_VEHICLE_CLASS"
    status_code = 422


class NotFoundError(EngineError):
    """Vehicle, area or booking not found."""
    code = "NOT_FOUND"
    status_code = 404


class InvalidStateError(EngineError):
    """Booking is not in a state that allows this operation."""
    code = "INVALID_STATE"
    status_code = 409


class HoldExpiredError(EngineError):
    """Hold expired before confirmation."""
    code = "HOLD_EXPIRED"
    status_code = 410


class DuplicateVehicleError(EngineError):
    """Plate number already registered."""
    code = "DUPLICATE_VEHICLE"
    status_code = 409


class InvalidSlotStatus(EngineError):
    """Provisioned slots must be free or occupied; holds belong to bookings."""
    code = "INVALID_SLOT_STATUS"
    status_code = 422


class SlotTransitionError(EngineError):
    """Slot status transition attempted from an illegal state."""
    code = "SLOT_TRANSITION"
    status_code = 500
