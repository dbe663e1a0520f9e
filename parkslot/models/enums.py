# parkslot/models/enums.py
"""Vehicle/slot classes and lifecycle states shared by models, schemas and services."""

import enum

from sqlalchemy import Enum


class VehicleClass(str, enum.Enum):
    CAR = "car"
    MOTORCYCLE = "motorcycle"
    BICYCLE = "bicycle"
    EBIKE = "ebike"


class SlotClass(str, enum.Enum):
    CAR = "car"
    MOTORCYCLE = "motorcycle"
    BIKE = "bike"


class SlotStatus(str, enum.Enum):
    FREE = "free"
    HELD = "held"
    OCCUPIED = "occupied"


class BookingState(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    REJECTED = "rejected"


ACTIVE_BOOKING_STATES = (BookingState.PENDING, BookingState.CONFIRMED)


def enum_column_type(enum_cls):
    """Store enum values (not member names) in a plain VARCHAR column."""
    return Enum(
        enum_cls,
        native_enum=False,
        length=20,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )
