# parkslot/schemas/booking.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from parkslot.models.enums import BookingState, SlotClass, VehicleClass


class BookingRequest(BaseModel):
    vehicle_id: int
    area_id: int


class HeldBookingOut(BaseModel):
    id: int
    vehicle_id: int
    slot_id: int
    hold_expires_at: Optional[datetime]

    class Config:
        from_attributes = True


class MismatchOut(BaseModel):
    requested_class: VehicleClass
    compatible_classes: list[SlotClass]
    available_classes: list[SlotClass]
    suggestion: str

    class Config:
        from_attributes = True


class BookingResultOut(BaseModel):
    status: BookingState              # pending | rejected
    booking: Optional[HeldBookingOut] = None
    mismatch: Optional[MismatchOut] = None

    class Config:
        from_attributes = True


class BookingStatusOut(BaseModel):
    booking_id: int
    state: BookingState
    slot_id: int
    hold_expires_at: Optional[datetime] = None


class BookingOut(BaseModel):
    id: int
    vehicle_id: int
    slot_id: int
    state: BookingState
    created_at: datetime
    hold_expires_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True
