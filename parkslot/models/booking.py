# parkslot/models/booking.py
"""
Bookings table.
A pending booking holds its slot until hold_expires_at; a confirmed booking
occupies it. At most one pending/confirmed booking exists per slot.
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from parkslot.database import Base
from parkslot.models.enums import BookingState, enum_column_type


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False, index=True)
    slot_id = Column(Integer, ForeignKey("parking_slots.id"), nullable=False, index=True)
    owner_id = Column(String(100), index=True)
    state = Column(enum_column_type(BookingState), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False)
    hold_expires_at = Column(DateTime, index=True)   # only set while pending
    updated_at = Column(DateTime)

    slot = relationship("ParkingSlot")
    vehicle = relationship("Vehicle")

    def __repr__(self):
        return f"<Booking {self.id} slot={self.slot_id} state={self.state}>"
