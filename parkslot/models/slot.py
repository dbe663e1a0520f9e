# parkslot/models/slot.py
"""
Parking slots table.
status is only ever changed by booking transitions (see booking_coordinator),
always under the owning area's lock.
"""

from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from parkslot.database import Base
from parkslot.models.enums import SlotClass, SlotStatus, enum_column_type


class ParkingSlot(Base):
    __tablename__ = "parking_slots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    area_id = Column(Integer, ForeignKey("parking_areas.id"), nullable=False, index=True)
    label = Column(String(50), nullable=False)       # spot number painted on the ground, e.g. A-01
    section = Column(String(100))
    slot_class = Column(enum_column_type(SlotClass), nullable=False, index=True)
    status = Column(enum_column_type(SlotStatus), nullable=False, default=SlotStatus.FREE, index=True)

    area = relationship("ParkingArea", back_populates="slots")

    def __repr__(self):
        return f"<ParkingSlot {self.id} area={self.area_id} class={self.slot_class} status={self.status}>"
