# parkslot/models/area.py
"""
Parking areas table.
Each area owns an ordered list of slots; slot id order is the physical layout order.
Rows are created by the provisioning feed and never deleted by the engine.
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from parkslot.database import Base


class ParkingArea(Base):
    __tablename__ = "parking_areas"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False, unique=True, index=True)
    location = Column(String(300))
    created_at = Column(DateTime)

    slots = relationship("ParkingSlot", back_populates="area", order_by="ParkingSlot.id")

    def __repr__(self):
        return f"<ParkingArea {self.id} name={self.name}>"
