# parkslot/models/vehicle.py
"""
Registered vehicles table.
A vehicle belongs to one owner (the caller's account) and is immutable once registered.
"""

from sqlalchemy import Column, Integer, String, DateTime
from parkslot.database import Base
from parkslot.models.enums import VehicleClass, enum_column_type


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(String(100), nullable=False, index=True)
    plate_number = Column(String(50), unique=True, nullable=False, index=True)
    vehicle_class = Column(enum_column_type(VehicleClass), nullable=False)
    brand = Column(String(100))
    registered_at = Column(DateTime)

    def __repr__(self):
        return f"<Vehicle {self.id} plate={self.plate_number} class={self.vehicle_class}>"
