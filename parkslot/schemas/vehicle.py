# parkslot/schemas/vehicle.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from parkslot.models.enums import VehicleClass


class VehicleCreate(BaseModel):
    plate_number: str = Field(min_length=1, max_length=50)
    vehicle_class: str        # car | motorcycle | bicycle | ebike
    brand: Optional[str] = None


class VehicleOut(BaseModel):
    id: int
    owner_id: str
    plate_number: str
    vehicle_class: VehicleClass
    brand: Optional[str]
    registered_at: Optional[datetime]

    class Config:
        from_attributes = True
