# parkslot/schemas/area.py
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional
from parkslot.models.enums import SlotClass, SlotStatus


class AreaCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    location: Optional[str] = None


class AreaOut(BaseModel):
    id: int
    name: str
    location: Optional[str]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class SlotCreate(BaseModel):
    label: str = Field(min_length=1, max_length=50)
    slot_class: SlotClass
    section: Optional[str] = None
    status: SlotStatus = SlotStatus.FREE   # feed may report slots already occupied

    @field_validator("status")
    @classmethod
    def status_not_held(cls, v):
        if v == SlotStatus.HELD:
            raise ValueError("held is set by bookings only; provision slots as free or occupied")
        return v


class SlotOut(BaseModel):
    id: int
    area_id: int
    label: str
    section: Optional[str]
    slot_class: SlotClass
    status: SlotStatus

    class Config:
        from_attributes = True


class ClassAvailabilityOut(BaseModel):
    slot_class: SlotClass
    total: int
    free: int
    held: int
    occupied: int
