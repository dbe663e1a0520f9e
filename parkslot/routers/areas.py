# parkslot/routers/areas.py
"""
Parking areas: listing, provisioning feed, free-slot lookup and per-class indicators.
"""

from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from parkslot.database import get_db
from parkslot.schemas.area import AreaCreate, AreaOut, SlotCreate, SlotOut, ClassAvailabilityOut
from parkslot.services import inventory_store
from parkslot.services.compatibility import compatible_slot_classes
from parkslot.models.enums import SlotClass

router = APIRouter()


@router.get("/areas", response_model=list[AreaOut], summary="List parking areas")
def list_areas(db: Session = Depends(get_db)):
    return inventory_store.list_areas(db)


@router.post("/areas", response_model=AreaOut, status_code=201, summary="Provision a parking area")
def create_area(body: AreaCreate, db: Session = Depends(get_db)):
    return inventory_store.create_area(db, body.name, body.location)


@router.get("/areas/{area_id}", response_model=AreaOut, summary="Get one parking area")
def get_area(area_id: int, db: Session = Depends(get_db)):
    return inventory_store.get_area(db, area_id)


@router.post("/areas/{area_id}/slots", response_model=list[SlotOut], status_code=201,
             summary="Append slots to an area (layout order)")
def add_slots(area_id: int, body: list[SlotCreate], db: Session = Depends(get_db)):
    return inventory_store.add_slots(db, area_id, [s.model_dump() for s in body])


@router.get("/areas/{area_id}/slots", response_model=list[SlotOut], summary="Free slots in an area")
def list_free_slots(area_id: int, vehicle_class: Optional[str] = None, db: Session = Depends(get_db)):
    """Free slots, lowest id first. With vehicle_class, only slots that vehicle may use."""
    inventory_store.get_area(db, area_id)
    classes = compatible_slot_classes(vehicle_class) if vehicle_class else list(SlotClass)
    return inventory_store.list_free_slots(db, area_id, classes)


@router.get("/areas/{area_id}/availability", response_model=list[ClassAvailabilityOut],
            summary="Per slot class counters")
def get_availability(area_id: int, db: Session = Depends(get_db)):
    inventory_store.get_area(db, area_id)
    summary = inventory_store.class_availability(db, area_id)
    return [ClassAvailabilityOut(slot_class=c, **summary[c]) for c in SlotClass if c in summary]


@router.get("/areas/{area_id}/layout", response_model=list[SlotOut], summary="All slots in layout order")
def get_layout(area_id: int, db: Session = Depends(get_db)):
    inventory_store.get_area(db, area_id)
    return inventory_store.list_slots(db, area_id)
