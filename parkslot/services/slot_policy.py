# parkslot/services/slot_policy.py
"""
Slot Assignment Policy: first fit by slot id among free compatible slots.
Callers that act on the result must hold the area lock.
"""

from typing import Optional
from sqlalchemy.orm import Session
from parkslot.models.slot import ParkingSlot
from parkslot.services.compatibility import compatible_slot_classes
from parkslot.services.inventory_store import list_free_slots


def select_slot(db: Session, area_id: int, vehicle_class) -> Optional[ParkingSlot]:
    candidates = list_free_slots(db, area_id, compatible_slot_classes(vehicle_class))
    return candidates[0] if candidates else None
