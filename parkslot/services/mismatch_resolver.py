# parkslot/services/mismatch_resolver.py
"""
Mismatch Resolver: explains why a booking request found no slot.
Reports what the vehicle needs next to what the area has free right now,
so the client can show "this area currently has free bike slots only".
"""

from dataclasses import dataclass, field
from sqlalchemy.orm import Session
from parkslot.models.enums import VehicleClass, SlotClass
from parkslot.services.compatibility import compatible_slot_classes, to_vehicle_class
from parkslot.services.inventory_store import free_slot_classes

_CLASS_ORDER = [SlotClass.CAR, SlotClass.MOTORCYCLE, SlotClass.BIKE]


@dataclass
class Mismatch:
    requested_class: VehicleClass
    compatible_classes: list[SlotClass]
    available_classes: list[SlotClass] = field(default_factory=list)
    suggestion: str = ""


def _ordered(classes) -> list[SlotClass]:
    return [c for c in _CLASS_ORDER if c in classes]


def explain(db: Session, vehicle_class, area_id: int) -> Mismatch:
    requested = to_vehicle_class(vehicle_class)
    compatible = compatible_slot_classes(requested)
    available = _ordered(free_slot_classes(db, area_id))

    if not available:
        suggestion = "This area has no free slots right now. Try again later or choose another area."
    else:
        names = ", ".join(c.value for c in available)
        suggestion = (f"No compatible slot for {requested.value}; "
                      f"this area currently has free {names} slots only.")

    return Mismatch(
        requested_class=requested,
        compatible_classes=_ordered(compatible),
        available_classes=available,
        suggestion=suggestion,
    )
