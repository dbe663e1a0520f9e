# parkslot/services/compatibility.py
"""
Vehicle class → slot class compatibility table.
Loaded once at import; every VehicleClass must have an entry.
"""

from parkslot.exceptions import InvalidVehicleClass
from parkslot.models.enums import VehicleClass, SlotClass

COMPATIBILITY_RULES = {
    VehicleClass.CAR:        frozenset({SlotClass.CAR}),
    VehicleClass.MOTORCYCLE: frozenset({SlotClass.MOTORCYCLE}),
    VehicleClass.BICYCLE:    frozenset({SlotClass.BIKE}),
    VehicleClass.EBIKE:      frozenset({SlotClass.BIKE}),
}

_missing = set(VehicleClass) - set(COMPATIBILITY_RULES)
if _missing:
    raise RuntimeError(f"Compatibility table incomplete, missing: {sorted(m.value for m in _missing)}")


def to_vehicle_class(value) -> VehicleClass:
    """Coerce a VehicleClass or its string value; anything else is InvalidVehicleClass."""
    if isinstance(value, VehicleClass):
        return value
    try:
        return VehicleClass(str(value).strip().lower())
    except ValueError:
        raise InvalidVehicleClass(f"Unknown vehicle class: {value!r}") from None


def compatible_slot_classes(vehicle_class) -> frozenset:
    return COMPATIBILITY_RULES[to_vehicle_class(vehicle_class)]


def is_compatible(vehicle_class, slot_class) -> bool:
    return SlotClass(slot_class) in compatible_slot_classes(vehicle_class)
