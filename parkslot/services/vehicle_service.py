# parkslot/services/vehicle_service.py
"""
Vehicle registry: the GetVehicle collaborator the coordinator depends on.
Used by booking_coordinator and the vehicles router.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from parkslot.exceptions import NotFoundError, DuplicateVehicleError
from parkslot.models.vehicle import Vehicle
from parkslot.services.compatibility import to_vehicle_class
from parkslot.utils.logger import get_logger

logger = get_logger(__name__)


def get_vehicle(db: Session, vehicle_id: int) -> Vehicle:
    """Find a vehicle by id. Raises NotFoundError if unknown."""
    vehicle = db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()
    if not vehicle:
        raise NotFoundError(f"Vehicle {vehicle_id} not found")
    return vehicle


def get_owned_vehicle(db: Session, vehicle_id: int, owner_id: Optional[str]) -> Vehicle:
    """Like get_vehicle, but a vehicle owned by someone else is reported as not found."""
    vehicle = get_vehicle(db, vehicle_id)
    if owner_id is not None and vehicle.owner_id != owner_id:
        raise NotFoundError(f"Vehicle {vehicle_id} not found or does not belong to user")
    return vehicle


def lookup_vehicle_by_plate(db: Session, plate_number: str):
    """Find a registered vehicle by plate number. Returns None if not found."""
    return db.query(Vehicle).filter(Vehicle.plate_number == plate_number).first()


def register_vehicle(db: Session, owner_id: str, plate_number: str, vehicle_class, brand: str = None) -> Vehicle:
    vclass = to_vehicle_class(vehicle_class)
    plate = plate_number.strip().upper()
    if lookup_vehicle_by_plate(db, plate):
        raise DuplicateVehicleError(f"Plate {plate} already registered")
    vehicle = Vehicle(
        owner_id=owner_id,
        plate_number=plate,
        vehicle_class=vclass,
        brand=brand,
        registered_at=datetime.utcnow(),
    )
    db.add(vehicle)
    try:
        db.commit()
    except IntegrityError:
        # lost the race to another registration of the same plate
        db.rollback()
        raise DuplicateVehicleError(f"Plate {plate} already registered") from None
    logger.info(f"[Vehicles] Registered {plate} ({vclass.value}) for owner {owner_id}")
    return vehicle


def list_vehicles(db: Session, owner_id: str) -> list[Vehicle]:
    return db.query(Vehicle).filter(Vehicle.owner_id == owner_id).order_by(Vehicle.id).all()
