# parkslot/routers/vehicles.py
"""Vehicle registry for the calling account."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from parkslot.database import get_db
from parkslot.dependencies import get_caller_id
from parkslot.schemas.vehicle import VehicleCreate, VehicleOut
from parkslot.services import vehicle_service

router = APIRouter()


@router.get("/vehicles", response_model=list[VehicleOut], summary="List the caller's vehicles")
def list_vehicles(caller_id: str = Depends(get_caller_id), db: Session = Depends(get_db)):
    return vehicle_service.list_vehicles(db, caller_id)


@router.post("/vehicles", response_model=VehicleOut, status_code=201, summary="Register a vehicle")
def register_vehicle(body: VehicleCreate, caller_id: str = Depends(get_caller_id),
                     db: Session = Depends(get_db)):
    return vehicle_service.register_vehicle(db, caller_id, body.plate_number, body.vehicle_class, body.brand)


@router.get("/vehicles/{vehicle_id}", response_model=VehicleOut, summary="Get one of the caller's vehicles")
def get_vehicle(vehicle_id: int, caller_id: str = Depends(get_caller_id), db: Session = Depends(get_db)):
    return vehicle_service.get_owned_vehicle(db, vehicle_id, caller_id)
