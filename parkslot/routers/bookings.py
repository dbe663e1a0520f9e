# parkslot/routers/bookings.py
"""
Booking endpoints: request a hold, confirm it, cancel it, check status.
Engine errors propagate to the EngineError handler in main.py.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from parkslot.database import get_db
from parkslot.dependencies import get_caller_id, get_optional_caller_id
from parkslot.models.enums import BookingState
from parkslot.schemas.booking import (
    BookingRequest, BookingResultOut, BookingStatusOut, BookingOut,
)
from parkslot.services.booking_coordinator import BookingCoordinator, get_coordinator

router = APIRouter()


@router.post("/bookings", response_model=BookingResultOut, summary="Request a booking (places a timed hold)")
def request_booking(body: BookingRequest, response: Response,
                    caller_id: str = Depends(get_optional_caller_id),
                    db: Session = Depends(get_db),
                    coordinator: BookingCoordinator = Depends(get_coordinator)):
    """
    Holds the lowest-numbered free slot compatible with the vehicle.
    Returns 201 + pending booking, or 200 + rejected with a mismatch explanation.
    """
    result = coordinator.request_booking(db, body.vehicle_id, body.area_id, caller_id=caller_id)
    if result.status == BookingState.PENDING:
        response.status_code = status.HTTP_201_CREATED
    return BookingResultOut.model_validate(result)


@router.post("/bookings/{booking_id}/confirm", summary="Confirm a pending booking")
def confirm_booking(booking_id: int, db: Session = Depends(get_db),
                    coordinator: BookingCoordinator = Depends(get_coordinator)):
    booking = coordinator.confirm_booking(db, booking_id)
    return {"booking_id": booking.id, "status": booking.state.value, "slot_id": booking.slot_id}


@router.post("/bookings/{booking_id}/cancel", summary="Cancel a booking (idempotent)")
def cancel_booking(booking_id: int, db: Session = Depends(get_db),
                   coordinator: BookingCoordinator = Depends(get_coordinator)):
    """
    Releases the slot. Cancelling an already cancelled or expired booking is a no-op:
    status is always "cancelled" and state reports where the booking actually ended up.
    """
    booking = coordinator.cancel_booking(db, booking_id)
    return {"booking_id": booking.id, "status": BookingState.CANCELLED.value, "state": booking.state.value}


@router.get("/bookings/{booking_id}", response_model=BookingStatusOut, summary="Booking status")
def get_booking_status(booking_id: int, db: Session = Depends(get_db),
                       coordinator: BookingCoordinator = Depends(get_coordinator)):
    booking = coordinator.get_booking_status(db, booking_id)
    return BookingStatusOut(
        booking_id=booking.id,
        state=booking.state,
        slot_id=booking.slot_id,
        hold_expires_at=booking.hold_expires_at,
    )


@router.get("/bookings", response_model=list[BookingOut], summary="Caller's bookings")
def list_my_bookings(active_only: bool = False,
                     caller_id: str = Depends(get_caller_id),
                     db: Session = Depends(get_db),
                     coordinator: BookingCoordinator = Depends(get_coordinator)):
    return coordinator.list_bookings(db, caller_id, active_only=active_only)
