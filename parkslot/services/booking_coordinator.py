# parkslot/services/booking_coordinator.py
"""
Booking Coordinator: owns the reservation lifecycle.

    request ──► pending ──► confirmed ──► cancelled
                   │
                   ├──► cancelled
                   └──► expired   (late confirm, or the expiry sweep)

Rejected requests never reach pending: nothing is written and the caller gets
the mismatch explanation instead.

Every read-then-write of slot status runs inside an area section: the
per-area threading lock is held, the session's identity map is expired so
state is re-read, and the area row is selected FOR UPDATE (PostgreSQL only;
SQLite ignores it) so several worker processes serialize too.
"""

import threading
from collections import defaultdict
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional
from sqlalchemy.orm import Session
from parkslot.config import settings
from parkslot.exceptions import NotFoundError, InvalidStateError, HoldExpiredError
from parkslot.models.booking import Booking
from parkslot.models.slot import ParkingSlot
from parkslot.models.enums import BookingState, ACTIVE_BOOKING_STATES
from parkslot.services.compatibility import to_vehicle_class
from parkslot.services.inventory_store import get_area, mark_held, mark_occupied, mark_free
from parkslot.services.mismatch_resolver import Mismatch, explain
from parkslot.services.slot_policy import select_slot
from parkslot.services.vehicle_service import get_owned_vehicle
from parkslot.utils.logger import get_logger

logger = get_logger(__name__)

_NOOP_CANCEL_STATES = (BookingState.CANCELLED, BookingState.EXPIRED, BookingState.REJECTED)


class AreaLockRegistry:
    """One mutex per parking area, created on first use."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[int, threading.Lock] = {}

    def lock_for(self, area_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(area_id)
            if lock is None:
                lock = self._locks[area_id] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, area_id: int):
        with self.lock_for(area_id):
            yield


@dataclass
class BookingResult:
    status: BookingState
    booking: Optional[Booking] = None
    mismatch: Optional[Mismatch] = None


class BookingCoordinator:
    def __init__(self, hold_ttl: timedelta, clock: Callable[[], datetime] = datetime.utcnow,
                 locks: AreaLockRegistry = None):
        self.hold_ttl = hold_ttl
        self._clock = clock
        self._locks = locks or AreaLockRegistry()

    # ── Helpers ───────────────────────────────────────────────────────────

    @contextmanager
    def _area_section(self, db: Session, area_id: int):
        with self._locks.hold(area_id):
            db.expire_all()
            try:
                get_area(db, area_id, for_update=True)
                yield
            except Exception:
                db.rollback()
                raise

    @staticmethod
    def _area_of(db: Session, booking_id: int) -> int:
        area_id = (
            db.query(ParkingSlot.area_id)
            .join(Booking, Booking.slot_id == ParkingSlot.id)
            .filter(Booking.id == booking_id)
            .scalar()
        )
        if area_id is None:
            raise NotFoundError(f"Booking {booking_id} not found")
        return area_id

    @staticmethod
    def _get_booking(db: Session, booking_id: int) -> Booking:
        booking = db.query(Booking).filter(Booking.id == booking_id).first()
        if not booking:
            raise NotFoundError(f"Booking {booking_id} not found")
        return booking

    def _expire(self, db: Session, booking: Booking, now: datetime):
        mark_free(db, booking.slot_id)
        booking.state = BookingState.EXPIRED
        booking.hold_expires_at = None
        booking.updated_at = now
        logger.info(f"[Expiry] Booking {booking.id} expired — slot {booking.slot_id} released")

    # ── Operations ────────────────────────────────────────────────────────

    def request_booking(self, db: Session, vehicle_id: int, area_id: int,
                        caller_id: Optional[str] = None) -> BookingResult:
        """
        Hold the lowest-id free compatible slot in the area for the vehicle.
        Returns a pending booking, or a rejected result with a mismatch
        explanation when nothing compatible is free.
        """
        vehicle = get_owned_vehicle(db, vehicle_id, caller_id)
        vehicle_class = to_vehicle_class(vehicle.vehicle_class)
        owner_id = vehicle.owner_id
        get_area(db, area_id)

        with self._area_section(db, area_id):
            slot = select_slot(db, area_id, vehicle_class)
            if slot is None:
                mismatch = explain(db, vehicle_class, area_id)
                db.rollback()
                logger.info(f"[Booking] Rejected vehicle={vehicle_id} ({vehicle_class.value}) area={area_id} — "
                            f"free: {[c.value for c in mismatch.available_classes]}")
                return BookingResult(status=BookingState.REJECTED, mismatch=mismatch)

            now = self._clock()
            mark_held(db, slot.id)
            booking = Booking(
                vehicle_id=vehicle_id,
                slot_id=slot.id,
                owner_id=owner_id,
                state=BookingState.PENDING,
                created_at=now,
                hold_expires_at=now + self.hold_ttl,
                updated_at=now,
            )
            db.add(booking)
            db.commit()
            logger.info(f"[Booking] {booking.id} pending — slot {slot.id} held for vehicle {vehicle_id} "
                        f"until {booking.hold_expires_at:%H:%M:%S}")

        return BookingResult(status=BookingState.PENDING, booking=booking)

    def confirm_booking(self, db: Session, booking_id: int) -> Booking:
        area_id = self._area_of(db, booking_id)
        with self._area_section(db, area_id):
            booking = self._get_booking(db, booking_id)
            now = self._clock()

            if booking.state == BookingState.PENDING and now > booking.hold_expires_at:
                self._expire(db, booking, now)
                db.commit()
                raise HoldExpiredError(f"Hold on booking {booking_id} expired, request a new booking")
            if booking.state == BookingState.EXPIRED:
                raise HoldExpiredError(f"Hold on booking {booking_id} expired, request a new booking")
            if booking.state != BookingState.PENDING:
                raise InvalidStateError(f"Booking {booking_id} is {booking.state.value}, expected pending")

            mark_occupied(db, booking.slot_id)
            booking.state = BookingState.CONFIRMED
            booking.hold_expires_at = None
            booking.updated_at = now
            db.commit()
            logger.info(f"[Booking] {booking_id} confirmed — slot {booking.slot_id} occupied")
        return booking

    def cancel_booking(self, db: Session, booking_id: int) -> Booking:
        """Release the slot of a pending/confirmed booking. Already-final bookings are left as they are."""
        area_id = self._area_of(db, booking_id)
        with self._area_section(db, area_id):
            booking = self._get_booking(db, booking_id)
            if booking.state in _NOOP_CANCEL_STATES:
                logger.debug(f"[Booking] Cancel of {booking_id} ignored — already {booking.state.value}")
                db.commit()   # releases the area row lock
                return booking

            now = self._clock()
            mark_free(db, booking.slot_id)
            booking.state = BookingState.CANCELLED
            booking.hold_expires_at = None
            booking.updated_at = now
            db.commit()
            logger.info(f"[Booking] {booking_id} cancelled — slot {booking.slot_id} released")
        return booking

    def get_booking_status(self, db: Session, booking_id: int) -> Booking:
        return self._get_booking(db, booking_id)

    def list_bookings(self, db: Session, owner_id: str, active_only: bool = False) -> list[Booking]:
        q = db.query(Booking).filter(Booking.owner_id == owner_id)
        if active_only:
            q = q.filter(Booking.state.in_(ACTIVE_BOOKING_STATES))
        return q.order_by(Booking.created_at.desc(), Booking.id.desc()).all()

    def expire_stale_holds(self, db: Session) -> int:
        """
        Expiration sweep: every pending booking whose hold ran out becomes
        expired and its slot free. Areas are swept one at a time in id order,
        each under its lock, and each candidate is re-checked inside the lock.
        """
        now = self._clock()
        rows = (
            db.query(Booking.id, ParkingSlot.area_id)
            .join(ParkingSlot, Booking.slot_id == ParkingSlot.id)
            .filter(Booking.state == BookingState.PENDING, Booking.hold_expires_at < now)
            .all()
        )
        by_area = defaultdict(list)
        for booking_id, area_id in rows:
            by_area[area_id].append(booking_id)

        expired = 0
        for area_id in sorted(by_area):
            with self._area_section(db, area_id):
                for booking_id in sorted(by_area[area_id]):
                    booking = db.get(Booking, booking_id)
                    if (booking is None or booking.state != BookingState.PENDING
                            or booking.hold_expires_at >= now):
                        continue
                    self._expire(db, booking, now)
                    expired += 1
                db.commit()

        if expired:
            logger.info(f"[Expiry] Sweep released {expired} stale hold(s)")
        return expired


coordinator = BookingCoordinator(hold_ttl=timedelta(seconds=settings.HOLD_TTL_SECONDS))


def get_coordinator() -> BookingCoordinator:
    """FastAPI dependency — the process-wide coordinator (override in tests)."""
    return coordinator
