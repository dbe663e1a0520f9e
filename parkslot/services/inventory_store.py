# parkslot/services/inventory_store.py
"""
Inventory Store — parking areas, their slots, and slot status.

Status transitions here are guarded (they check the source state) but do not
arbitrate concurrent callers: the booking coordinator holds the area lock
around every read-then-write. Provisioning helpers stand in for the external
inventory feed; the engine itself never invents slots.
"""

from datetime import datetime
from typing import Iterable, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from parkslot.exceptions import NotFoundError, SlotTransitionError, InvalidSlotStatus
from parkslot.models.area import ParkingArea
from parkslot.models.slot import ParkingSlot
from parkslot.models.enums import SlotClass, SlotStatus
from parkslot.utils.logger import get_logger

logger = get_logger(__name__)

PROVISIONABLE_STATUSES = (SlotStatus.FREE, SlotStatus.OCCUPIED)

_ALLOWED_TRANSITIONS = {
    SlotStatus.HELD: {SlotStatus.FREE},
    SlotStatus.OCCUPIED: {SlotStatus.HELD},
    SlotStatus.FREE: {SlotStatus.HELD, SlotStatus.OCCUPIED},
}


# ── Provisioning feed ─────────────────────────────────────────────────────

def create_area(db: Session, name: str, location: Optional[str] = None) -> ParkingArea:
    area = ParkingArea(name=name, location=location, created_at=datetime.utcnow())
    db.add(area)
    db.commit()
    logger.info(f"[Inventory] Area {area.id} '{name}' provisioned")
    return area


def add_slots(db: Session, area_id: int, slots: Iterable[dict]) -> list[ParkingSlot]:
    """
    Append slots to an area in the given order. Each item needs label and
    slot_class; section and status are optional (status defaults to free).
    A feed may report free or occupied slots; held is reserved for bookings.
    """
    get_area(db, area_id)
    items = list(slots)
    for item in items:
        if SlotStatus(item.get("status", SlotStatus.FREE)) not in PROVISIONABLE_STATUSES:
            raise InvalidSlotStatus(f"Slot {item['label']!r}: status must be free or occupied")
    created = []
    for item in items:
        slot = ParkingSlot(
            area_id=area_id,
            label=item["label"],
            section=item.get("section"),
            slot_class=SlotClass(item["slot_class"]),
            status=SlotStatus(item.get("status", SlotStatus.FREE)),
        )
        db.add(slot)
        created.append(slot)
    db.commit()
    logger.info(f"[Inventory] Area {area_id}: {len(created)} slot(s) added")
    return created


# ── Reads ─────────────────────────────────────────────────────────────────

def get_area(db: Session, area_id: int, for_update: bool = False) -> ParkingArea:
    q = db.query(ParkingArea).filter(ParkingArea.id == area_id)
    if for_update:
        q = q.with_for_update()
    area = q.first()
    if not area:
        raise NotFoundError(f"Parking area {area_id} not found")
    return area


def list_areas(db: Session) -> list[ParkingArea]:
    return db.query(ParkingArea).order_by(ParkingArea.name).all()


def get_slot(db: Session, slot_id: int) -> ParkingSlot:
    slot = db.query(ParkingSlot).filter(ParkingSlot.id == slot_id).first()
    if not slot:
        raise NotFoundError(f"Parking slot {slot_id} not found")
    return slot


def list_slots(db: Session, area_id: int) -> list[ParkingSlot]:
    return db.query(ParkingSlot).filter(ParkingSlot.area_id == area_id).order_by(ParkingSlot.id).all()


def list_free_slots(db: Session, area_id: int, slot_classes: Iterable[SlotClass]) -> list[ParkingSlot]:
    """Free slots of the given classes, lowest id first."""
    classes = [SlotClass(c) for c in slot_classes]
    if not classes:
        return []
    return (
        db.query(ParkingSlot)
        .filter(
            ParkingSlot.area_id == area_id,
            ParkingSlot.status == SlotStatus.FREE,
            ParkingSlot.slot_class.in_(classes),
        )
        .order_by(ParkingSlot.id)
        .all()
    )


def free_slot_classes(db: Session, area_id: int) -> set[SlotClass]:
    """Slot classes that currently have at least one free slot in the area."""
    rows = (
        db.query(ParkingSlot.slot_class)
        .filter(ParkingSlot.area_id == area_id, ParkingSlot.status == SlotStatus.FREE)
        .distinct()
        .all()
    )
    return {SlotClass(r[0]) for r in rows}


def class_availability(db: Session, area_id: int) -> dict[SlotClass, dict]:
    """Per slot class: total, free, held and occupied counts (dashboard indicators)."""
    rows = (
        db.query(ParkingSlot.slot_class, ParkingSlot.status, func.count(ParkingSlot.id))
        .filter(ParkingSlot.area_id == area_id)
        .group_by(ParkingSlot.slot_class, ParkingSlot.status)
        .all()
    )
    summary = {}
    for slot_class, status, count in rows:
        entry = summary.setdefault(SlotClass(slot_class), {"total": 0, "free": 0, "held": 0, "occupied": 0})
        entry[SlotStatus(status).value] += count
        entry["total"] += count
    return summary


# ── Status transitions ────────────────────────────────────────────────────

def _transition(db: Session, slot_id: int, target: SlotStatus) -> ParkingSlot:
    slot = get_slot(db, slot_id)
    if slot.status not in _ALLOWED_TRANSITIONS[target]:
        logger.error(f"[Inventory] Illegal transition slot={slot_id} {slot.status.value} → {target.value}")
        raise SlotTransitionError(f"Slot {slot_id} cannot go from {slot.status.value} to {target.value}")
    slot.status = target
    db.flush()
    return slot


def mark_held(db: Session, slot_id: int) -> ParkingSlot:
    return _transition(db, slot_id, SlotStatus.HELD)


def mark_occupied(db: Session, slot_id: int) -> ParkingSlot:
    return _transition(db, slot_id, SlotStatus.OCCUPIED)


def mark_free(db: Session, slot_id: int) -> ParkingSlot:
    return _transition(db, slot_id, SlotStatus.FREE)
