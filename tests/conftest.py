# tests/conftest.py
"""Shared fixtures: a throwaway SQLite database, a controllable clock, and inventory builders."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import datetime, timedelta
from sqlalchemy.orm import sessionmaker
from parkslot.database import build_engine, create_tables
from parkslot.services import inventory_store, vehicle_service
from parkslot.services.booking_coordinator import BookingCoordinator

HOLD_TTL = timedelta(minutes=5)


class FakeClock:
    def __init__(self, start=datetime(2026, 3, 2, 9, 0, 0)):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def engine(tmp_path):
    eng = build_engine(f"sqlite:///{tmp_path / 'parkslot-test.db'}")
    create_tables(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def coordinator(clock):
    return BookingCoordinator(hold_ttl=HOLD_TTL, clock=clock)


@pytest.fixture
def make_area(db):
    """make_area([("car", "free"), ("bike", "free")]) → area with slots in that order."""
    counter = {"n": 0}

    def _make(layout, name=None):
        counter["n"] += 1
        area = inventory_store.create_area(db, name or f"Area {counter['n']}", "Test campus")
        slots = inventory_store.add_slots(db, area.id, [
            {"label": f"S-{i:02d}", "slot_class": cls, "status": "free" if status == "held" else status}
            for i, (cls, status) in enumerate(layout, start=1)
        ])
        # holds only come from bookings, so apply them after provisioning
        for slot, (_, status) in zip(slots, layout):
            if status == "held":
                inventory_store.mark_held(db, slot.id)
        db.commit()
        return area
    return _make


@pytest.fixture
def make_vehicle(db):
    counter = {"n": 0}

    def _make(vehicle_class="car", owner_id="user-1"):
        counter["n"] += 1
        return vehicle_service.register_vehicle(db, owner_id, f"TST-{counter['n']:04d}", vehicle_class)
    return _make
