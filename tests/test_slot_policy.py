# tests/test_slot_policy.py
"""Unit tests for slot selection and the mismatch explanation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from parkslot.models.enums import SlotClass, VehicleClass
from parkslot.services.slot_policy import select_slot
from parkslot.services.mismatch_resolver import explain


class TestSelectSlot:
    def test_picks_lowest_id_compatible_free_slot(self, db, make_area):
        area = make_area([("car", "occupied"), ("bike", "free"), ("car", "free"), ("car", "free")])
        slot = select_slot(db, area.id, VehicleClass.CAR)
        assert slot.label == "S-03"

    def test_ebike_uses_bike_slots(self, db, make_area):
        area = make_area([("car", "free"), ("bike", "free")])
        assert select_slot(db, area.id, "ebike").slot_class == SlotClass.BIKE

    def test_none_when_no_compatible_slot(self, db, make_area):
        area = make_area([("car", "free"), ("motorcycle", "occupied")])
        assert select_slot(db, area.id, VehicleClass.MOTORCYCLE) is None


class TestExplain:
    def test_lists_free_incompatible_classes(self, db, make_area):
        area = make_area([("car", "occupied"), ("bike", "free"), ("motorcycle", "free")])
        mismatch = explain(db, "car", area.id)
        assert mismatch.requested_class == VehicleClass.CAR
        assert mismatch.compatible_classes == [SlotClass.CAR]
        assert mismatch.available_classes == [SlotClass.MOTORCYCLE, SlotClass.BIKE]
        assert "motorcycle, bike" in mismatch.suggestion

    def test_full_area(self, db, make_area):
        area = make_area([("car", "occupied"), ("bike", "held")])
        mismatch = explain(db, VehicleClass.BICYCLE, area.id)
        assert mismatch.available_classes == []
        assert "no free slots" in mismatch.suggestion
