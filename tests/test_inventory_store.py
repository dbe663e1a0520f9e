# tests/test_inventory_store.py
"""Unit tests for the inventory store: ordering, filtering, guarded transitions."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from parkslot.exceptions import NotFoundError, SlotTransitionError, InvalidSlotStatus
from parkslot.models.enums import SlotClass, SlotStatus
from parkslot.services import inventory_store


class TestListFreeSlots:
    def test_filters_by_status_and_class_in_id_order(self, db, make_area):
        area = make_area([("bike", "free"), ("car", "occupied"), ("car", "free"),
                          ("car", "held"), ("car", "free")])
        slots = inventory_store.list_free_slots(db, area.id, {SlotClass.CAR})
        ids = [s.id for s in slots]
        assert ids == sorted(ids)
        assert [s.label for s in slots] == ["S-03", "S-05"]

    def test_multiple_classes(self, db, make_area):
        area = make_area([("bike", "free"), ("motorcycle", "free"), ("car", "free")])
        slots = inventory_store.list_free_slots(db, area.id, [SlotClass.BIKE, SlotClass.CAR])
        assert [s.slot_class for s in slots] == [SlotClass.BIKE, SlotClass.CAR]

    def test_empty_class_set_returns_nothing(self, db, make_area):
        area = make_area([("car", "free")])
        assert inventory_store.list_free_slots(db, area.id, []) == []

    def test_other_areas_not_included(self, db, make_area):
        a = make_area([("car", "free")])
        make_area([("car", "free")])
        assert len(inventory_store.list_free_slots(db, a.id, {SlotClass.CAR})) == 1


class TestTransitions:
    def test_hold_occupy_free_cycle(self, db, make_area):
        slot = make_area([("car", "free")]).slots[0]
        assert inventory_store.mark_held(db, slot.id).status == SlotStatus.HELD
        assert inventory_store.mark_occupied(db, slot.id).status == SlotStatus.OCCUPIED
        assert inventory_store.mark_free(db, slot.id).status == SlotStatus.FREE

    def test_cannot_hold_non_free_slot(self, db, make_area):
        slot = make_area([("car", "held")]).slots[0]
        with pytest.raises(SlotTransitionError):
            inventory_store.mark_held(db, slot.id)

    def test_cannot_occupy_free_slot(self, db, make_area):
        slot = make_area([("car", "free")]).slots[0]
        with pytest.raises(SlotTransitionError):
            inventory_store.mark_occupied(db, slot.id)

    def test_cannot_free_free_slot(self, db, make_area):
        slot = make_area([("car", "free")]).slots[0]
        with pytest.raises(SlotTransitionError):
            inventory_store.mark_free(db, slot.id)

    def test_unknown_slot(self, db):
        with pytest.raises(NotFoundError):
            inventory_store.mark_held(db, 9999)


class TestProvisioningAndCounters:
    def test_add_slots_to_unknown_area(self, db):
        with pytest.raises(NotFoundError):
            inventory_store.add_slots(db, 404, [{"label": "X", "slot_class": "car"}])

    def test_feed_cannot_provision_held_slots(self, db):
        area = inventory_store.create_area(db, "Feed lot")
        with pytest.raises(InvalidSlotStatus):
            inventory_store.add_slots(db, area.id, [
                {"label": "F-01", "slot_class": "car"},
                {"label": "F-02", "slot_class": "car", "status": "held"},
            ])
        assert inventory_store.list_slots(db, area.id) == []

    def test_slots_keep_layout_order(self, db, make_area):
        area = make_area([("bike", "free"), ("car", "free"), ("bike", "free")])
        assert [s.label for s in inventory_store.list_slots(db, area.id)] == ["S-01", "S-02", "S-03"]

    def test_class_availability(self, db, make_area):
        area = make_area([("car", "free"), ("car", "occupied"), ("car", "held"), ("bike", "free")])
        summary = inventory_store.class_availability(db, area.id)
        assert summary[SlotClass.CAR] == {"total": 3, "free": 1, "held": 1, "occupied": 1}
        assert summary[SlotClass.BIKE] == {"total": 1, "free": 1, "held": 0, "occupied": 0}
        assert SlotClass.MOTORCYCLE not in summary

    def test_free_slot_classes(self, db, make_area):
        area = make_area([("car", "occupied"), ("bike", "free"), ("bike", "free")])
        assert inventory_store.free_slot_classes(db, area.id) == {SlotClass.BIKE}
