# tests/test_compatibility.py
"""Unit tests for the vehicle/slot compatibility table."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from parkslot.exceptions import InvalidVehicleClass
from parkslot.models.enums import VehicleClass, SlotClass
from parkslot.services.compatibility import (
    COMPATIBILITY_RULES, compatible_slot_classes, is_compatible, to_vehicle_class,
)


class TestCompatibleSlotClasses:
    @pytest.mark.parametrize("vehicle_class, expected", [
        (VehicleClass.CAR, {SlotClass.CAR}),
        (VehicleClass.MOTORCYCLE, {SlotClass.MOTORCYCLE}),
        (VehicleClass.BICYCLE, {SlotClass.BIKE}),
        (VehicleClass.EBIKE, {SlotClass.BIKE}),
    ])
    def test_rule_table(self, vehicle_class, expected):
        assert compatible_slot_classes(vehicle_class) == expected

    def test_every_vehicle_class_has_a_rule(self):
        assert set(COMPATIBILITY_RULES) == set(VehicleClass)

    def test_accepts_string_values(self):
        assert compatible_slot_classes("ebike") == {SlotClass.BIKE}
        assert compatible_slot_classes(" Car ") == {SlotClass.CAR}

    @pytest.mark.parametrize("bad", ["truck", "", None, 42, SlotClass.BIKE])
    def test_unknown_class_rejected(self, bad):
        with pytest.raises(InvalidVehicleClass):
            compatible_slot_classes(bad)

    def test_result_is_immutable(self):
        with pytest.raises(AttributeError):
            compatible_slot_classes("car").add(SlotClass.BIKE)


class TestIsCompatible:
    def test_bicycle_fits_bike_slot_only(self):
        assert is_compatible("bicycle", "bike")
        assert not is_compatible("bicycle", "car")
        assert not is_compatible("bicycle", "motorcycle")

    def test_car_does_not_fit_motorcycle_slot(self):
        assert not is_compatible(VehicleClass.CAR, SlotClass.MOTORCYCLE)

    def test_to_vehicle_class_passes_members_through(self):
        assert to_vehicle_class(VehicleClass.MOTORCYCLE) is VehicleClass.MOTORCYCLE
