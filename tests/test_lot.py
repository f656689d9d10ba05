#!/usr/bin/env python3
"""
Tests for ParkingLot class.

Covers the lot's rules end to end:
1. Capacity - the lot never holds more vehicles than its capacity
2. Uniqueness - a parked plate checking in again is a no-op success
3. Check-out - removes the vehicle, charges it, and updates the account
4. Concurrency - parallel check-ins cannot overshoot capacity
"""

import threading
from datetime import datetime

import pytest
from parking import (
    Account,
    ManualClock,
    ParkingLot,
    Vehicle,
    VehicleType,
)

START = datetime(2024, 5, 1, 8, 0)


@pytest.fixture
def clock():
    return ManualClock(START)


def make_vehicle(plate, vehicle_type=VehicleType.CAR, card=None, clock=None):
    return Vehicle(plate, vehicle_type, card, clock() if clock else START)


# =============================================================================
# Construction
# =============================================================================


class TestParkingLotConstruction:
    """Tests for ParkingLot configuration."""

    def test_defaults(self):
        lot = ParkingLot()
        assert lot.capacity == 20
        assert lot.name == "AlkeParking"
        assert lot.occupancy == 0
        assert lot.show_account() == Account(0, 0)

    @pytest.mark.parametrize("capacity", [0, -1])
    def test_non_positive_capacity_rejected(self, capacity):
        with pytest.raises(ValueError, match="Capacity must be positive"):
            ParkingLot(capacity=capacity)

    @pytest.mark.parametrize("capacity", ["lots", 2.5, None, True])
    def test_non_integer_capacity_rejected(self, capacity):
        with pytest.raises(ValueError, match="Capacity must be an integer"):
            ParkingLot(capacity=capacity)


# =============================================================================
# Check-in
# =============================================================================


class TestCheckIn:
    """Tests for ParkingLot.check_in."""

    def test_admits_when_space(self):
        lot = ParkingLot(capacity=2)
        result = lot.check_in(make_vehicle("AA111AA"))
        assert result.admitted
        assert not result.already_parked
        assert result.plate == "AA111AA"
        assert lot.is_parked("AA111AA")
        assert lot.occupancy == 1

    def test_rejects_when_full(self):
        lot = ParkingLot(capacity=1)
        lot.check_in(make_vehicle("X"))
        result = lot.check_in(make_vehicle("Y"))
        assert not result.admitted
        assert not result
        assert not lot.is_parked("Y")
        assert lot.occupancy == 1

    def test_capacity_plus_one_rejected(self):
        lot = ParkingLot(capacity=20)
        results = [lot.check_in(make_vehicle(f"PLATE{i:02d}")) for i in range(21)]
        assert all(r.admitted for r in results[:20])
        assert not results[20].admitted
        assert lot.occupancy == 20
        assert lot.is_full
        assert lot.available_spaces == 0

    def test_duplicate_plate_is_success_without_growth(self):
        lot = ParkingLot(capacity=5)
        lot.check_in(make_vehicle("AA111AA"))
        result = lot.check_in(make_vehicle("AA111AA", VehicleType.BUS))
        assert result.admitted
        assert result.already_parked
        assert lot.occupancy == 1

    def test_duplicate_plate_admitted_even_when_full(self):
        lot = ParkingLot(capacity=1)
        lot.check_in(make_vehicle("X"))
        result = lot.check_in(make_vehicle("X"))
        assert result.admitted
        assert result.already_parked
        assert lot.occupancy == 1

    def test_duplicate_keeps_original_record(self, clock):
        lot = ParkingLot(capacity=5, clock=clock)
        lot.check_in(make_vehicle("AA111AA", VehicleType.CAR, clock=clock))
        clock.advance(60)
        lot.check_in(make_vehicle("AA111AA", VehicleType.BUS, "CARD", clock=clock))
        stored = lot.get_vehicle("AA111AA")
        assert stored.vehicle_type is VehicleType.CAR
        assert stored.check_in_time == START
        assert not stored.has_discount_card

    def test_check_in_does_not_touch_account(self):
        lot = ParkingLot(capacity=5)
        lot.check_in(make_vehicle("AA111AA"))
        assert lot.show_account() == Account(0, 0)


# =============================================================================
# Check-out
# =============================================================================


class TestCheckOut:
    """Tests for ParkingLot.check_out."""

    def test_unknown_plate_not_found(self):
        lot = ParkingLot()
        result = lot.check_out("A1111CC")
        assert not result.found
        assert not result
        assert result.fee is None
        assert lot.show_account() == Account(0, 0)

    def test_charges_from_check_in_time(self, clock):
        lot = ParkingLot(clock=clock)
        lot.check_in(make_vehicle("DD444DD", VehicleType.BUS, clock=clock))
        clock.advance(150)
        result = lot.check_out("DD444DD")
        assert result.found
        assert result.fee == 44
        assert result.parked_minutes == 150
        assert result.vehicle.plate == "DD444DD"

    def test_discount_card_applied(self, clock):
        lot = ParkingLot(clock=clock)
        lot.check_in(make_vehicle("DD444DD", VehicleType.BUS, "DISCOUNT_CARD_002", clock))
        clock.advance(150)
        assert lot.check_out("DD444DD").fee == 37

    def test_short_stay(self, clock):
        lot = ParkingLot(clock=clock)
        lot.check_in(make_vehicle("AA111AA", VehicleType.CAR, clock=clock))
        clock.advance(90)
        assert lot.check_out("AA111AA").fee == 20

    def test_removes_vehicle(self, clock):
        lot = ParkingLot(clock=clock)
        lot.check_in(make_vehicle("AA111AA", clock=clock))
        assert lot.check_out("AA111AA").found
        assert not lot.is_parked("AA111AA")
        assert "AA111AA" not in lot.list_vehicles()
        assert not lot.check_out("AA111AA").found

    def test_account_accumulates(self, clock):
        lot = ParkingLot(clock=clock)
        lot.check_in(make_vehicle("A", VehicleType.CAR, clock=clock))
        lot.check_in(make_vehicle("B", VehicleType.BUS, "CARD", clock=clock))
        lot.check_in(make_vehicle("C", VehicleType.MOTORCYCLE, clock=clock))
        clock.advance(150)
        fees = [lot.check_out(p).fee for p in ["A", "B", "C"]]
        lot.check_out("missing")
        account = lot.show_account()
        assert account.completed_checkouts == 3
        assert account.total_earnings == sum(fees)
        assert fees == [30, 37, 21]

    def test_freed_space_can_be_reused(self):
        """Capacity 1: X in, Y rejected, X out, Y in."""
        lot = ParkingLot(capacity=1)
        assert lot.check_in(make_vehicle("X")).admitted
        assert not lot.check_in(make_vehicle("Y")).admitted
        assert lot.check_out("X").found
        assert lot.check_in(make_vehicle("Y")).admitted

    def test_plate_can_return_with_new_check_in_time(self, clock):
        lot = ParkingLot(clock=clock)
        lot.check_in(make_vehicle("AA111AA", clock=clock))
        clock.advance(30)
        lot.check_out("AA111AA")
        clock.advance(30)
        lot.check_in(make_vehicle("AA111AA", clock=clock))
        assert lot.get_vehicle("AA111AA").check_in_time == clock()

    def test_negative_duration_charged_hourly_fee(self, clock):
        """A check-in time in the future (clock skew) is not rejected."""
        lot = ParkingLot(clock=clock)
        clock.advance(10)
        lot.check_in(make_vehicle("AA111AA", clock=clock))
        clock.advance(-20)
        result = lot.check_out("AA111AA")
        assert result.parked_minutes == -20
        assert result.fee == 20


# =============================================================================
# Reporting
# =============================================================================


class TestReporting:
    """Tests for show_account and list_vehicles."""

    def test_list_vehicles(self):
        lot = ParkingLot()
        for plate in ["AA111AA", "B222BBB", "CC333CC"]:
            lot.check_in(make_vehicle(plate))
        assert sorted(lot.list_vehicles()) == ["AA111AA", "B222BBB", "CC333CC"]
        assert {v.plate for v in lot.vehicles} == set(lot.list_vehicles())

    def test_list_vehicles_empty(self):
        assert ParkingLot().list_vehicles() == []

    def test_show_account_is_snapshot(self, clock):
        lot = ParkingLot(clock=clock)
        before = lot.show_account()
        lot.check_in(make_vehicle("AA111AA", clock=clock))
        lot.check_out("AA111AA")
        assert before == Account(0, 0)
        assert lot.show_account() == Account(1, 20)

    def test_account_summary(self):
        assert Account(2, 57).summary == (
            "2 vehicles have checked out and have earnings of $57"
        )

    def test_get_vehicle_missing(self):
        assert ParkingLot().get_vehicle("nope") is None


# =============================================================================
# Concurrency
# =============================================================================


class TestConcurrency:
    """Parallel callers cannot break the capacity or account invariants."""

    def test_parallel_check_ins_respect_capacity(self):
        lot = ParkingLot(capacity=10)
        barrier = threading.Barrier(50)
        results = []
        results_lock = threading.Lock()

        def worker(i):
            barrier.wait()
            result = lot.check_in(make_vehicle(f"P{i}"))
            with results_lock:
                results.append(result)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(50)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert lot.occupancy == 10
        assert sum(1 for r in results if r.admitted) == 10

    def test_parallel_check_outs_count_each_vehicle_once(self, clock):
        lot = ParkingLot(capacity=20, clock=clock)
        for i in range(20):
            lot.check_in(make_vehicle(f"P{i}", clock=clock))
        barrier = threading.Barrier(40)

        def worker(plate):
            barrier.wait()
            lot.check_out(plate)

        # Two threads race for every plate
        plates = [f"P{i}" for i in range(20)] * 2
        threads = [threading.Thread(target=worker, args=(p,)) for p in plates]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert lot.occupancy == 0
        assert lot.show_account() == Account(20, 400)
