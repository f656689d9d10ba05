"""
Parking lot ledger models.

This package provides the in-memory model of a single parking lot:
- VehicleType: Vehicle categories and their hourly fees
- Vehicle: A vehicle identified by its plate
- ParkingLot: Capacity-bounded check-in / check-out with running totals
- CheckInResult, CheckOutResult, Account: Values returned by the lot
- Scenario: Scripted arrivals and check-outs, replayed on a manual clock
"""

from .vehicle_type import VehicleType
from .vehicle import Vehicle
from .results import Account, CheckInResult, CheckOutResult
from .fees import calculate_fee, parked_minutes
from .clock import ManualClock, system_clock
from .lot import ParkingLot
from .scenario import Arrival, Departure, Scenario, ScenarioEvent
from .loader import load_lot, load_scenario

__all__ = [
    "VehicleType",
    "Vehicle",
    "Account",
    "CheckInResult",
    "CheckOutResult",
    "calculate_fee",
    "parked_minutes",
    "ManualClock",
    "system_clock",
    "ParkingLot",
    "Arrival",
    "Departure",
    "Scenario",
    "ScenarioEvent",
    "load_lot",
    "load_scenario",
]
