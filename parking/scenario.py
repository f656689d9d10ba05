"""Scenario classes - replay a scripted day of arrivals and check-outs."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Tuple, Union

from .clock import ManualClock
from .lot import DEFAULT_CAPACITY, DEFAULT_NAME, ParkingLot
from .results import CheckInResult, CheckOutResult
from .vehicle import Vehicle
from .vehicle_type import VehicleType

CHECK_IN = "check-in"
CHECK_OUT = "check-out"


class Arrival:
    """A vehicle arriving `at_minutes` after the scenario starts."""

    def __init__(
        self,
        plate: str,
        vehicle_type: VehicleType,
        discount_card: Optional[str] = None,
        at_minutes: float = 0,
    ):
        self.plate = plate
        self.vehicle_type = vehicle_type
        self.discount_card = discount_card
        self.at_minutes = at_minutes or 0


class Departure:
    """A check-out request for a plate `at_minutes` after the start."""

    def __init__(self, plate: str, at_minutes: float = 0):
        self.plate = plate
        self.at_minutes = at_minutes or 0


@dataclass
class ScenarioEvent:
    """One replayed step and what the lot answered."""

    minute: float
    action: str
    plate: str
    result: Union[CheckInResult, CheckOutResult]
    lot_name: str = DEFAULT_NAME

    @property
    def succeeded(self) -> bool:
        return bool(self.result)

    @property
    def message(self) -> str:
        if self.action == CHECK_IN:
            if self.succeeded:
                return f"Welcome to {self.lot_name}!"
            return "Sorry, the check-in failed"
        if self.succeeded:
            return f"Your fee is {self.result.fee}. Come back soon."
        return "Sorry, the check-out failed"


class Scenario:
    """Lot settings plus the arrivals and check-outs to replay against it."""

    def __init__(
        self,
        arrivals: Optional[List[Arrival]] = None,
        departures: Optional[List[Departure]] = None,
        capacity: int = DEFAULT_CAPACITY,
        name: str = DEFAULT_NAME,
        start_time: Optional[datetime] = None,
    ):
        self.arrivals = arrivals or []
        self.departures = departures or []
        self.capacity = capacity
        self.name = name
        self.start_time = start_time

    def timeline(self) -> List[Union[Arrival, Departure]]:
        """
        Steps in the order they happen.

        Sorted by minute; at the same minute arrivals go before
        check-outs, otherwise file order is kept.
        """
        steps = [(a.at_minutes, 0, i, a) for i, a in enumerate(self.arrivals)]
        steps += [(d.at_minutes, 1, i, d) for i, d in enumerate(self.departures)]
        steps.sort(key=lambda s: s[:3])
        return [s[3] for s in steps]

    def run(self) -> Tuple[ParkingLot, List[ScenarioEvent]]:
        """Replay the scenario on a fresh lot driven by a manual clock."""
        start = self.start_time or datetime.now()
        clock = ManualClock(start)
        lot = ParkingLot(self.capacity, self.name, clock=clock)

        events = []
        for step in self.timeline():
            clock.set(start + timedelta(minutes=step.at_minutes))
            if isinstance(step, Arrival):
                vehicle = Vehicle(
                    step.plate,
                    step.vehicle_type,
                    discount_card=step.discount_card,
                    check_in_time=clock(),
                )
                result = lot.check_in(vehicle)
                action = CHECK_IN
            else:
                result = lot.check_out(step.plate)
                action = CHECK_OUT
            events.append(
                ScenarioEvent(step.at_minutes, action, step.plate, result, lot.name)
            )
        return lot, events
