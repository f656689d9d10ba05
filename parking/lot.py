"""ParkingLot class - the aggregate owning parked vehicles and the account."""

import logging
import threading
from datetime import datetime
from typing import Callable, Dict, List, Optional

from .clock import system_clock
from .fees import calculate_fee
from .results import Account, CheckInResult, CheckOutResult
from .vehicle import Vehicle

DEFAULT_CAPACITY = 20
DEFAULT_NAME = "AlkeParking"

logger = logging.getLogger(__name__)


class ParkingLot:
    """
    A single capacity-bounded lot.

    Vehicles are keyed by plate. All reads and writes of the vehicle map
    and the account go through one lock, so the capacity check and the
    insert (or the lookup, removal and account update on check-out) happen
    as a single step even with concurrent callers.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        name: str = DEFAULT_NAME,
        clock: Callable[[], datetime] = system_clock,
    ):
        if not isinstance(capacity, int) or isinstance(capacity, bool):
            raise ValueError(f"Capacity must be an integer, got {capacity!r}")
        if capacity <= 0:
            raise ValueError(f"Capacity must be positive, got {capacity}")
        self._capacity = capacity
        self.name = name
        self.clock = clock
        self._vehicles: Dict[str, Vehicle] = {}
        self._account = Account()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def occupancy(self) -> int:
        with self._lock:
            return len(self._vehicles)

    @property
    def available_spaces(self) -> int:
        return self._capacity - self.occupancy

    @property
    def is_full(self) -> bool:
        return self.available_spaces == 0

    @property
    def vehicles(self) -> List[Vehicle]:
        """Snapshot of the parked vehicles."""
        with self._lock:
            return list(self._vehicles.values())

    def is_parked(self, plate: str) -> bool:
        with self._lock:
            return plate in self._vehicles

    def get_vehicle(self, plate: str) -> Optional[Vehicle]:
        with self._lock:
            return self._vehicles.get(plate)

    def check_in(self, vehicle: Vehicle) -> CheckInResult:
        """
        Admit a vehicle if there is room.

        A plate that is already parked is reported as admitted and the
        stored record (and its check-in time) is kept as is.
        """
        with self._lock:
            if vehicle.plate in self._vehicles:
                logger.debug("%s already parked in %s", vehicle.plate, self.name)
                return CheckInResult(vehicle.plate, admitted=True, already_parked=True)
            if len(self._vehicles) >= self._capacity:
                logger.info(
                    "Rejected %s: %s is full (%d/%d)",
                    vehicle.plate,
                    self.name,
                    len(self._vehicles),
                    self._capacity,
                )
                return CheckInResult(vehicle.plate, admitted=False)
            self._vehicles[vehicle.plate] = vehicle
            logger.info(
                "Checked in %s (%s), %d/%d occupied",
                vehicle.plate,
                vehicle.vehicle_type.display_name,
                len(self._vehicles),
                self._capacity,
            )
        return CheckInResult(vehicle.plate, admitted=True)

    def check_out(self, plate: str) -> CheckOutResult:
        """Remove a vehicle by plate, charge it and record the fee."""
        with self._lock:
            vehicle = self._vehicles.get(plate)
            if vehicle is None:
                logger.info("Check-out failed: %s is not parked in %s", plate, self.name)
                return CheckOutResult(plate, found=False)

            # Everything that can fail happens before the state changes
            minutes = vehicle.parked_minutes(self.clock())
            fee = calculate_fee(vehicle.vehicle_type, minutes, vehicle.has_discount_card)

            del self._vehicles[plate]
            self._account = self._account.record(fee)

        logger.info("Checked out %s after %d min, fee %d", plate, minutes, fee)
        return CheckOutResult(
            plate, found=True, fee=fee, parked_minutes=minutes, vehicle=vehicle
        )

    def show_account(self) -> Account:
        with self._lock:
            return self._account

    def list_vehicles(self) -> List[str]:
        """Plates of the parked vehicles, in no particular order."""
        with self._lock:
            return list(self._vehicles)
