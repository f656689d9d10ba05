"""Vehicle class - one vehicle handed to the lot at check-in."""

from datetime import datetime
from typing import Optional

from .fees import parked_minutes
from .vehicle_type import VehicleType


class Vehicle:
    """A parked (or about to be parked) vehicle, identified by its plate."""

    def __init__(
        self,
        plate: str,
        vehicle_type: VehicleType,
        discount_card: Optional[str] = None,
        check_in_time: Optional[datetime] = None,
    ):
        if not plate:
            raise ValueError("Plate cannot be empty")
        self.plate = plate
        self.vehicle_type = vehicle_type
        self.discount_card = discount_card
        self._check_in_time = check_in_time or datetime.now()

    @property
    def check_in_time(self) -> datetime:
        return self._check_in_time

    @property
    def has_discount_card(self) -> bool:
        """Any card grants the discount; its value is not checked."""
        return self.discount_card is not None

    def parked_minutes(self, at: Optional[datetime] = None) -> int:
        """Whole minutes parked as of `at` (defaults to now)."""
        return parked_minutes(self._check_in_time, at or datetime.now())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vehicle):
            return NotImplemented
        return self.plate == other.plate

    def __hash__(self) -> int:
        return hash(self.plate)

    def __repr__(self) -> str:
        return f"Vehicle({self.plate!r}, {self.vehicle_type.name})"
