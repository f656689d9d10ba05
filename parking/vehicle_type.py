"""VehicleType enum for the hourly fee catalog."""

import re
from enum import Enum

# Same pattern as the arrival 'type' in schema.yaml
NAME_PATTERN = re.compile(r"^\s*(car|motorcycle|mini[ _-]?bus|bus)\s*$", re.IGNORECASE)


class VehicleType(Enum):
    """Vehicle categories accepted by the lot. Value = hourly fee."""

    CAR = 20
    MOTORCYCLE = 15
    MINIBUS = 25
    BUS = 30

    @property
    def hour_fee(self) -> int:
        """Fee for the first two hours (or any fraction of them)."""
        return self.value

    @property
    def display_name(self) -> str:
        if self is VehicleType.MINIBUS:
            return "Mini Bus"
        return self.name.capitalize()

    @classmethod
    def from_name(cls, name: str) -> "VehicleType":
        """Resolve 'car', 'Mini Bus', 'mini_bus', ... to a VehicleType."""
        match = NAME_PATTERN.match(str(name))
        if not match:
            raise ValueError(f"Unknown vehicle type: {name!r}")
        return cls[re.sub(r"[ _-]", "", match.group(1)).upper()]
