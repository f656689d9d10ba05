"""Helper functions for parking fee calculations."""

import math
from datetime import datetime

from .vehicle_type import VehicleType

FLAT_RATE_MINUTES = 120
BLOCK_MINUTES = 15
DISCOUNT_PERCENT = 15


def parked_minutes(check_in_time: datetime, at: datetime) -> int:
    """Whole minutes between check-in and `at`, rounded down (may be negative)."""
    return math.floor((at - check_in_time).total_seconds() / 60)


def calculate_fee(
    vehicle_type: VehicleType, minutes: int, has_discount_card: bool = False
) -> int:
    """
    Calculate the fee due for a stay.

    - Up to two hours (including zero or negative durations): the hourly fee
    - Beyond that: every started 15-minute block adds a quarter of the
      hourly fee (truncated)
    - Discount card: 15% off, rounded down
    """
    base = vehicle_type.hour_fee
    if minutes > FLAT_RATE_MINUTES:
        blocks = math.ceil((minutes - FLAT_RATE_MINUTES) / BLOCK_MINUTES)
        base += blocks * (vehicle_type.hour_fee // 4)

    if has_discount_card:
        return apply_discount(base)
    return base


def apply_discount(amount: int) -> int:
    """Take DISCOUNT_PERCENT off an amount, rounding down."""
    return amount * (100 - DISCOUNT_PERCENT) // 100
