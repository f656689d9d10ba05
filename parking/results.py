"""Result and account dataclasses returned by the lot."""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .vehicle import Vehicle


@dataclass(frozen=True)
class CheckInResult:
    """Outcome of a check-in. Rejection is a normal result, not an error."""

    plate: str
    admitted: bool
    already_parked: bool = False

    def __bool__(self) -> bool:
        return self.admitted


@dataclass(frozen=True)
class CheckOutResult:
    """Outcome of a check-out. `fee` is only set when the plate was found."""

    plate: str
    found: bool
    fee: Optional[int] = None
    parked_minutes: Optional[int] = None
    vehicle: Optional["Vehicle"] = None

    def __bool__(self) -> bool:
        return self.found


@dataclass(frozen=True)
class Account:
    """Running totals of completed check-outs."""

    completed_checkouts: int = 0
    total_earnings: int = 0

    def record(self, fee: int) -> "Account":
        return Account(self.completed_checkouts + 1, self.total_earnings + fee)

    @property
    def summary(self) -> str:
        return (
            f"{self.completed_checkouts} vehicles have checked out "
            f"and have earnings of ${self.total_earnings}"
        )
