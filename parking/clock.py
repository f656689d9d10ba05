"""Clock callables used by the lot to read the current time."""

from datetime import datetime, timedelta
from typing import Optional


def system_clock() -> datetime:
    return datetime.now()


class ManualClock:
    """A clock that only moves when told to. Call it to read the time."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime.now()

    def __call__(self) -> datetime:
        return self.now

    def advance(self, minutes: float) -> datetime:
        self.now = self.now + timedelta(minutes=minutes)
        return self.now

    def set(self, when: datetime) -> None:
        self.now = when
