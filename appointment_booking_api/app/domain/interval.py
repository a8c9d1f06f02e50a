"""Half-open time intervals used for double-booking checks."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class TimeInterval:
    """The range ``[start, end)`` of naive date-times.

    The end instant is not occupied, so an interval ending at 11:00 and
    another starting at 11:00 do not overlap and back-to-back bookings
    are allowed.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise ValueError("Interval end must be after its start")

    @classmethod
    def from_duration(cls, start: datetime, minutes: int) -> TimeInterval:
        return cls(start, start + timedelta(minutes=minutes))

    def overlaps(self, other: TimeInterval) -> bool:
        return self.start < other.end and self.end > other.start
