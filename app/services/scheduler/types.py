# app/services/scheduler/types.py
"""Value types shared by the scheduling components (times are minutes since midnight)"""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class TimeWindow:
    """Half-open interval [start, end) within one day"""

    start: int
    end: int

    def contains(self, start: int, end: int) -> bool:
        return self.start <= start and end <= self.end

    def intersect(self, other: "TimeWindow") -> Optional["TimeWindow"]:
        start = max(self.start, other.start)
        end = min(self.end, other.end)
        if start >= end:
            return None
        return TimeWindow(start, end)


@dataclass(frozen=True)
class EffectiveHours:
    """Business opening for a date"""

    open: bool
    start: Optional[int] = None
    end: Optional[int] = None

    @property
    def window(self) -> Optional[TimeWindow]:
        if not self.open:
            return None
        return TimeWindow(self.start, self.end)


@dataclass(frozen=True)
class StaffWindow:
    """A staff member's working window for a date"""

    staff_id: str
    available: bool
    start: Optional[int] = None
    end: Optional[int] = None

    @property
    def window(self) -> Optional[TimeWindow]:
        if not self.available:
            return None
        return TimeWindow(self.start, self.end)


@dataclass(frozen=True)
class RosterMember:
    """An active staff member for a date: working window (None if off) and services"""

    staff_id: str
    window: Optional[TimeWindow]
    services: Tuple[str, ...] = ()

    def can_perform(self, service_id: str) -> bool:
        return not self.services or service_id in self.services

    def can_serve(self, service_id: str, start: int, end: int) -> bool:
        return self.window is not None and self.can_perform(service_id) and self.window.contains(start, end)


@dataclass(frozen=True)
class BusyInterval:
    """An active appointment's busy time, already inflated by the buffer"""

    start: int
    end: int
    staff_id: Optional[str]
    service_id: str
    appointment_end: int

    def overlaps(self, start: int, end: int) -> bool:
        return start < self.end and self.start < end

    def covers(self, instant: int) -> bool:
        return self.start <= instant < self.end


CLOSED = EffectiveHours(open=False)
