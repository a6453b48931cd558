# app/services/scheduler/conflict_checker.py
"""Marks candidate slots available or taken against active appointments"""
from datetime import date, datetime
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set

from app.models.appointment import Appointment
from app.schemas.booking import Slot
from app.services.appointment.appointment_repository import AppointmentRepository
from app.services.scheduler.types import BusyInterval, RosterMember
from app.utils.time_utils import minutes_to_time, time_to_minutes


class ConflictChecker:
    """
    Overlap is half-open: candidate [t, t + d) conflicts with an appointment
    busy over [s, s + duration + buffer) iff t < busy_end and s < t + d.

    With a roster (every active member, their window for the day and services)
    unassigned bookings (staff_id None) draw from the staff at large. At each
    instant of the candidate, every unassigned appointment running then, plus
    the candidate itself when unassigned, must get a distinct member who is
    qualified for its service, whose window holds it, and who has no staffed
    appointment then. A staff-specific candidate takes its member out of that
    matching.

    A service no active member performs makes the business its single
    resource: its unassigned appointments conflict only with each other and
    hold no staff. Without a roster every service is treated that way.
    """

    def __init__(
            self,
            appointments: AppointmentRepository,
            buffer_minutes: int,
            clock: Callable[[], datetime]
    ):
        self.appointments = appointments
        self.buffer_minutes = buffer_minutes
        self.clock = clock

    def mark_availability(
            self,
            candidates: Iterable[int],
            day: date,
            service_id: str,
            duration: int,
            staff_id: Optional[str] = None,
            roster: Optional[Sequence[RosterMember]] = None
    ) -> List[Slot]:
        existing = self.appointments.list_appointments_for_date(day)
        return self.evaluate(candidates, day, service_id, duration, existing, staff_id, roster)

    def evaluate(
            self,
            candidates: Iterable[int],
            day: date,
            service_id: str,
            duration: int,
            existing: Sequence[Appointment],
            staff_id: Optional[str] = None,
            roster: Optional[Sequence[RosterMember]] = None
    ) -> List[Slot]:
        """Pure variant of mark_availability over an already loaded appointment list; inactive ones are skipped"""
        busy = [self._busy_interval(appt) for appt in existing if appt.is_active]
        cutoff = self._past_cutoff(day)

        slots = []
        for start in candidates:
            if cutoff is not None and start <= cutoff:
                available = False
            else:
                available = self._is_free(start, start + duration, service_id, busy, staff_id, roster)
            slots.append(Slot(time=minutes_to_time(start), available=available))
        return slots

    def is_slot_free(
            self,
            start: int,
            day: date,
            service_id: str,
            duration: int,
            existing: Sequence[Appointment],
            staff_id: Optional[str] = None,
            roster: Optional[Sequence[RosterMember]] = None
    ) -> bool:
        return self.evaluate([start], day, service_id, duration, existing, staff_id, roster)[0].available

    def _busy_interval(self, appt: Appointment) -> BusyInterval:
        start = time_to_minutes(appt.appointment_time)
        return BusyInterval(
            start=start,
            end=start + appt.duration + self.buffer_minutes,
            staff_id=appt.staff_id,
            service_id=appt.service_id,
            appointment_end=start + appt.duration,
        )

    def _past_cutoff(self, day: date) -> Optional[int]:
        """Last minute of `day` that is already in the past, if day is today"""
        now = self.clock()
        if day < now.date():
            return 24 * 60
        if day > now.date():
            return None
        return now.hour * 60 + now.minute

    def _is_free(
            self,
            start: int,
            end: int,
            service_id: str,
            busy: List[BusyInterval],
            staff_id: Optional[str],
            roster: Optional[Sequence[RosterMember]]
    ) -> bool:
        if staff_id and any(b.staff_id == staff_id and b.overlaps(start, end) for b in busy):
            return False

        staffed = _staffed_services({b.service_id for b in busy} | {service_id}, roster)
        if not staff_id and service_id not in staffed:
            return not any(
                b.staff_id is None and b.service_id == service_id and b.overlaps(start, end)
                for b in busy
            )
        if roster is None:
            return True

        # unassigned appointments of unstaffed services never hold a staff member
        jobs = [b for b in busy if b.staff_id is None and b.service_id in staffed and b.overlaps(start, end)]
        assigned = [b for b in busy if b.staff_id is not None and b.overlaps(start, end)]

        points = {start} | {b.start for b in jobs + assigned if start < b.start < end}
        for instant in points:
            free = [
                m for m in roster
                if m.staff_id != staff_id
                and not any(b.staff_id == m.staff_id and b.covers(instant) for b in assigned)
            ]
            needs = [
                {m.staff_id for m in free if m.can_serve(b.service_id, b.start, b.appointment_end)}
                for b in jobs if b.covers(instant)
            ]
            if not staff_id:
                needs.append({m.staff_id for m in free if m.can_serve(service_id, start, end)})
            if not _can_assign(needs):
                return False
        return True


def _staffed_services(services: Set[str], roster: Optional[Sequence[RosterMember]]) -> Set[str]:
    """The services some active member can perform"""
    if roster is None:
        return set()
    return {s for s in services if any(m.can_perform(s) for m in roster)}


def _can_assign(needs: List[Set[str]]) -> bool:
    """True if every booking can be given a distinct member from its eligible set"""
    matched: Dict[str, int] = {}

    def place(index: int, seen: Set[str]) -> bool:
        for member in needs[index]:
            if member in seen:
                continue
            seen.add(member)
            if member not in matched or place(matched[member], seen):
                matched[member] = index
                return True
        return False

    return all(place(index, set()) for index in range(len(needs)))
