# app/services/scheduler/staff_availability.py
"""Resolves a staff member's working window for a date"""
from datetime import date
from typing import List, Optional

from app.models.staff import Staff
from app.services.catalog.catalog_repository import CatalogRepository
from app.services.scheduler.business_calendar import BusinessCalendar, _window_or_closed
from app.services.scheduler.types import EffectiveHours, RosterMember, StaffWindow
from app.utils.time_utils import weekday_name


class StaffAvailabilityResolver:
    """Staff schedules live inside the business window; any business closure wins."""

    def __init__(self, catalog: CatalogRepository, calendar: BusinessCalendar):
        self.catalog = catalog
        self.calendar = calendar

    def get_staff_window(self, staff_id: str, day: date) -> StaffWindow:
        staff = self.catalog.get_staff(staff_id)
        if staff is None or not staff.is_active:
            return StaffWindow(staff_id=staff_id, available=False)
        return self.window_for(staff, day, self.calendar.get_effective_hours(day))

    def window_for(self, staff: Staff, day: date, business: EffectiveHours) -> StaffWindow:
        """Same as get_staff_window for an already loaded member and business window"""
        unavailable = StaffWindow(staff_id=staff.id, available=False)
        if not staff.is_active or not business.open:
            return unavailable

        schedule = staff.schedule or {}
        day_name = weekday_name(day)
        if day_name not in schedule:
            return StaffWindow(staff.id, True, business.start, business.end)

        entry = schedule[day_name]
        if not entry:
            return unavailable

        shift = _window_or_closed(entry.get("start"), entry.get("end")).window
        if shift is None:
            return unavailable

        overlap = shift.intersect(business.window)
        if overlap is None:
            return unavailable
        return StaffWindow(staff.id, True, overlap.start, overlap.end)

    def roster(self, day: date, business: Optional[EffectiveHours] = None) -> List[RosterMember]:
        """Every active member with their window for the day (None when off) and services"""
        if business is None:
            business = self.calendar.get_effective_hours(day)
        return [
            RosterMember(staff.id, self.window_for(staff, day, business).window, tuple(staff.services or ()))
            for staff in self.catalog.list_active_staff()
        ]
