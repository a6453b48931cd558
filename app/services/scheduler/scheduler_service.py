# app/services/scheduler/scheduler_service.py
"""Slot computation and booking entry points"""
from datetime import date, datetime, timedelta
from typing import Callable, Optional, Union
import logging

from sqlalchemy.orm import Session

from app.config.settings import Settings
from app.models.appointment import Appointment
from app.schemas.booking import BookingRequest, SlotsResult
from app.services.appointment.appointment_repository import AppointmentRepository
from app.services.catalog.catalog_repository import CatalogRepository
from app.services.scheduler.booking_committer import BookingCommitter
from app.services.scheduler.booking_lock import BookingLock
from app.services.scheduler.business_calendar import BusinessCalendar
from app.services.scheduler.conflict_checker import ConflictChecker
from app.services.scheduler.slot_generator import generate_candidates
from app.services.scheduler.staff_availability import StaffAvailabilityResolver
from app.utils.time_utils import business_now, parse_date

logger = logging.getLogger(__name__)


class SchedulerService:
    """Composes calendar, staff resolver, slot generator, conflict checker and committer"""

    def __init__(
            self,
            catalog: CatalogRepository,
            appointments: AppointmentRepository,
            settings: Settings,
            clock: Callable[[], datetime] = business_now,
            lock: Optional[BookingLock] = None
    ):
        self.catalog = catalog
        self.appointments = appointments
        self.settings = settings
        self.clock = clock

        self.calendar = BusinessCalendar(catalog)
        self.staff_resolver = StaffAvailabilityResolver(catalog, self.calendar)
        self.checker = ConflictChecker(appointments, settings.BUFFER_MINUTES, clock)
        self.committer = BookingCommitter(
            catalog,
            appointments,
            self.calendar,
            self.staff_resolver,
            self.checker,
            settings,
            clock,
            lock,
        )

    @classmethod
    def for_session(
            cls,
            db: Session,
            settings: Settings,
            clock: Callable[[], datetime] = business_now,
            lock: Optional[BookingLock] = None
    ) -> "SchedulerService":
        """Scheduler bound to one request's database session"""
        return cls(CatalogRepository(db), AppointmentRepository(db), settings, clock, lock)

    def get_available_slots(
            self,
            day: Union[str, date],
            service_id: str,
            staff_id: Optional[str] = None
    ) -> SlotsResult:
        """
        Every candidate slot for the day with its availability. Anything that
        makes the day unbookable (bad or past date, beyond the advance window,
        unknown service, closed business, staff off) yields an empty list.
        """
        try:
            day = parse_date(day)
        except ValueError:
            return SlotsResult(slots=[])

        today = self.clock().date()
        if day < today or day > today + timedelta(days=self.settings.MAX_ADVANCE_BOOKING_DAYS):
            return SlotsResult(slots=[])

        service = self.catalog.get_service(service_id)
        if service is None or not service.is_active:
            return SlotsResult(slots=[])

        business = self.calendar.get_effective_hours(day)
        if not business.open:
            return SlotsResult(slots=[])

        if staff_id:
            staff = self.catalog.get_staff(staff_id)
            if staff is None or not staff.can_perform(service.id):
                return SlotsResult(slots=[])
            window = self.staff_resolver.window_for(staff, day, business)
            if not window.available:
                return SlotsResult(slots=[])
            candidate_window = window.window
        else:
            candidate_window = business.window
        roster = self.staff_resolver.roster(day, business)

        candidates = generate_candidates(
            candidate_window,
            service.duration,
            self.settings.SLOT_STEP_MINUTES,
            self.settings.BUFFER_MINUTES,
        )
        slots = self.checker.mark_availability(
            candidates, day, service.id, service.duration, staff_id, roster
        )
        return SlotsResult(slots=slots)

    def book_appointment(self, request: BookingRequest) -> Appointment:
        return self.committer.commit(request)
