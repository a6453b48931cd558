# app/services/scheduler/booking_committer.py
"""The write path for new appointments"""
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional
import logging

from app.core.exceptions import ValidationError
from app.models.appointment import Appointment
from app.models.service import Service
from app.models.staff import Staff
from app.schemas.booking import BookingRequest
from app.services.appointment.appointment_repository import AppointmentRepository
from app.services.catalog.catalog_repository import CatalogRepository
from app.config.settings import Settings
from app.services.scheduler.booking_lock import BookingLock, NullBookingLock
from app.services.scheduler.business_calendar import BusinessCalendar
from app.services.scheduler.conflict_checker import ConflictChecker
from app.services.scheduler.staff_availability import StaffAvailabilityResolver
from app.services.scheduler.types import EffectiveHours, RosterMember
from app.utils.time_utils import time_to_minutes

logger = logging.getLogger(__name__)


class BookingCommitter:
    """
    Validates a booking request in a fixed order and stops at the first
    failure:
      1. service exists and is active
      2. staff (when given) exists, is active and performs the service
      3. date/time not in the past and inside the advance-booking window
      4. the business/staff window is open and fully contains the appointment
      5. the slot is still free, re-checked under the date's guard lock

    Step 5 and the insert run inside AppointmentRepository.insert_if_free, so
    two overlapping commits can never both succeed.
    """

    def __init__(
            self,
            catalog: CatalogRepository,
            appointments: AppointmentRepository,
            calendar: BusinessCalendar,
            staff_resolver: StaffAvailabilityResolver,
            checker: ConflictChecker,
            settings: Settings,
            clock: Callable[[], datetime],
            lock: Optional[BookingLock] = None
    ):
        self.catalog = catalog
        self.appointments = appointments
        self.calendar = calendar
        self.staff_resolver = staff_resolver
        self.checker = checker
        self.settings = settings
        self.clock = clock
        self.lock = lock or NullBookingLock()

    def commit(self, request: BookingRequest) -> Appointment:
        service = self._require_service(request.service_id)
        staff = self._require_staff(request.staff_id, service) if request.staff_id else None

        day = request.date
        start = time_to_minutes(request.time)
        end = start + service.duration
        self._check_date(day, start)

        business = self.calendar.get_effective_hours(day)
        roster = self._check_window(day, service, staff, business, start, end)

        staff_id = staff.id if staff else None
        appointment = Appointment(
            service_id=service.id,
            service_name=service.name,
            staff_id=staff_id,
            staff_name=staff.name if staff else None,
            customer_name=request.customer_name,
            customer_phone=request.customer_phone,
            customer_email=request.customer_email,
            appointment_date=day,
            appointment_time=request.time,
            duration=service.duration,
            notes=request.notes,
            status=self.settings.DEFAULT_APPOINTMENT_STATUS,
        )

        def is_free(existing: List[Appointment]) -> bool:
            return self.checker.is_slot_free(start, day, service.id, service.duration, existing, staff_id, roster)

        with self.lock.hold(day, staff_id):
            saved = self.appointments.insert_if_free(appointment, is_free)

        logger.info(
            f"Booking created: {saved.id} for {saved.customer_name} on {day} at {saved.appointment_time} "
            f"(service={service.id}, staff={staff_id or 'any'})"
        )
        return saved

    def _require_service(self, service_id: str) -> Service:
        service = self.catalog.get_service(service_id)
        if service is None or not service.is_active:
            raise ValidationError("Selected service not found")
        return service

    def _require_staff(self, staff_id: str, service: Service) -> Staff:
        staff = self.catalog.get_staff(staff_id)
        if staff is None or not staff.is_active:
            raise ValidationError("Selected staff member not found")
        if not staff.can_perform(service.id):
            raise ValidationError(f"{staff.name} does not perform {service.name}")
        return staff

    def _check_date(self, day: date, start: int) -> None:
        now = self.clock()
        today = now.date()
        if day < today:
            raise ValidationError("Cannot book appointments in the past")

        max_days = self.settings.MAX_ADVANCE_BOOKING_DAYS
        if day > today + timedelta(days=max_days):
            raise ValidationError(f"Cannot book more than {max_days} days in advance")

        if day == today and start <= now.hour * 60 + now.minute:
            raise ValidationError("Cannot book a time slot in the past")

    def _check_window(
            self,
            day: date,
            service: Service,
            staff: Optional[Staff],
            business: EffectiveHours,
            start: int,
            end: int
    ) -> List[RosterMember]:
        """Raise unless the interval fits; returns the day's roster for the conflict check"""
        if not business.open:
            raise ValidationError(f"Sorry, we are closed on {day.isoformat()}")

        if staff is not None:
            window = self.staff_resolver.window_for(staff, day, business)
            if not window.available:
                raise ValidationError(f"{staff.name} is not working on {day.isoformat()}")
            if not window.window.contains(start, end):
                raise ValidationError("Requested time is outside working hours")
            return self.staff_resolver.roster(day, business)

        if not business.window.contains(start, end):
            raise ValidationError("Requested time is outside business hours")

        roster = self.staff_resolver.roster(day, business)
        qualified = [m for m in roster if m.can_perform(service.id)]
        # with no qualified staff at all the business is the single resource
        if qualified and not any(m.can_serve(service.id, start, end) for m in qualified):
            raise ValidationError("No staff member is working at the requested time")
        return roster
