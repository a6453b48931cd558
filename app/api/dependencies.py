# ============================================================================
# FILE: app/api/dependencies.py
# Request-scoped service dependencies
# ============================================================================
from datetime import datetime
from typing import Callable

from fastapi import Depends
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.config.settings import Settings, get_settings
from app.services.appointment.appointment_service import AppointmentService
from app.services.scheduler.booking_lock import build_booking_lock
from app.services.scheduler.scheduler_service import SchedulerService
from app.utils.time_utils import business_now


def get_clock() -> Callable[[], datetime]:
    """Source of the business-local "now"; overridden in tests to pin time."""
    return business_now


def get_scheduler(
        db: Session = Depends(get_db),
        settings: Settings = Depends(get_settings),
        clock: Callable[[], datetime] = Depends(get_clock)
) -> SchedulerService:
    """
    Scheduler bound to this request's session.

    Usage in routes:
        @router.get("/availability")
        def availability(scheduler: SchedulerService = Depends(get_scheduler)):
            ...
    """
    return SchedulerService.for_session(db, settings, clock, build_booking_lock(settings))


def get_appointment_service(
        db: Session = Depends(get_db),
        clock: Callable[[], datetime] = Depends(get_clock)
) -> AppointmentService:
    return AppointmentService(db, clock)
