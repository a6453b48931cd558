# ============================================================================
# app/services/appointment/appointment_service.py
# ============================================================================
"""Service for appointment status changes"""
from datetime import datetime, timezone
from typing import Callable, Dict, Tuple
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import AppointmentNotFoundError, StorageError, ValidationError
from app.models.appointment import Appointment
from app.utils.time_utils import business_now, time_to_minutes

logger = logging.getLogger(__name__)

VALID_TRANSITIONS: Dict[str, Tuple[str, ...]] = {
    "pending": ("confirmed", "cancelled", "no-show"),
    "confirmed": ("cancelled", "completed", "no-show"),
    "completed": (),
    "no-show": (),
    "cancelled": (),
}

# Outcomes that can only be recorded once the appointment has started
AFTER_START_STATUSES = ("completed", "no-show")


class AppointmentService:
    """Handles appointment lifecycle operations"""

    def __init__(self, db: Session, clock: Callable[[], datetime] = business_now):
        self.db = db
        self.clock = clock

    def get(self, appointment_id: str) -> Appointment:
        appointment = self.db.get(Appointment, appointment_id)
        if appointment is None:
            raise AppointmentNotFoundError("Appointment not found")
        return appointment

    def update_status(self, appointment_id: str, status: str) -> Appointment:
        """Move an appointment along the status lifecycle"""
        appointment = self.get(appointment_id)

        allowed = VALID_TRANSITIONS.get(appointment.status, ())
        if status not in allowed:
            raise ValidationError(f"Cannot change status from {appointment.status} to {status}")

        if status in AFTER_START_STATUSES and not self._has_started(appointment):
            raise ValidationError(
                f"Cannot mark as {status}. Appointment is scheduled for "
                f"{appointment.appointment_date.isoformat()} at {appointment.appointment_time}."
            )

        if status == "cancelled" and self._has_started(appointment):
            raise ValidationError("Cannot cancel an appointment that has already started")

        previous = appointment.status
        appointment.status = status
        if status == "cancelled":
            appointment.cancelled_at = datetime.now(timezone.utc)

        self._commit()
        self.db.refresh(appointment)
        logger.info(f"Appointment {appointment.id} status {previous} -> {status}")
        return appointment

    def cancel(self, appointment_id: str) -> Appointment:
        """Cancel a future appointment, freeing its slot"""
        return self.update_status(appointment_id, "cancelled")

    def _has_started(self, appointment: Appointment) -> bool:
        now = self.clock()
        if appointment.appointment_date != now.date():
            return appointment.appointment_date < now.date()
        return time_to_minutes(appointment.appointment_time) <= now.hour * 60 + now.minute

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to save appointment status: {e}")
            raise StorageError("Appointment could not be updated, please retry") from e
