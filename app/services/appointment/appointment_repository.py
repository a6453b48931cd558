# ============================================================================
# app/services/appointment/appointment_repository.py
# Appointment storage access for the scheduler (read + atomic insert)
# ============================================================================
from datetime import date
from typing import Callable, List, Optional
import logging

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, StorageError
from app.models.appointment import Appointment, ACTIVE_STATUSES
from app.models.booking_guard import BookingGuard

logger = logging.getLogger(__name__)

SlotCheck = Callable[[List[Appointment]], bool]


class AppointmentRepository:
    """
    insert_if_free is the only write path for new appointments. It is
    all-or-nothing: the guard row lock, the re-read, the check and the insert
    share one transaction, and the partial unique index on
    (staff_id, date, time) backs it up at the storage level.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_appointments_for_date(
            self,
            day: date,
            staff_id: Optional[str] = None,
            fresh: bool = False
    ) -> List[Appointment]:
        """Active (pending/confirmed) appointments on a date, ordered by start time."""
        query = self.db.query(Appointment).filter(
            Appointment.appointment_date == day,
            Appointment.status.in_(ACTIVE_STATUSES)
        )
        if staff_id:
            query = query.filter(Appointment.staff_id == staff_id)
        if fresh:
            query = query.populate_existing()
        return query.order_by(Appointment.appointment_time.asc(), Appointment.id.asc()).all()

    def insert_if_free(self, appointment: Appointment, is_free: Optional[SlotCheck] = None) -> Appointment:
        """
        Insert the appointment if `is_free(active appointments that day)` holds
        while the date's guard row is locked.

        Raises ConflictError when the check fails or the unique index rejects
        the row, StorageError for any other database failure.
        """
        day = appointment.appointment_date
        try:
            self._ensure_guard(day)
            self._lock_guard(day)

            existing = self.list_appointments_for_date(day, fresh=True)
            if is_free is not None and not is_free(existing):
                self.db.rollback()
                raise ConflictError("Sorry, this time slot was just booked. Please select another time.")

            self.db.add(appointment)
            self.db.flush()
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info(f"Unique index rejected booking on {day} {appointment.appointment_time}: {e.orig}")
            raise ConflictError("Sorry, this time slot was just booked. Please select another time.") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Storage failure while booking on {day}: {e}")
            raise StorageError("Booking could not be saved, please retry") from e

        self.db.refresh(appointment)
        return appointment

    def _ensure_guard(self, day: date) -> None:
        """Create the date's guard row in its own short transaction if missing"""
        exists = self.db.query(BookingGuard.id).filter(BookingGuard.guard_date == day).first()
        if exists is not None:
            return
        try:
            self.db.add(BookingGuard(guard_date=day, version=0))
            self.db.commit()
        except IntegrityError:
            # another request created it first
            self.db.rollback()

    def _lock_guard(self, day: date) -> None:
        """Row lock held until commit/rollback; first write of the booking transaction"""
        self.db.execute(
            update(BookingGuard)
            .where(BookingGuard.guard_date == day)
            .values(version=BookingGuard.version + 1)
        )
