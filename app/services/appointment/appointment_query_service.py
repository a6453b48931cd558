# ============================================================================
# app/services/appointment/appointment_query_service.py
# Read-only appointment queries for the dashboard - no FastAPI dependencies
# ============================================================================
from sqlalchemy.orm import Session
from sqlalchemy import and_, or_
from datetime import date, datetime, timedelta
from typing import Optional, Dict, Any, List

from app.models.appointment import Appointment
from app.utils.time_utils import minutes_to_time, time_to_minutes

NO_SHOW_RATE_DAYS = 30


class AppointmentQueryService:
    """Service layer for appointment lookups and statistics."""

    @staticmethod
    def list_appointments(
            db: Session,
            start_date: Optional[date] = None,
            end_date: Optional[date] = None,
            status: Optional[str] = None,
            customer_phone: Optional[str] = None,
            staff_id: Optional[str] = None,
            skip: int = 0,
            limit: int = 50
    ) -> Dict[str, Any]:
        """Get paginated list of appointments with filters."""
        query = db.query(Appointment)

        if start_date:
            query = query.filter(Appointment.appointment_date >= start_date)
        if end_date:
            query = query.filter(Appointment.appointment_date <= end_date)
        if status:
            query = query.filter(Appointment.status == status)
        if customer_phone:
            query = query.filter(Appointment.customer_phone == customer_phone)
        if staff_id:
            query = query.filter(Appointment.staff_id == staff_id)

        query = query.order_by(Appointment.appointment_date.asc(), Appointment.appointment_time.asc())
        total = query.count()
        appointments = query.offset(skip).limit(limit).all()

        return {
            "total_appointments": total,
            "page": {
                "skip": skip,
                "limit": limit,
                "total_pages": (total + limit - 1) // limit if total > 0 else 0
            },
            "filters": {
                "start_date": start_date.isoformat() if start_date else None,
                "end_date": end_date.isoformat() if end_date else None,
                "status": status,
                "customer_phone": customer_phone,
                "staff_id": staff_id
            },
            "appointments": [appt.to_dict() for appt in appointments]
        }

    @staticmethod
    def get_appointment(db: Session, appointment_id: str) -> Optional[Dict[str, Any]]:
        """Get a single appointment by ID. Returns None if not found."""
        appointment = db.get(Appointment, appointment_id)
        if not appointment:
            return None
        return appointment.to_dict()

    @staticmethod
    def get_appointments_by_email(db: Session, email: str) -> List[Dict[str, Any]]:
        appointments = db.query(Appointment).filter(
            Appointment.customer_email == email.strip().lower()
        ).order_by(Appointment.appointment_date.asc(), Appointment.appointment_time.asc()).all()
        return [appt.to_dict() for appt in appointments]

    @staticmethod
    def get_appointments_by_date(db: Session, day: date) -> List[Dict[str, Any]]:
        appointments = db.query(Appointment).filter(
            Appointment.appointment_date == day
        ).order_by(Appointment.appointment_time.asc()).all()
        return [appt.to_dict() for appt in appointments]

    @staticmethod
    def get_appointments_needing_action(db: Session, now: datetime) -> List[Dict[str, Any]]:
        """
        Confirmed appointments that have already finished and still need to be
        marked completed or no-show.
        """
        today = now.date()
        current_minutes = now.hour * 60 + now.minute

        candidates = db.query(Appointment).filter(
            Appointment.status == "confirmed",
            Appointment.appointment_date <= today
        ).order_by(Appointment.appointment_date.desc(), Appointment.appointment_time.desc()).all()

        # end time depends on each row's duration, so today's rows are filtered here
        return [
            appt.to_dict()
            for appt in candidates
            if appt.appointment_date < today
            or time_to_minutes(appt.appointment_time) + appt.duration <= current_minutes
        ]

    @staticmethod
    def get_upcoming_appointments(db: Session, now: datetime, days: int = 7) -> Dict[str, Any]:
        """Active appointments from now through the next `days` days."""
        today = now.date()
        period_end = today + timedelta(days=days)
        current_time = minutes_to_time(now.hour * 60 + now.minute)

        appointments = db.query(Appointment).filter(
            Appointment.status.in_(["pending", "confirmed"]),
            Appointment.appointment_date <= period_end,
            or_(
                Appointment.appointment_date > today,
                and_(Appointment.appointment_date == today, Appointment.appointment_time >= current_time)
            )
        ).order_by(Appointment.appointment_date.asc(), Appointment.appointment_time.asc()).all()

        return {
            "period": {
                "start": today.isoformat(),
                "end": period_end.isoformat()
            },
            "total_appointments": len(appointments),
            "appointments": [appt.to_dict() for appt in appointments]
        }

    @staticmethod
    def get_appointment_stats(db: Session, now: datetime) -> Dict[str, Any]:
        """All-time counts by status plus the no-show rate of the last 30 days."""
        appointments = db.query(Appointment).all()

        by_status = {"pending": 0, "confirmed": 0, "completed": 0, "cancelled": 0, "no-show": 0}
        for appt in appointments:
            by_status[appt.status] = by_status.get(appt.status, 0) + 1

        month_ago = now.date() - timedelta(days=NO_SHOW_RATE_DAYS)
        recent = [appt for appt in appointments if appt.appointment_date >= month_ago]
        completed_30d = sum(1 for appt in recent if appt.status == "completed")
        no_show_30d = sum(1 for appt in recent if appt.status == "no-show")
        finished_30d = completed_30d + no_show_30d
        no_show_rate = round(no_show_30d / finished_30d * 100) if finished_30d > 0 else 0

        return {
            "total": len(appointments),
            "pending": by_status["pending"],
            "confirmed": by_status["confirmed"],
            "completed": by_status["completed"],
            "cancelled": by_status["cancelled"],
            "no_show": by_status["no-show"],
            "no_show_rate": no_show_rate,
        }
