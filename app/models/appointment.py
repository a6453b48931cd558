# app/models/appointment.py
from sqlalchemy import Column, String, Integer, Text, Date, DateTime, ForeignKey, Index, text
from sqlalchemy.sql import func
import uuid
from app.models.base import Base

# Statuses that hold a slot; cancelled / completed / no-show free it
ACTIVE_STATUSES = ("pending", "confirmed")
ALL_STATUSES = ("pending", "confirmed", "completed", "cancelled", "no-show")

_ACTIVE_SQL = text("status IN ('pending', 'confirmed')")


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        # Storage-level double-booking guard for staff-assigned bookings.
        # NULL staff_id never collides, unassigned bookings go through the pool check.
        Index(
            "uq_appointments_active_staff_slot",
            "staff_id",
            "appointment_date",
            "appointment_time",
            unique=True,
            postgresql_where=_ACTIVE_SQL,
            sqlite_where=_ACTIVE_SQL,
        ),
        Index("ix_appointments_date_status", "appointment_date", "status"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # References
    service_id = Column(String(36), ForeignKey("services.id"), nullable=False)
    service_name = Column(String(200), nullable=False)
    staff_id = Column(String(36), ForeignKey("staff.id"), nullable=True)  # NULL = any staff
    staff_name = Column(String(200), nullable=True)

    # Customer info
    customer_name = Column(String(200), nullable=False)
    customer_phone = Column(String(20), nullable=False)
    customer_email = Column(String(255), nullable=True, index=True)

    # Appointment details
    appointment_date = Column(Date, nullable=False)
    appointment_time = Column(String(5), nullable=False)  # HH:MM, business-local
    duration = Column(Integer, nullable=False)  # minutes, snapshot of the service at booking time
    notes = Column(Text, nullable=True)

    # Status tracking
    status = Column(String(20), nullable=False, default="pending")  # pending, confirmed, completed, cancelled, no-show

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    cancelled_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    def __repr__(self):
        return (
            f"<Appointment(id={self.id}, date={self.appointment_date}, "
            f"time={self.appointment_time}, staff={self.staff_id}, status={self.status})>"
        )

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": self.id,
            "service_id": self.service_id,
            "service_name": self.service_name,
            "staff_id": self.staff_id,
            "staff_name": self.staff_name,
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "customer_phone": self.customer_phone,
            "date": self.appointment_date.isoformat(),
            "time": self.appointment_time,
            "duration": self.duration,
            "status": self.status,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "cancelled_at": self.cancelled_at.isoformat() if self.cancelled_at else None,
        }
