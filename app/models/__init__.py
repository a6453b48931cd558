# app/models/__init__.py
from .base import Base
from .service import Service
from .staff import Staff
from .business import BusinessHours, Holiday
from .appointment import Appointment, ACTIVE_STATUSES, ALL_STATUSES
from .booking_guard import BookingGuard

__all__ = [
    "Base",
    "Service",
    "Staff",
    "BusinessHours",
    "Holiday",
    "Appointment",
    "ACTIVE_STATUSES",
    "ALL_STATUSES",
    "BookingGuard",
]
