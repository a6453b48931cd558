# app/schemas/__init__.py
from .booking import (
    AppointmentStatus,
    Slot,
    SlotsResult,
    BookingRequest,
    StatusUpdateRequest
)
