"""
Public booking API
File: app/api/v1/public/appointments.py
"""
from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_scheduler
from app.schemas.booking import BookingRequest
from app.services.scheduler.scheduler_service import SchedulerService

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def book_appointment(
        request: BookingRequest,
        scheduler: SchedulerService = Depends(get_scheduler)
):
    """
    Book an appointment.

    400 when the request cannot be honoured (closed day, outside hours, past),
    409 when the slot was taken after the customer saw it.
    """
    appointment = scheduler.book_appointment(request)
    return appointment.to_dict()
