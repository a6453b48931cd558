"""
Public availability API - slot listing for the booking widget
File: app/api/v1/public/availability.py
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional

from app.api.dependencies import get_scheduler
from app.schemas.booking import SlotsResult
from app.services.scheduler.scheduler_service import SchedulerService

router = APIRouter()


@router.get("", response_model=SlotsResult)
def get_availability(
        date: str = Query(..., description="Day to list slots for (YYYY-MM-DD)"),
        service_id: str = Query(..., min_length=1, description="Service to book"),
        staff_id: Optional[str] = Query(None, description="Preferred staff member; omit for any"),
        scheduler: SchedulerService = Depends(get_scheduler)
):
    """
    Every candidate start time for the day with its availability.
    Days that cannot be booked return an empty list rather than an error.
    """
    return scheduler.get_available_slots(date, service_id, staff_id or None)
