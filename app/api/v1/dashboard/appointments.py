# ============================================================================
# FILE: app/api/v1/dashboard/appointments.py
# Dashboard appointment endpoints - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Query, Path
from sqlalchemy.orm import Session
from datetime import date, datetime
from typing import Callable, Optional

from app.api.dependencies import get_appointment_service, get_clock
from app.config.database import get_db
from app.schemas.booking import AppointmentStatus, StatusUpdateRequest
from app.services.appointment.appointment_query_service import AppointmentQueryService
from app.services.appointment.appointment_service import AppointmentService

router = APIRouter(prefix="/appointments")


@router.get("")
def list_appointments(
        date: Optional[date] = Query(None, description="Only appointments on this day"),
        email: Optional[str] = Query(None, description="Only appointments booked with this email"),
        status: Optional[AppointmentStatus] = Query(None, description="Filter by status"),
        skip: int = Query(0, ge=0, description="Number of records to skip"),
        limit: int = Query(50, ge=1, le=100, description="Number of records to return"),
        db: Session = Depends(get_db)
):
    """
    Appointments for one day, for one customer email, or paginated across all days.
    """
    if date:
        return {"appointments": AppointmentQueryService.get_appointments_by_date(db, date)}

    if email:
        return {"appointments": AppointmentQueryService.get_appointments_by_email(db, email)}

    return AppointmentQueryService.list_appointments(
        db=db,
        status=status.value if status else None,
        skip=skip,
        limit=limit
    )


@router.get("/needing-action")
def get_appointments_needing_action(
        db: Session = Depends(get_db),
        clock: Callable[[], datetime] = Depends(get_clock)
):
    """Confirmed appointments that are over and still need an outcome."""
    return {"appointments": AppointmentQueryService.get_appointments_needing_action(db, clock())}


@router.get("/upcoming/week")
def get_week_appointments(
        db: Session = Depends(get_db),
        clock: Callable[[], datetime] = Depends(get_clock)
):
    return AppointmentQueryService.get_upcoming_appointments(db, clock(), days=7)


@router.get("/stats/summary")
def get_appointment_stats(
        db: Session = Depends(get_db),
        clock: Callable[[], datetime] = Depends(get_clock)
):
    return AppointmentQueryService.get_appointment_stats(db, clock())


@router.get("/{appointment_id}")
def get_appointment(
        appointment_id: str = Path(..., description="The appointment ID"),
        db: Session = Depends(get_db)
):
    result = AppointmentQueryService.get_appointment(db, appointment_id)

    if not result:
        raise HTTPException(status_code=404, detail="Appointment not found")

    return result


@router.patch("/{appointment_id}/status")
def update_appointment_status(
        body: StatusUpdateRequest,
        appointment_id: str = Path(..., description="The appointment ID"),
        service: AppointmentService = Depends(get_appointment_service)
):
    """
    Move an appointment to a new status.
    Invalid transitions return 400.
    """
    appointment = service.update_status(appointment_id, body.status.value)
    return appointment.to_dict()


@router.post("/{appointment_id}/cancel")
def cancel_appointment(
        appointment_id: str = Path(..., description="The appointment ID"),
        service: AppointmentService = Depends(get_appointment_service)
):
    """Cancel a future appointment and free its slot."""
    appointment = service.cancel(appointment_id)
    return appointment.to_dict()
