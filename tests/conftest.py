"""Shared test fixtures and helpers."""

import os

# Must be set before app.config modules build their engine and settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BOOKING_LOCK_BACKEND"] = "none"

from datetime import date, datetime
from typing import Optional

import pytest
from sqlalchemy.orm import sessionmaker

from app.config.database import build_engine
from app.config.settings import Settings
from app.models import Appointment, Base, BusinessHours, Holiday, Service, Staff
from app.services.scheduler.scheduler_service import SchedulerService

# A Monday; every test date is relative to this pinned "now"
FIXED_NOW = datetime(2030, 1, 7, 8, 0)
TODAY = FIXED_NOW.date()
NEXT_MONDAY = date(2030, 1, 14)
NEXT_TUESDAY = date(2030, 1, 15)
NEXT_WEDNESDAY = date(2030, 1, 16)
NEXT_SATURDAY = date(2030, 1, 12)
NEXT_SUNDAY = date(2030, 1, 13)


def fixed_clock() -> datetime:
    return FIXED_NOW


def make_settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": "sqlite://",
        "SLOT_STEP_MINUTES": 30,
        "BUFFER_MINUTES": 0,
        "MAX_ADVANCE_BOOKING_DAYS": 60,
        "DEFAULT_APPOINTMENT_STATUS": "pending",
        "BOOKING_LOCK_BACKEND": "none",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'scheduler.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def scheduler(db, settings):
    return SchedulerService.for_session(db, settings, fixed_clock)


def make_service(db, name: str = "Haircut", duration: int = 60, is_active: bool = True) -> Service:
    service = Service(name=name, duration=duration, is_active=is_active)
    db.add(service)
    db.commit()
    return service


def make_staff(
    db,
    name: str = "Alex",
    services: Optional[list] = None,
    schedule: Optional[dict] = None,
    is_active: bool = True,
) -> Staff:
    staff = Staff(name=name, services=services or [], schedule=schedule, is_active=is_active)
    db.add(staff)
    db.commit()
    return staff


def set_hours(
    db,
    day_of_week: int,
    open_time: Optional[str] = "09:00",
    close_time: Optional[str] = "17:00",
    is_closed: bool = False,
) -> BusinessHours:
    hours = BusinessHours(
        day_of_week=day_of_week,
        open_time=open_time,
        close_time=close_time,
        is_closed=is_closed,
    )
    db.add(hours)
    db.commit()
    return hours


def weekly_hours(db, open_time: str = "09:00", close_time: str = "17:00") -> None:
    """Monday to Saturday open, Sunday closed."""
    for day_of_week in range(6):
        set_hours(db, day_of_week, open_time, close_time)
    set_hours(db, 6, None, None, is_closed=True)


def make_holiday(
    db,
    day: date,
    name: str = "Holiday",
    is_closed: bool = True,
    custom_open_time: Optional[str] = None,
    custom_close_time: Optional[str] = None,
) -> Holiday:
    holiday = Holiday(
        date=day,
        name=name,
        is_closed=is_closed,
        custom_open_time=custom_open_time,
        custom_close_time=custom_close_time,
    )
    db.add(holiday)
    db.commit()
    return holiday


def make_appointment(
    db,
    service: Service,
    day: date,
    time: str,
    staff: Optional[Staff] = None,
    status: str = "pending",
    duration: Optional[int] = None,
    customer_email: Optional[str] = None,
) -> Appointment:
    """Insert an appointment directly, bypassing the booking checks."""
    appointment = Appointment(
        service_id=service.id,
        service_name=service.name,
        staff_id=staff.id if staff else None,
        staff_name=staff.name if staff else None,
        customer_name="Existing Customer",
        customer_phone="+15550000000",
        customer_email=customer_email,
        appointment_date=day,
        appointment_time=time,
        duration=duration or service.duration,
        status=status,
    )
    db.add(appointment)
    db.commit()
    return appointment


def booking_payload(service: Service, day: date, time: str, staff: Optional[Staff] = None, **extra) -> dict:
    payload = {
        "customer_name": "Jane Doe",
        "customer_phone": "+1 (555) 123-4567",
        "customer_email": "Jane@Example.com",
        "service_id": service.id,
        "staff_id": staff.id if staff else None,
        "date": day.isoformat(),
        "time": time,
    }
    payload.update(extra)
    return payload
