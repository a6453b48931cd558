"""Tests for settings validation, request schemas and time helpers."""

from datetime import date

import pytest
from pydantic import ValidationError as PydanticValidationError

from app.schemas.booking import AppointmentStatus, BookingRequest, StatusUpdateRequest
from app.utils.time_utils import minutes_to_time, parse_date, time_to_minutes, weekday_name
from tests.conftest import make_settings


class TestSettings:

    def test_defaults(self):
        settings = make_settings()
        assert settings.SLOT_STEP_MINUTES == 30
        assert settings.BUFFER_MINUTES == 0
        assert settings.MAX_ADVANCE_BOOKING_DAYS == 60
        assert settings.DEFAULT_APPOINTMENT_STATUS == "pending"

    @pytest.mark.parametrize("field,value", [
        ("SLOT_STEP_MINUTES", 0),
        ("MAX_ADVANCE_BOOKING_DAYS", 0),
        ("BUFFER_MINUTES", -1),
        ("DEFAULT_APPOINTMENT_STATUS", "completed"),
        ("BOOKING_LOCK_BACKEND", "memcached"),
    ])
    def test_rejects_invalid_values(self, field, value):
        with pytest.raises(PydanticValidationError):
            make_settings(**{field: value})

    def test_lock_backend_is_case_insensitive(self):
        assert make_settings(BOOKING_LOCK_BACKEND="Redis").BOOKING_LOCK_BACKEND == "redis"


def request_data(**overrides):
    data = {
        "customer_name": "  Jane Doe ",
        "customer_phone": "+44 20 7946-0958",
        "customer_email": "JANE@Example.COM",
        "service_id": "svc",
        "date": "2030-01-14",
        "time": "10:00",
    }
    data.update(overrides)
    return data


class TestBookingRequest:

    def test_normalises_fields(self):
        request = BookingRequest(**request_data(staff_id="  ", notes="  "))
        assert request.customer_name == "Jane Doe"
        assert request.customer_phone == "+442079460958"
        assert request.customer_email == "jane@example.com"
        assert request.staff_id is None
        assert request.notes is None
        assert request.date == date(2030, 1, 14)

    @pytest.mark.parametrize("overrides", [
        {"customer_name": "   "},
        {"customer_phone": "020 7946 0958"},
        {"customer_phone": "+12345"},
        {"customer_phone": "+1 555 CALL NOW"},
        {"customer_email": "not-an-email"},
        {"time": "9:00"},
        {"time": "24:00"},
        {"date": "14/01/2030"},
        {"service_id": ""},
    ])
    def test_rejects_malformed_input(self, overrides):
        with pytest.raises(PydanticValidationError):
            BookingRequest(**request_data(**overrides))

    def test_status_update_accepts_known_statuses_only(self):
        assert StatusUpdateRequest(status="no-show").status == AppointmentStatus.NO_SHOW
        with pytest.raises(PydanticValidationError):
            StatusUpdateRequest(status="archived")


class TestTimeUtils:

    def test_conversions(self):
        assert time_to_minutes("09:30") == 570
        assert minutes_to_time(570) == "09:30"
        assert minutes_to_time(0) == "00:00"

    @pytest.mark.parametrize("value", ["9:30", "25:00", "", None])
    def test_time_to_minutes_rejects(self, value):
        with pytest.raises(ValueError):
            time_to_minutes(value)

    def test_minutes_to_time_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            minutes_to_time(24 * 60)

    def test_parse_date(self):
        assert parse_date("2030-01-14") == date(2030, 1, 14)
        assert parse_date(date(2030, 1, 14)) == date(2030, 1, 14)
        with pytest.raises(ValueError):
            parse_date("2030-1-14")

    def test_weekday_name(self):
        assert weekday_name(date(2030, 1, 14)) == "monday"
