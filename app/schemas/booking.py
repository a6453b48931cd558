# app/schemas/booking.py
from __future__ import annotations
import re
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Optional
from datetime import date as CalendarDate
from enum import Enum

from app.utils.time_utils import is_valid_time

_PHONE_SEPARATORS = re.compile(r"[\s\-().]")


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


class Slot(BaseModel):
    """One candidate start time for the requested service"""
    time: str = Field(..., description="Start time (HH:MM)")
    available: bool = Field(..., description="Whether the slot can still be booked")


class SlotsResult(BaseModel):
    """Every candidate slot of the day, available or not"""
    slots: List[Slot] = Field(default_factory=list)


class BookingRequest(BaseModel):
    """Appointment booking request"""
    customer_name: str = Field(..., min_length=1, max_length=200, description="Customer name")
    customer_phone: str = Field(..., description="Customer phone number with country code")
    customer_email: Optional[EmailStr] = Field(None, description="Customer email")
    service_id: str = Field(..., min_length=1, description="Requested service")
    staff_id: Optional[str] = Field(None, description="Preferred staff member; omit for any")
    date: CalendarDate = Field(..., description="Appointment date (YYYY-MM-DD)")
    time: str = Field(..., description="Start time (HH:MM, 24-hour)")
    notes: Optional[str] = Field(None, max_length=1000, description="Additional notes")

    @field_validator("customer_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Customer name is required")
        return v

    @field_validator("customer_phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        cleaned = _PHONE_SEPARATORS.sub("", v.strip())
        if not cleaned.startswith("+"):
            raise ValueError("Phone number must start with country code (e.g. +1)")
        digits = cleaned[1:]
        if not digits.isdigit():
            raise ValueError("Phone number can only contain digits after the country code")
        if len(digits) < 8 or len(digits) > 15:
            raise ValueError("Phone number should be 8-15 digits including country code")
        return cleaned

    @field_validator("customer_email")
    @classmethod
    def lower_email(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().lower() if v else None

    @field_validator("staff_id")
    @classmethod
    def blank_staff_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        v = v.strip()
        if not is_valid_time(v):
            raise ValueError("Time must be in HH:MM format")
        return v

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class StatusUpdateRequest(BaseModel):
    """Dashboard status change"""
    status: AppointmentStatus = Field(..., description="New appointment status")
