# app/utils/time_utils.py
"""Helpers for business-local dates and HH:MM clock times"""
import re
from datetime import date, datetime
from typing import Optional, Union
from zoneinfo import ZoneInfo

from app.config.settings import get_settings

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

WEEKDAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_valid_time(value: Optional[str]) -> bool:
    return bool(value) and bool(_TIME_RE.match(value))


def time_to_minutes(value: str) -> int:
    """'09:30' -> 570"""
    match = _TIME_RE.match(value or "")
    if not match:
        raise ValueError(f"Time must be in HH:MM format, got {value!r}")
    return int(match.group(1)) * MINUTES_PER_HOUR + int(match.group(2))


def minutes_to_time(minutes: int) -> str:
    """570 -> '09:30'"""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"Minutes out of range for a single day: {minutes}")
    return f"{minutes // MINUTES_PER_HOUR:02d}:{minutes % MINUTES_PER_HOUR:02d}"


def parse_date(value: Union[str, date]) -> date:
    """Accept a date or a strict YYYY-MM-DD string"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_RE.match(value.strip()):
        raise ValueError(f"Date must be in YYYY-MM-DD format, got {value!r}")
    return date.fromisoformat(value.strip())


def weekday_name(day: date) -> str:
    return WEEKDAY_NAMES[day.weekday()]


def business_now() -> datetime:
    """Current wall-clock time in the business timezone, timezone-naive"""
    tz = ZoneInfo(get_settings().BUSINESS_TIMEZONE)
    return datetime.now(tz).replace(tzinfo=None)
