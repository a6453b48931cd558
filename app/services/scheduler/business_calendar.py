# app/services/scheduler/business_calendar.py
"""Resolves the business opening window for a calendar date"""
from datetime import date
from typing import Optional
import logging

from app.services.catalog.catalog_repository import CatalogRepository
from app.services.scheduler.types import CLOSED, EffectiveHours
from app.utils.time_utils import is_valid_time, time_to_minutes

logger = logging.getLogger(__name__)


def _window_or_closed(open_time: Optional[str], close_time: Optional[str]) -> EffectiveHours:
    if not is_valid_time(open_time) or not is_valid_time(close_time):
        return CLOSED
    start = time_to_minutes(open_time)
    end = time_to_minutes(close_time)
    if start >= end:
        return CLOSED
    return EffectiveHours(open=True, start=start, end=end)


class BusinessCalendar:
    """
    Holiday for the date wins: closed, or its custom hours when both are set.
    A holiday without custom hours falls through to the weekly schedule.
    Missing or malformed configuration is treated as closed, never as open.
    """

    def __init__(self, catalog: CatalogRepository):
        self.catalog = catalog

    def get_effective_hours(self, day: date) -> EffectiveHours:
        holiday = self.catalog.get_holiday(day)
        if holiday:
            if holiday.is_closed:
                return CLOSED
            if holiday.custom_open_time and holiday.custom_close_time:
                return _window_or_closed(holiday.custom_open_time, holiday.custom_close_time)

        hours = self.catalog.get_business_hours(day.weekday())
        if hours is None:
            if not self.catalog.has_business_hours():
                logger.warning("No business hours configured, treating %s as closed", day)
            return CLOSED
        if hours.is_closed:
            return CLOSED

        return _window_or_closed(hours.open_time, hours.close_time)
