"""The demo seed produces a bookable schedule."""

from datetime import date

import pytest

from app.models import BusinessHours, Holiday, Service, Staff
from app.scripts.seed_schedule import seed_schedule
from tests.conftest import NEXT_MONDAY, NEXT_SUNDAY, NEXT_WEDNESDAY


class TestSeedSchedule:

    def test_seeds_hours_services_staff_and_holiday(self, db):
        created = seed_schedule(db, holiday_date=date(2030, 1, 21))

        assert db.query(BusinessHours).count() == 7
        assert db.query(Service).count() == 3
        assert db.query(Staff).count() == 2
        assert db.query(Holiday).one().date == date(2030, 1, 21)
        assert created["holiday"] == "2030-01-21"

    def test_seeded_schedule_drives_availability(self, db, scheduler):
        created = seed_schedule(db, holiday_date=date(2030, 1, 21))
        haircut_id, beard_trim_id, _ = created["services"]
        alex_id, sam_id = created["staff"]

        monday = scheduler.get_available_slots(NEXT_MONDAY, haircut_id)
        assert monday.slots[0].time == "09:00"
        assert monday.slots[-1].time == "16:00"

        assert scheduler.get_available_slots(NEXT_SUNDAY, haircut_id).slots == []
        assert scheduler.get_available_slots(date(2030, 1, 21), haircut_id).slots == []
        assert scheduler.get_available_slots(NEXT_WEDNESDAY, haircut_id, sam_id).slots == []
        # Alex does not do beard trims
        assert scheduler.get_available_slots(NEXT_MONDAY, beard_trim_id, alex_id).slots == []

    def test_refuses_to_seed_twice(self, db):
        seed_schedule(db)
        with pytest.raises(ValueError):
            seed_schedule(db)
