"""Tests for staff working windows."""

from app.services.catalog.catalog_repository import CatalogRepository
from app.services.scheduler.business_calendar import BusinessCalendar
from app.services.scheduler.staff_availability import StaffAvailabilityResolver
from app.services.scheduler.types import RosterMember, StaffWindow, TimeWindow
from tests.conftest import (
    NEXT_MONDAY,
    NEXT_SUNDAY,
    NEXT_TUESDAY,
    NEXT_WEDNESDAY,
    make_holiday,
    make_service,
    make_staff,
    weekly_hours,
)

MORNINGS = {
    "monday": {"start": "09:00", "end": "13:00"},
    "tuesday": {"start": "07:00", "end": "11:00"},
    "wednesday": None,
    "sunday": {"start": "10:00", "end": "14:00"},
}


def resolver_for(db):
    catalog = CatalogRepository(db)
    return StaffAvailabilityResolver(catalog, BusinessCalendar(catalog))


class TestStaffWindow:

    def test_schedule_entry_gives_window(self, db):
        weekly_hours(db)
        staff = make_staff(db, schedule=MORNINGS)
        window = resolver_for(db).get_staff_window(staff.id, NEXT_MONDAY)
        assert window == StaffWindow(staff.id, True, 540, 780)

    def test_null_entry_is_day_off(self, db):
        weekly_hours(db)
        staff = make_staff(db, schedule=MORNINGS)
        assert not resolver_for(db).get_staff_window(staff.id, NEXT_WEDNESDAY).available

    def test_entry_is_clipped_to_business_hours(self, db):
        weekly_hours(db)
        staff = make_staff(db, schedule=MORNINGS)
        window = resolver_for(db).get_staff_window(staff.id, NEXT_TUESDAY)
        assert (window.start, window.end) == (540, 660)

    def test_no_schedule_defers_to_business_hours(self, db):
        weekly_hours(db)
        staff = make_staff(db, schedule=None)
        window = resolver_for(db).get_staff_window(staff.id, NEXT_MONDAY)
        assert (window.available, window.start, window.end) == (True, 540, 1020)

    def test_weekday_missing_from_schedule_defers_to_business_hours(self, db):
        weekly_hours(db)
        staff = make_staff(db, schedule={"monday": {"start": "09:00", "end": "12:00"}})
        window = resolver_for(db).get_staff_window(staff.id, NEXT_TUESDAY)
        assert (window.start, window.end) == (540, 1020)

    def test_inactive_staff_is_unavailable(self, db):
        weekly_hours(db)
        staff = make_staff(db, is_active=False)
        assert not resolver_for(db).get_staff_window(staff.id, NEXT_MONDAY).available

    def test_unknown_staff_is_unavailable(self, db):
        weekly_hours(db)
        assert not resolver_for(db).get_staff_window("missing", NEXT_MONDAY).available

    def test_business_closure_wins_over_schedule(self, db):
        weekly_hours(db)
        staff = make_staff(db, schedule=MORNINGS)
        # Sunday is closed for the business even though the member lists it
        assert not resolver_for(db).get_staff_window(staff.id, NEXT_SUNDAY).available

    def test_closed_holiday_wins_over_schedule(self, db):
        weekly_hours(db)
        make_holiday(db, NEXT_MONDAY)
        staff = make_staff(db, schedule=MORNINGS)
        assert not resolver_for(db).get_staff_window(staff.id, NEXT_MONDAY).available

    def test_shift_outside_business_hours_is_unavailable(self, db):
        weekly_hours(db)
        staff = make_staff(db, schedule={"monday": {"start": "18:00", "end": "21:00"}})
        assert not resolver_for(db).get_staff_window(staff.id, NEXT_MONDAY).available


class TestRoster:

    def test_lists_every_active_member_with_services(self, db):
        weekly_hours(db)
        haircut = make_service(db, "Haircut")
        alex = make_staff(db, "Alex", services=[haircut.id])
        sam = make_staff(db, "Sam")  # no restriction: performs everything
        make_staff(db, "Lee", is_active=False)

        roster = resolver_for(db).roster(NEXT_MONDAY)
        assert roster == [
            RosterMember(alex.id, TimeWindow(540, 1020), (haircut.id,)),
            RosterMember(sam.id, TimeWindow(540, 1020), ()),
        ]
        assert roster[1].can_perform("anything")
        assert not roster[0].can_perform("colour")

    def test_members_off_that_day_have_no_window(self, db):
        weekly_hours(db)
        haircut = make_service(db)
        alex = make_staff(db, "Alex")
        sam = make_staff(db, "Sam", schedule=MORNINGS)

        roster = resolver_for(db).roster(NEXT_WEDNESDAY)
        windows = {m.staff_id: m.window for m in roster}
        assert windows == {alex.id: TimeWindow(540, 1020), sam.id: None}
        assert not roster[1].can_serve(haircut.id, 600, 660)
