"""Tests for the optional Redis fast-path lock."""

import pytest
import redis

from app.services.scheduler.booking_lock import (
    NullBookingLock,
    RedisBookingLock,
    build_booking_lock,
)
from app.schemas.booking import BookingRequest
from app.services.scheduler.scheduler_service import SchedulerService
from tests.conftest import (
    NEXT_MONDAY,
    booking_payload,
    fixed_clock,
    make_service,
    make_settings,
    make_staff,
    weekly_hours,
)


class StubLock:
    def __init__(self, client, name, acquire_result=True, acquire_error=None):
        self.client = client
        self.name = name
        self.acquire_result = acquire_result
        self.acquire_error = acquire_error
        self.released = False

    def acquire(self):
        if self.acquire_error:
            raise self.acquire_error
        return self.acquire_result

    def release(self):
        self.released = True


class StubRedis:
    """Records the locks handed out; stands in for redis.Redis.lock()."""

    def __init__(self, acquire_result=True, acquire_error=None):
        self.acquire_result = acquire_result
        self.acquire_error = acquire_error
        self.locks = []

    def lock(self, name, timeout=None, blocking_timeout=None):
        lock = StubLock(self, name, self.acquire_result, self.acquire_error)
        lock.timeout = timeout
        lock.blocking_timeout = blocking_timeout
        self.locks.append(lock)
        return lock


class TestRedisBookingLock:

    def test_key_per_date_and_staff(self):
        assert RedisBookingLock.key_for(NEXT_MONDAY, "abc") == "booking:2030-01-14:abc:lock"
        assert RedisBookingLock.key_for(NEXT_MONDAY, None) == "booking:2030-01-14:pool:lock"

    def test_acquires_and_releases(self):
        client = StubRedis()
        lock = RedisBookingLock(client, timeout=10, blocking_timeout=2)

        with lock.hold(NEXT_MONDAY, "abc") as held:
            assert held is True

        assert client.locks[0].name == "booking:2030-01-14:abc:lock"
        assert client.locks[0].timeout == 10
        assert client.locks[0].blocking_timeout == 2
        assert client.locks[0].released

    def test_not_acquired_proceeds_without_release(self):
        client = StubRedis(acquire_result=False)
        with RedisBookingLock(client, 10, 2).hold(NEXT_MONDAY, None) as held:
            assert held is False
        assert not client.locks[0].released

    def test_redis_down_degrades_to_database_guard(self):
        client = StubRedis(acquire_error=redis.ConnectionError("refused"))
        with RedisBookingLock(client, 10, 2).hold(NEXT_MONDAY, None) as held:
            assert held is False

    def test_releases_when_block_raises(self):
        client = StubRedis()
        with pytest.raises(RuntimeError):
            with RedisBookingLock(client, 10, 2).hold(NEXT_MONDAY, "abc"):
                raise RuntimeError("boom")
        assert client.locks[0].released


class TestBuildBookingLock:

    def test_none_backend(self):
        assert isinstance(build_booking_lock(make_settings()), NullBookingLock)

    def test_redis_backend(self):
        client = StubRedis()
        lock = build_booking_lock(make_settings(BOOKING_LOCK_BACKEND="redis"), client=client)
        assert isinstance(lock, RedisBookingLock)
        assert lock.client is client


class TestCommitUnderLock:

    def test_booking_holds_lock_for_staff_and_date(self, db):
        weekly_hours(db)
        haircut = make_service(db)
        alex = make_staff(db, "Alex")
        client = StubRedis()
        settings = make_settings(BOOKING_LOCK_BACKEND="redis")
        scheduler = SchedulerService.for_session(db, settings, fixed_clock, build_booking_lock(settings, client))

        scheduler.book_appointment(BookingRequest(**booking_payload(haircut, NEXT_MONDAY, "10:00", alex)))

        assert [lock.name for lock in client.locks] == [f"booking:2030-01-14:{alex.id}:lock"]
        assert client.locks[0].released

    def test_booking_goes_ahead_when_redis_is_down(self, db):
        weekly_hours(db)
        haircut = make_service(db)
        client = StubRedis(acquire_error=redis.ConnectionError("refused"))
        settings = make_settings(BOOKING_LOCK_BACKEND="redis")
        scheduler = SchedulerService.for_session(db, settings, fixed_clock, build_booking_lock(settings, client))

        appointment = scheduler.book_appointment(BookingRequest(**booking_payload(haircut, NEXT_MONDAY, "10:00")))
        assert appointment.id
