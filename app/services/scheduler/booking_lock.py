# app/services/scheduler/booking_lock.py
"""
Optional cross-process fast path around booking commits.

Holding a Redis lock per (date, staff) keeps racing requests from piling up
on the database guard row. The database guard stays authoritative: if Redis is
down or the lock is not acquired in time the commit goes ahead anyway.
"""
from contextlib import contextmanager
from datetime import date
from typing import Iterator, Optional, Union
import logging

import redis

from app.config.redis import RedisKeys, get_redis
from app.config.settings import Settings

logger = logging.getLogger(__name__)

POOL_RESOURCE = "pool"


class NullBookingLock:
    """No-op lock used when BOOKING_LOCK_BACKEND is 'none'"""

    @contextmanager
    def hold(self, day: date, staff_id: Optional[str]) -> Iterator[bool]:
        yield False


class RedisBookingLock:
    def __init__(self, client: redis.Redis, timeout: float, blocking_timeout: float):
        self.client = client
        self.timeout = timeout
        self.blocking_timeout = blocking_timeout

    @staticmethod
    def key_for(day: date, staff_id: Optional[str]) -> str:
        return RedisKeys.BOOKING_LOCK.format(date=day.isoformat(), resource=staff_id or POOL_RESOURCE)

    @contextmanager
    def hold(self, day: date, staff_id: Optional[str]) -> Iterator[bool]:
        """Yields True when the Redis lock is held for the duration of the block"""
        key = self.key_for(day, staff_id)
        lock = self.client.lock(key, timeout=self.timeout, blocking_timeout=self.blocking_timeout)

        try:
            acquired = lock.acquire()
        except redis.RedisError as e:
            logger.warning(f"Booking lock unavailable for {key}, relying on database guard: {e}")
            acquired = False

        if not acquired:
            logger.info(f"Booking lock {key} not acquired, relying on database guard")

        try:
            yield acquired
        finally:
            if acquired:
                try:
                    lock.release()
                except redis.RedisError as e:
                    # lock expired or Redis went away; it times out on its own
                    logger.warning(f"Could not release booking lock {key}: {e}")


BookingLock = Union[NullBookingLock, RedisBookingLock]


def build_booking_lock(settings: Settings, client: Optional[redis.Redis] = None) -> BookingLock:
    """Lock implementation for the configured backend"""
    if settings.BOOKING_LOCK_BACKEND != "redis":
        return NullBookingLock()

    if client is None:
        client = get_redis()

    return RedisBookingLock(
        client,
        timeout=settings.BOOKING_LOCK_TIMEOUT_SECONDS,
        blocking_timeout=settings.BOOKING_LOCK_BLOCKING_TIMEOUT_SECONDS,
    )
