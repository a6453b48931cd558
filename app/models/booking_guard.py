# app/models/booking_guard.py
from sqlalchemy import Column, Integer, Date
from app.models.base import Base


class BookingGuard(Base):
    """
    One row per calendar date. Booking commits bump `version` first thing in
    their transaction, which takes a row lock that is held until commit, so
    check-then-insert for the same date is serialized across processes.
    """
    __tablename__ = "booking_guards"

    id = Column(Integer, primary_key=True)
    guard_date = Column(Date, nullable=False, unique=True)
    version = Column(Integer, nullable=False, default=0)
