# app/models/business.py
"""Business-wide calendar configuration: weekly hours and holidays"""
from sqlalchemy import Column, String, Boolean, DateTime, Date, Integer, CheckConstraint
from sqlalchemy.sql import func
import uuid
from app.models.base import Base


class BusinessHours(Base):
    """Singleton weekly schedule, one row per weekday"""
    __tablename__ = "business_hours"
    __table_args__ = (
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_business_hours_day_of_week"),
    )

    id = Column(Integer, primary_key=True)
    day_of_week = Column(Integer, nullable=False, unique=True)  # 0=Monday, 6=Sunday
    open_time = Column(String(5), nullable=True)  # HH:MM format
    close_time = Column(String(5), nullable=True)  # HH:MM format
    is_closed = Column(Boolean, default=False, nullable=False)

    def __repr__(self):
        return f"<BusinessHours(day={self.day_of_week}, {self.open_time}-{self.close_time})>"


class Holiday(Base):
    """Date override: full closure or custom opening hours"""
    __tablename__ = "holidays"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    date = Column(Date, nullable=False, unique=True)
    name = Column(String(200), nullable=False)
    is_closed = Column(Boolean, default=True, nullable=False)
    custom_open_time = Column(String(5), nullable=True)
    custom_close_time = Column(String(5), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Holiday(date={self.date}, name={self.name}, closed={self.is_closed})>"
