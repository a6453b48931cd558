# app/models/staff.py
"""
Staff Model - people who perform services.

`services` is a list of service ids the member may perform (empty = all).
`schedule` maps weekday name -> {"start": "HH:MM", "end": "HH:MM"} or None
(day off). A weekday missing from the mapping, or no schedule at all, means
the member works the business hours that day.
"""
from sqlalchemy import Column, String, Boolean, DateTime, JSON
from sqlalchemy.sql import func
import uuid
from app.models.base import Base


class Staff(Base):
    __tablename__ = "staff"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)
    role = Column(String(100), default="stylist")

    services = Column(JSON, default=list)
    schedule = Column(JSON, nullable=True)

    is_active = Column(Boolean, default=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Staff(id={self.id}, name={self.name})>"

    def can_perform(self, service_id: str) -> bool:
        return not self.services or service_id in self.services
