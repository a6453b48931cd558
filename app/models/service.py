# app/models/service.py
"""
Service Model - bookable treatments (haircut, massage, facial ...)
Duration is the source of truth for slot shape; appointments snapshot it.
"""
from sqlalchemy import Column, String, Numeric, Integer, Boolean, DateTime, Text, CheckConstraint
from sqlalchemy.sql import func
import uuid
from app.models.base import Base


class Service(Base):
    __tablename__ = "services"
    __table_args__ = (
        CheckConstraint("duration > 0", name="ck_services_duration_positive"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Core service details
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=True)

    # Duration in minutes
    duration = Column(Integer, nullable=False)

    # Status and ordering
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    display_order = Column(Integer, default=0)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

    def __repr__(self):
        return f"<Service(id={self.id}, name={self.name}, duration={self.duration})>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": float(self.price) if self.price is not None else None,
            "duration": self.duration,
            "formatted_duration": self.formatted_duration,
            "is_active": self.is_active,
            "display_order": self.display_order,
        }

    @property
    def formatted_duration(self) -> str:
        """Return human-readable duration string"""
        hours = self.duration // 60
        minutes = self.duration % 60

        if hours > 0 and minutes > 0:
            return f"{hours}h {minutes}m"
        elif hours > 0:
            return f"{hours}h"
        else:
            return f"{minutes}m"
