# app/services/catalog/catalog_repository.py
"""Read-only lookups for services, staff, business hours and holidays"""
from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session

from app.models.service import Service
from app.models.staff import Staff
from app.models.business import BusinessHours, Holiday


class CatalogRepository:
    """
    Read-through accessor for scheduling configuration.

    Every call hits the database, so edits made by the admin side are visible
    on the next request without any cache to invalidate.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_service(self, service_id: str) -> Optional[Service]:
        return self.db.get(Service, service_id)

    def list_active_services(self) -> List[Service]:
        return self.db.query(Service).filter(
            Service.is_active == True  # noqa: E712
        ).order_by(Service.display_order.asc(), Service.name.asc()).all()

    def get_staff(self, staff_id: str) -> Optional[Staff]:
        return self.db.get(Staff, staff_id)

    def list_active_staff(self) -> List[Staff]:
        return self.db.query(Staff).filter(
            Staff.is_active == True  # noqa: E712
        ).order_by(Staff.name.asc(), Staff.id.asc()).all()

    def has_business_hours(self) -> bool:
        return self.db.query(BusinessHours.id).first() is not None

    def get_business_hours(self, day_of_week: int) -> Optional[BusinessHours]:
        return self.db.query(BusinessHours).filter(
            BusinessHours.day_of_week == day_of_week
        ).first()

    def get_holiday(self, day: date) -> Optional[Holiday]:
        return self.db.query(Holiday).filter(Holiday.date == day).first()
