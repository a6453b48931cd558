#!/usr/bin/env python3
"""
Script to seed a salon schedule: weekly hours, services, staff and a holiday
Usage: python -m app.scripts.seed_schedule
"""
import sys
from datetime import date
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config.database import SessionLocal, create_tables
from app.models.business import BusinessHours, Holiday
from app.models.service import Service
from app.models.staff import Staff

DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

# Business hours (Monday=0, Sunday=6)
BUSINESS_HOURS = [
    {"day_of_week": 0, "open_time": "09:00", "close_time": "17:00", "is_closed": False},  # Monday
    {"day_of_week": 1, "open_time": "09:00", "close_time": "17:00", "is_closed": False},  # Tuesday
    {"day_of_week": 2, "open_time": "09:00", "close_time": "17:00", "is_closed": False},  # Wednesday
    {"day_of_week": 3, "open_time": "09:00", "close_time": "19:00", "is_closed": False},  # Thursday
    {"day_of_week": 4, "open_time": "09:00", "close_time": "19:00", "is_closed": False},  # Friday
    {"day_of_week": 5, "open_time": "10:00", "close_time": "16:00", "is_closed": False},  # Saturday
    {"day_of_week": 6, "open_time": None, "close_time": None, "is_closed": True},  # Sunday
]

SERVICES = [
    {"name": "Haircut", "description": "Wash, cut and style", "price": 45, "duration": 60, "display_order": 1},
    {"name": "Beard Trim", "description": "Shape and tidy", "price": 20, "duration": 30, "display_order": 2},
    {"name": "Colour", "description": "Full colour with toner", "price": 120, "duration": 120, "display_order": 3},
]


def seed_schedule(db: Session, holiday_date: date = date(2026, 12, 25)) -> dict:
    """Insert the demo schedule into an empty database and return what was created"""
    if db.query(BusinessHours).count() > 0:
        raise ValueError("Business hours already exist, refusing to seed twice")

    for hours_data in BUSINESS_HOURS:
        db.add(BusinessHours(**hours_data))

    services = [Service(**service_data) for service_data in SERVICES]
    db.add_all(services)
    db.flush()  # Get the IDs without committing

    haircut, beard_trim, colour = services
    staff = [
        # Works the business hours every open day
        Staff(name="Alex Morgan", role="stylist", services=[haircut.id, colour.id]),
        # Mornings only, off on Wednesday and Saturday
        Staff(
            name="Sam Lee",
            role="barber",
            services=[haircut.id, beard_trim.id],
            schedule={
                "monday": {"start": "09:00", "end": "13:00"},
                "tuesday": {"start": "09:00", "end": "13:00"},
                "wednesday": None,
                "thursday": {"start": "09:00", "end": "13:00"},
                "friday": {"start": "09:00", "end": "13:00"},
                "saturday": None,
            },
        ),
    ]
    db.add_all(staff)

    holiday = Holiday(date=holiday_date, name="Christmas Day", is_closed=True)
    db.add(holiday)

    db.commit()

    return {
        "services": [service.id for service in services],
        "staff": [member.id for member in staff],
        "holiday": holiday.date.isoformat(),
    }


def main():
    create_tables()
    db: Session = SessionLocal()

    try:
        created = seed_schedule(db)
    except (SQLAlchemyError, ValueError) as e:
        db.rollback()
        print(f"\n❌ Error seeding schedule: {e}")
        sys.exit(1)
    finally:
        db.close()

    print("\n" + "=" * 60)
    print("SCHEDULE SEEDED SUCCESSFULLY!")
    print("=" * 60)
    print(f"\nBusiness Hours:")
    for hours_data in BUSINESS_HOURS:
        day_name = DAYS[hours_data["day_of_week"]]
        if hours_data["is_closed"]:
            print(f"  {day_name}: CLOSED")
        else:
            print(f"  {day_name}: {hours_data['open_time']} - {hours_data['close_time']}")
    print(f"\nServices: {', '.join(created['services'])}")
    print(f"Staff: {', '.join(created['staff'])}")
    print(f"Holiday: {created['holiday']}")
    print()


if __name__ == "__main__":
    main()
