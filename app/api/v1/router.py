"""
API v1 router setup
Organized into: public (booking widget) and dashboard (staff) routes
"""
from fastapi import APIRouter

from app.api.v1.public import availability, services, appointments as public_appointments
from app.api.v1.dashboard import appointments as dashboard_appointments

api_v1_router = APIRouter()

# ============================================================================
# PUBLIC ROUTES
# ============================================================================
api_v1_router.include_router(
    services.router,
    prefix="/public/services",
    tags=["Public"]
)

api_v1_router.include_router(
    availability.router,
    prefix="/public/availability",
    tags=["Public"]
)

api_v1_router.include_router(
    public_appointments.router,
    prefix="/public/appointments",
    tags=["Public"]
)

# ============================================================================
# DASHBOARD ROUTES
# ============================================================================
api_v1_router.include_router(
    dashboard_appointments.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)


@api_v1_router.get("/", tags=["Info"])
def api_info():
    """API information and route groups."""
    return {
        "version": "1.0",
        "routes": {
            "public": "/api/v1/public (services, availability, booking)",
            "dashboard": "/api/v1/dashboard/appointments"
        }
    }
