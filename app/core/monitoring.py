"""Health checks and monitoring endpoints"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import redis

from app.config.database import get_db
from app.config.redis import get_redis
from app.config.settings import get_settings

logger = logging.getLogger(__name__)

health_router = APIRouter()


@health_router.get("/")
def health_check():
    """Basic health check"""
    return {"status": "healthy", "service": get_settings().APP_NAME}


@health_router.get("/detailed")
def detailed_health_check(db: Session = Depends(get_db)):
    """Detailed health check with dependencies"""
    checks = {
        "api": "healthy",
        "database": "unknown",
        "redis": "unknown",
        "overall": "unknown"
    }

    # Check database
    try:
        db.execute(text("SELECT 1"))
        checks["database"] = "healthy"
    except SQLAlchemyError as e:
        logger.warning(f"Database health check failed: {e}")
        checks["database"] = f"unhealthy: {str(e)}"

    # Redis only matters when it backs the booking lock
    if get_settings().BOOKING_LOCK_BACKEND == "redis":
        try:
            get_redis().ping()
            checks["redis"] = "healthy"
        except redis.RedisError as e:
            logger.warning(f"Redis health check failed: {e}")
            checks["redis"] = f"unhealthy: {str(e)}"
    else:
        checks["redis"] = "disabled"

    # Overall status
    if all(status == "healthy" for status in checks.values() if status not in ("unknown", "disabled")):
        checks["overall"] = "healthy"
    else:
        checks["overall"] = "degraded"

    return checks
