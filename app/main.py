"""
FastAPI application for the appointment scheduler

Public booking endpoints plus the staff dashboard
"""
import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError

from app.config.settings import get_settings
from app.core.exceptions import (
    AppointmentNotFoundError,
    ConflictError,
    SchedulingError,
    StorageError,
    ValidationError,
)
from app.core.middleware import correlation_id_middleware, request_logging_middleware
from app.core.monitoring import health_router
from app.api.v1.router import api_v1_router
from app.utils.my_logging import setup_logging

logger = logging.getLogger(__name__)

settings = get_settings()

ERROR_STATUS_CODES = {
    ValidationError: 400,
    AppointmentNotFoundError: 404,
    ConflictError: 409,
    StorageError: 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    setup_logging()
    routes = sorted(
        (route.path, ",".join(sorted(route.methods)))
        for route in app.routes
        if isinstance(route, APIRoute)
    )
    logger.info(f"{settings.APP_NAME} starting up with {len(routes)} routes")
    for path, methods in routes:
        logger.debug(f"  {methods:12} {path}")

    yield

    # Shutdown
    logger.info(f"{settings.APP_NAME} shutting down")


async def scheduling_error_handler(request: Request, exc: SchedulingError) -> JSONResponse:
    status_code = ERROR_STATUS_CODES.get(type(exc), 400)
    if status_code == 409:
        logger.info(f"Booking conflict on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status_code, content={"detail": exc.message, "error": exc.kind})


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": "Storage temporarily unavailable, please retry", "error": StorageError.kind},
    )


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title=settings.APP_NAME,
        description="Salon appointment scheduling: slot availability and race-free booking",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH"],
        allow_headers=["*"],
    )

    # Add custom middleware
    app.middleware("http")(correlation_id_middleware)
    app.middleware("http")(request_logging_middleware)

    app.add_exception_handler(SchedulingError, scheduling_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)

    # Include routers
    app.include_router(health_router, prefix="/health", tags=["monitoring"])
    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/")
    def root():
        return {
            "service": settings.APP_NAME,
            "version": "0.1.0",
            "status": "running",
            "endpoints": {
                "api": "/api/v1/",
                "health": "/health",
                "docs": "/docs" if settings.DEBUG else "disabled"
            }
        }

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
