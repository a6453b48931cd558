# app/core/middleware.py
"""Request tracing and access logging"""
import uuid
import time
import logging
from starlette.requests import Request

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


async def correlation_id_middleware(request: Request, call_next):
    """Tag every request with a correlation ID, reusing the caller's if sent"""
    correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
    request.state.correlation_id = correlation_id

    response = await call_next(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


async def request_logging_middleware(request: Request, call_next):
    """One log line per request with status and duration"""
    start_time = time.perf_counter()

    response = await call_next(request)

    duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
    correlation_id = getattr(request.state, "correlation_id", "unknown")
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms}ms)",
        extra={
            "correlation_id": correlation_id,
            "client": request.client.host if request.client else "unknown",
        }
    )

    return response
