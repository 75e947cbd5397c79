"""
Request logging middleware and exception handlers for the FamilyMeal API.

Every error response shares one envelope:

    {"success": false, "error": {"code": ..., "message": ..., "details": ...}, "timestamp": ...}
"""

import time
import logging
from datetime import date, datetime, timezone
from uuid import UUID, uuid4
from decimal import Decimal

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.exceptions import FamilyMealError

logger = logging.getLogger("familymeal.middleware")


def make_serializable(obj):
    """Convert validation payloads and error details to JSON-safe values"""
    if isinstance(obj, Decimal):
        return float(obj)
    if isinstance(obj, (date, datetime)):
        return obj.isoformat()
    if isinstance(obj, UUID):
        return str(obj)
    if isinstance(obj, dict):
        return {k: make_serializable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set)):
        return [make_serializable(item) for item in obj]
    if isinstance(obj, Exception):
        return str(obj)
    return obj


def error_response(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    error = {"code": code, "message": message}
    if details:
        error["details"] = make_serializable(details)
    body = {
        "success": False,
        "error": error,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    return JSONResponse(status_code=status_code, content=body)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with an id and its duration; echo both as headers"""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response: Response = await call_next(request)
        except Exception:
            logger.error(
                "%s %s failed after %.4fs [%s]",
                request.method,
                request.url.path,
                time.perf_counter() - started,
                request_id,
                exc_info=True,
            )
            raise

        elapsed = time.perf_counter() - started
        logger.info(
            "%s %s -> %d in %.4fs [%s]",
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
            request_id,
        )
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        return response


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Request validation failed",
        exc.errors(),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    logger.warning("HTTP %d on %s: %s", exc.status_code, request.url.path, exc.detail)
    return error_response(exc.status_code, f"HTTP_{exc.status_code}", str(exc.detail))


async def service_error_handler(request: Request, exc: FamilyMealError):
    """Render planner errors with the status and code they carry"""
    logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    error = exc.to_dict()
    return error_response(exc.http_status, error["code"], error["message"], error.get("details"))


async def general_exception_handler(request: Request, exc: Exception):
    logger.exception("Unexpected error on %s", request.url.path)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred",
    )
