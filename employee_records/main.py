"""
Employee Records Service — FastAPI Application.

This is the entry point for the application. All routers,
exception handlers and the request-logging middleware are
registered here. The storage client is built once at startup.
"""

import logging
import time
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from employee_records.config import get_settings
from employee_records.errors import ServiceError
from employee_records.logging_utils import setup_logging
from employee_records.models.base import Database
from employee_records.api.auth import router as auth_router
from employee_records.api.dashboard import router as dashboard_router
from employee_records.api.employees import router as employees_router
from employee_records.api.health import router as health_router

settings = get_settings()
logger = logging.getLogger("employee_records.request")
error_logger = logging.getLogger("employee_records.errors")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    owns_database = getattr(app.state, "database", None) is None
    if owns_database:
        app.state.database = Database(settings.DATABASE_URL)
    if not app.state.database.is_connected():
        # Keep serving; storage routes answer 503 until it comes back
        logger.warning("database_unavailable_at_startup")
    yield
    if owns_database:
        app.state.database.dispose()
        app.state.database = None


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Role-based employee records with tenure analytics and an audit trail",
    lifespan=lifespan,
)


def error_response(
    request: Request, *, status_code: int, code: str, message: str
) -> JSONResponse:
    payload = {
        "error": {
            "code": code,
            "message": message,
            "request_id": getattr(request.state, "request_id", "unknown"),
        }
    }
    return JSONResponse(status_code=status_code, content=payload)


@app.middleware("http")
async def request_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id") or str(uuid4())
    request.state.request_id = request_id

    start = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers["X-Request-Id"] = request_id
        return response
    finally:
        logger.info(
            "request_complete",
            extra={
                "request_id": request_id,
                "path": request.url.path,
                "method": request.method,
                "status_code": status_code,
                "latency_ms": round((time.perf_counter() - start) * 1000, 2),
                "actor_id": getattr(request.state, "actor_id", None),
            },
        )


@app.exception_handler(ServiceError)
async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
    return error_response(
        request,
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
    )


@app.exception_handler(RequestValidationError)
async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = [
        f"{'.'.join(str(p) for p in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return error_response(
        request,
        status_code=400,
        code="VALIDATION_ERROR",
        message="; ".join(messages),
    )


@app.exception_handler(OperationalError)
async def handle_storage_down(request: Request, exc: OperationalError) -> JSONResponse:
    error_logger.error(
        "storage_operational_error",
        extra={
            "request_id": getattr(request.state, "request_id", "unknown"),
            "path": request.url.path,
        },
    )
    return error_response(
        request,
        status_code=503,
        code="SERVICE_UNAVAILABLE",
        message="Database not connected",
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    error_logger.exception(
        "unhandled_error",
        extra={
            "request_id": getattr(request.state, "request_id", "unknown"),
            "path": request.url.path,
            "method": request.method,
        },
    )
    return error_response(
        request,
        status_code=500,
        code="INTERNAL_ERROR",
        message="Unexpected server error.",
    )


# Register routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(employees_router)
app.include_router(dashboard_router)
