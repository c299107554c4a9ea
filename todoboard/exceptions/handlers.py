"""
Exception handlers for the application.
"""
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from todoboard.exceptions.errors import (
    AuthenticationError,
    NotFoundError,
    ServiceError,
    ValidationError,
    to_http_exception,
)

logger = logging.getLogger(__name__)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for unhandled exceptions.
    """
    logger.error(
        f"Unhandled exception in {request.method} {request.url.path}: {str(exc)}",
        exc_info=exc,
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred. Please try again or contact support if the issue persists.",
            "path": request.url.path,
            "method": request.method,
        }
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """
    Handler for SQLAlchemy errors that escaped the service layer.
    """
    logger.error(
        f"Database error in {request.method} {request.url.path}: {str(exc)}",
        exc_info=exc,
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": "Database error",
            "detail": "A database operation failed. Please try again or contact support if the issue persists.",
            "path": request.url.path,
            "method": request.method,
        }
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle request validation errors with clear messages.
    """
    errors = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"])
        errors.append(f"{field}: {error['msg']}")

    logger.warning(f"Validation error in {request.method} {request.url.path}: {', '.join(errors)}")
    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation error",
            "detail": "One or more fields failed validation",
            "errors": errors,
            "path": request.url.path,
            "method": request.method,
        }
    )


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """
    Handler for standard ServiceError exceptions.

    Converts the error to the HTTP status code mapped in ``to_http_exception``.
    """
    quiet = isinstance(exc, (NotFoundError, ValidationError, AuthenticationError))
    log_level = logging.WARNING if quiet else logging.ERROR
    logger.log(log_level, f"Service error in {request.method} {request.url.path}: {exc.message}")

    http_exc = to_http_exception(exc)
    return JSONResponse(
        status_code=http_exc.status_code,
        content=http_exc.detail,
        headers=http_exc.headers,
    )


def setup_exception_handlers(app):
    """
    Register exception handlers with the FastAPI app.

    ServiceError is registered before the generic Exception handler so
    that service errors are caught first.
    """
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
