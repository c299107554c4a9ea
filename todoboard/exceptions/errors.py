"""
Standard Exception Hierarchy for the Todoboard service

All service exceptions inherit from ServiceError and can be converted to a
FastAPI HTTPException with ``to_http_exception``.
"""
from typing import Any

from fastapi import HTTPException


# ============================================================================
# Base Exception Class
# ============================================================================

class ServiceError(Exception):
    """Base exception for all service errors.

    Attributes:
        message: Human-readable error message
        request_id: Optional request ID for tracing
        context: Dictionary of additional context
        original_error: Optional original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        *,
        request_id: str | None = None,
        context: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message)
        self.message = message
        self.request_id = request_id
        self.context = context or {}
        self.original_error = original_error

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
        }
        if self.request_id:
            result["request_id"] = self.request_id
        if self.context:
            result["context"] = self.context
        if self.original_error:
            result["original_error"] = {
                "type": type(self.original_error).__name__,
                "message": str(self.original_error)
            }
        return result


# ============================================================================
# Common Exception Types
# ============================================================================

class NotFoundError(ServiceError):
    """Raised when a requested resource is not found.

    Attributes:
        resource_type: Type of resource (e.g., "TodoList", "TodoItem")
        resource_id: ID of the resource that was not found
    """

    def __init__(
        self,
        resource_type: str,
        resource_id: str | int,
        *,
        message: str | None = None,
        request_id: str | None = None,
        context: dict[str, Any] | None = None
    ):
        if message is None:
            message = f"{resource_type} with ID '{resource_id}' not found"

        super().__init__(message, request_id=request_id, context=context)
        self.resource_type = resource_type
        self.resource_id = str(resource_id)
        self.context.setdefault("resource_type", resource_type)
        self.context.setdefault("resource_id", str(resource_id))


class ValidationError(ServiceError):
    """Raised when input validation fails.

    Attributes:
        field: Optional field name that failed validation
        value: Optional value that failed validation
    """

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        request_id: str | None = None,
        context: dict[str, Any] | None = None
    ):
        super().__init__(message, request_id=request_id, context=context)
        self.field = field
        self.value = value
        if field is not None:
            self.context.setdefault("field", field)
        if value is not None:
            self.context.setdefault("value", str(value))


class DuplicateError(ServiceError):
    """Raised when attempting to create a duplicate resource."""

    def __init__(
        self,
        resource_type: str,
        field: str,
        value: str,
        *,
        message: str | None = None,
        request_id: str | None = None,
        context: dict[str, Any] | None = None
    ):
        if message is None:
            message = f"{resource_type} with {field} '{value}' already exists"

        super().__init__(message, request_id=request_id, context=context)
        self.resource_type = resource_type
        self.field = field
        self.value = value
        self.context.setdefault("resource_type", resource_type)
        self.context.setdefault("field", field)
        self.context.setdefault("value", value)


class DatabaseError(ServiceError):
    """Raised when a database operation fails."""

    def __init__(
        self,
        message: str,
        *,
        original_error: Exception | None = None,
        operation: str | None = None,
        request_id: str | None = None,
        context: dict[str, Any] | None = None
    ):
        super().__init__(message, request_id=request_id, context=context, original_error=original_error)
        self.operation = operation
        if operation is not None:
            self.context.setdefault("operation", operation)


class AuthenticationError(ServiceError):
    """Raised when credentials or a bearer token are rejected."""

    def __init__(self, message: str = "Invalid credentials", **kwargs):
        super().__init__(message, **kwargs)


class IdentityError(ServiceError):
    """Raised when an identity operation fails validation.

    Attributes:
        errors: Mapping of error code to the list of descriptions, in the shape
            of a validation problem response.
    """

    def __init__(self, errors: dict[str, list[str]], *, message: str | None = None, **kwargs):
        if message is None:
            message = "One or more identity validation errors occurred"
        super().__init__(message, **kwargs)
        self.errors = errors
        self.context.setdefault("errors", errors)


# ============================================================================
# Service-Specific Exceptions
# ============================================================================

class TodoListNotFoundError(NotFoundError):
    """Raised when a to-do list is not found."""

    def __init__(self, list_id: str | int, **kwargs):
        super().__init__("TodoList", list_id, **kwargs)
        self.list_id = list_id


class TodoItemNotFoundError(NotFoundError):
    """Raised when a to-do item is not found."""

    def __init__(self, item_id: str | int, **kwargs):
        super().__init__("TodoItem", item_id, **kwargs)
        self.item_id = item_id


# ============================================================================
# Helper Functions for FastAPI Integration
# ============================================================================

_STATUS_CODES: list[tuple[type[ServiceError], int]] = [
    (NotFoundError, 404),
    (ValidationError, 422),
    (IdentityError, 400),
    (DuplicateError, 409),
    (AuthenticationError, 401),
    (DatabaseError, 500),
]


def status_code_for(exc: ServiceError, default_status_code: int = 500) -> int:
    """Return the HTTP status code for ``exc``, honouring subclasses."""
    for exc_type, status_code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return default_status_code


def to_http_exception(
    exc: ServiceError,
    *,
    default_status_code: int = 500,
    include_context: bool = True
) -> HTTPException:
    """Convert ServiceError to FastAPI HTTPException.

    Args:
        exc: Service error to convert
        default_status_code: Default status code if mapping not found
        include_context: Whether to include exception context in response

    Returns:
        HTTPException with appropriate status code and detail
    """
    status_code = status_code_for(exc, default_status_code)

    detail: dict[str, Any] = {
        "error": exc.__class__.__name__,
        "message": exc.message,
    }

    if isinstance(exc, IdentityError):
        detail["errors"] = exc.errors
    elif include_context and exc.context:
        detail["context"] = exc.context

    if exc.request_id:
        detail["request_id"] = exc.request_id

    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return HTTPException(status_code=status_code, detail=detail, headers=headers)


__all__ = [
    "ServiceError",
    "NotFoundError",
    "ValidationError",
    "DuplicateError",
    "DatabaseError",
    "AuthenticationError",
    "IdentityError",
    "TodoListNotFoundError",
    "TodoItemNotFoundError",
    "status_code_for",
    "to_http_exception",
]
