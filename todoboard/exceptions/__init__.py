"""
Exception handlers and standard exceptions for the application.
"""
from todoboard.exceptions.errors import (
    ServiceError,
    NotFoundError,
    ValidationError,
    DuplicateError,
    DatabaseError,
    AuthenticationError,
    IdentityError,
    TodoListNotFoundError,
    TodoItemNotFoundError,
    status_code_for,
    to_http_exception,
)

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
