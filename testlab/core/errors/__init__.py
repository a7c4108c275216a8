from .domain import (
    AlreadyMemberError,
    AlreadySharedError,
    ApplicationError,
    AuthenticationError,
    ErrorCode,
    ResourceNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from .handler import ErrorHandler, DefaultErrorHandler
from .http import application_error_handler, application_error_response

# Backend exceptions
from .backend import (
    NO_ROWS_CODE,
    UNIQUE_VIOLATION_CODE,
    AuthApiError,
    BackendConnectionError,
    BackendError,
    BackendPermissionError,
    NoRowsError,
    QueryError,
    UniqueViolationError,
)

__all__ = [
    # Core errors
    "AlreadyMemberError",
    "AlreadySharedError",
    "ApplicationError",
    "AuthenticationError",
    "DefaultErrorHandler",
    "ErrorCode",
    "ErrorHandler",
    "ResourceNotFoundError",
    "UserNotFoundError",
    "ValidationError",
    "application_error_handler",
    "application_error_response",
    # Backend errors
    "NO_ROWS_CODE",
    "UNIQUE_VIOLATION_CODE",
    "AuthApiError",
    "BackendConnectionError",
    "BackendError",
    "BackendPermissionError",
    "NoRowsError",
    "QueryError",
    "UniqueViolationError",
]
