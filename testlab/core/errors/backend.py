"""
Exceptions raised by the hosted-backend client.

Each class corresponds to one failure signal of the backend's REST surface
so that callers can react to uniqueness conflicts or missing rows
specifically instead of catching a generic Exception.
"""
from typing import Optional, Dict, Any
from .domain import ApplicationError, ErrorCode


UNIQUE_VIOLATION_CODE = "23505"
NO_ROWS_CODE = "PGRST116"


class BackendError(ApplicationError):
    """Base exception for all backend-related errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.EXTERNAL_SERVICE_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message, error_code, status_code, details)


class BackendConnectionError(BackendError):
    """Raised when the backend cannot be reached."""

    def __init__(
        self,
        url: Optional[str] = None,
        reason: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        message = "Cannot reach backend"
        if url:
            message += f" at {url}"
        if reason:
            message += f": {reason}"

        enriched_details = {"url": url} if url else {}
        if details:
            enriched_details.update(details)

        super().__init__(
            message,
            ErrorCode.SERVICE_UNAVAILABLE,
            503,
            enriched_details
        )


class AuthApiError(BackendError):
    """Raised when an auth endpoint rejects a request."""

    def __init__(
        self,
        message: str,
        status: int = 400,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        enriched_details: Dict[str, Any] = {"status": status}
        if code:
            enriched_details["code"] = code
        if details:
            enriched_details.update(details)

        super().__init__(
            message,
            ErrorCode.UNAUTHORIZED,
            401 if status in (400, 401, 403, 422) else 502,
            enriched_details
        )
        self.status = status
        self.code = code


class QueryError(BackendError):
    """Raised when a data or RPC request fails."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        table: Optional[str] = None,
        hint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
        error_code: ErrorCode = ErrorCode.EXTERNAL_SERVICE_ERROR,
    ) -> None:
        enriched_details: Dict[str, Any] = {}
        if code:
            enriched_details["code"] = code
        if table:
            enriched_details["table"] = table
        if hint:
            enriched_details["hint"] = hint
        if details:
            enriched_details.update(details)

        super().__init__(message, error_code, status_code, enriched_details)
        self.code = code
        self.table = table


class UniqueViolationError(QueryError):
    """Raised when an insert collides with a unique constraint (duplicate key)."""

    def __init__(self, message: str, table: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            message,
            code=UNIQUE_VIOLATION_CODE,
            table=table,
            details=details,
            status_code=409,
            error_code=ErrorCode.RESOURCE_CONFLICT,
        )


class NoRowsError(QueryError):
    """Raised when a single-row read matched nothing."""

    def __init__(self, table: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> None:
        message = "No rows returned"
        if table:
            message += f" from '{table}'"
        super().__init__(
            message,
            code=NO_ROWS_CODE,
            table=table,
            details=details,
            status_code=404,
            error_code=ErrorCode.RESOURCE_NOT_FOUND,
        )


class BackendPermissionError(QueryError):
    """Raised when the backend's access policy rejects the request."""

    def __init__(self, message: str, table: Optional[str] = None, status_code: int = 403, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            message,
            table=table,
            details=details,
            status_code=status_code,
            error_code=ErrorCode.FORBIDDEN,
        )


__all__ = [
    "UNIQUE_VIOLATION_CODE",
    "NO_ROWS_CODE",
    "BackendError",
    "BackendConnectionError",
    "AuthApiError",
    "QueryError",
    "UniqueViolationError",
    "NoRowsError",
    "BackendPermissionError",
]
