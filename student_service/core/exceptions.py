from typing import Any, Dict, Optional
from fastapi import status


class BaseAPIException(Exception):
    """
    Parent class for every error the API raises on purpose.
    Handlers in core/handlers.py turn it into a ``{"error": message}`` body.
    """
    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


# =========================================================
# CLIENT ERRORS
# =========================================================

class ValidationError(BaseAPIException):
    """400: payload is missing required fields or carries none to update"""
    def __init__(self, message: str = "Invalid data", details: dict = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )


class NotFoundError(BaseAPIException):
    """404: no record with the requested id"""
    def __init__(self, message: str = "Student not found"):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND
        )


class ConflictError(BaseAPIException):
    """409: a write would break a unique constraint (duplicate email)"""
    def __init__(self, message: str = "Email already exists"):
        super().__init__(
            message=message,
            code="CONFLICT",
            status_code=status.HTTP_409_CONFLICT
        )


# =========================================================
# SERVER ERRORS
# =========================================================

class StoreUnavailableError(BaseAPIException):
    """
    503: the database cannot be reached or timed out.
    Not retried here, callers and orchestrators own retry/backoff.
    """
    def __init__(self, message: str = "Service temporarily unavailable"):
        super().__init__(
            message=message,
            code="STORE_UNAVAILABLE",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE
        )
