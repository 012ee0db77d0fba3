from typing import Any, Dict, Optional
from fastapi import status

class BaseAPIException(Exception):
    """
    Base class for every custom error raised by the application.
    Keeps the error format rendered to the client consistent.
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
# 1. COMMON ERRORS
# =========================================================

class PermissionDeniedException(BaseAPIException):
    """403: the request is not allowed (e.g. failed anti-forgery check)"""
    def __init__(self, message: str = "Permission denied"):
        super().__init__(
            message=message,
            code="PERMISSION_DENIED",
            status_code=status.HTTP_403_FORBIDDEN
        )

class NotFoundException(BaseAPIException):
    """404: resource not found"""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND
        )

# =========================================================
# 2. STORAGE ERRORS
# =========================================================

class StorageError(BaseAPIException):
    """
    Raised when saving to or deleting from the database fails
    (constraint violation, lost connection, ...).

    The underlying SQLAlchemy error is chained as __cause__ and logged where
    it is caught; only the generic message is ever shown to users.
    """
    def __init__(self, message: str, details: dict = None):
        super().__init__(
            message=message,
            code="STORAGE_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details
        )
