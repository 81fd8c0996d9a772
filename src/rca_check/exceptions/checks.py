"""Check-run publishing errors."""

from typing import Optional

from .base import RcaCheckError


class CheckRunError(RcaCheckError):
    """Base class for check-run lifecycle errors."""

    pass


class CheckRunApiError(CheckRunError):
    """Raised when the Checks API rejects a request or cannot be reached."""

    def __init__(self, operation: str, message: str, status_code: Optional[int] = None):
        details = {"operation": operation}
        if status_code is not None:
            details["status"] = str(status_code)
        super().__init__(message, details=details)
        self.operation = operation
        self.status_code = status_code
