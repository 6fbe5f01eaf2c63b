"""
Custom exceptions for the application.

Every exception carries an explicit ErrorKind so that the HTTP layer can pick a
status code without looking at message text.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Error category used to map exceptions to responses."""

    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION"
    INTERNAL = "INTERNAL"


class FacilityError(Exception):
    """Base exception for the facility manager backend."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(FacilityError):
    """Resource not found."""

    kind = ErrorKind.NOT_FOUND


class ValidationError(FacilityError):
    """Validation error."""

    kind = ErrorKind.VALIDATION


class AuthorizationError(FacilityError):
    """Authentication or authorization failed."""

    kind = ErrorKind.UNAUTHORIZED


class InfrastructureError(FacilityError):
    """Infrastructure-related error (DB, external services, etc.)."""

    kind = ErrorKind.INTERNAL
