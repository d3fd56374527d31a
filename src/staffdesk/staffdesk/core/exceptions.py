from __future__ import annotations

from typing import Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400

    def __init__(self, message: str = "Validation failed", errors: Optional[Sequence[dict]] = None):
        super().__init__(message)
        self.errors = list(errors or [])


class InvalidReferenceError(DomainError):
    """Raised when a foreign key points to a missing or foreign-tenant row."""

    status_code = 400

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class AuthenticationError(DomainError):
    """Raised when there is no valid session or login credentials are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class ConflictError(DomainError):
    """Raised on uniqueness violations or when dependent rows block a delete."""

    status_code = 400


class NotFoundError(DomainError):
    status_code = 404
