from __future__ import annotations

from typing import Optional, Sequence

from .enums import AuthFailure


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(DomainError):
    """Raised when a request is well-formed but cannot be acted on (e.g. empty update)."""

    status_code = 400


class ValidationError(InvalidRequestError):
    """Raised when input fields fail validation.

    `errors` holds one `{"field": ..., "message": ...}` entry per failed rule.
    """

    status_code = 422

    def __init__(self, message: str = "Validation failed", errors: Optional[Sequence[dict]] = None):
        super().__init__(message)
        self.errors = list(errors or [])


class AuthenticationError(DomainError):
    """Raised when a token or login credentials are rejected."""

    status_code = 401

    def __init__(self, message: str, reason: AuthFailure = AuthFailure.INVALID):
        super().__init__(message)
        self.reason = reason


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class NotFoundError(DomainError):
    """Raised when a resource is missing or not owned by the acting user."""

    status_code = 404


class ConflictError(DomainError):
    """Raised when a write collides with existing state (duplicate email, second check-in)."""

    status_code = 409


class DuplicateKeyError(Exception):
    """Store-level unique constraint violation.

    Raised by repositories; services translate it into `ConflictError`.
    """

    def __init__(self, key: Optional[str] = None):
        super().__init__(f"duplicate key: {key}" if key else "duplicate key")
        self.key = key
