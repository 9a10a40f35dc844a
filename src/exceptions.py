"""
Error kinds raised by the services and rendered by the API layer.

Every error carries a human-readable message and the HTTP status it maps to.
The exception handlers in ``src.main`` turn them into the standard
``{status, data, message}`` envelope.
"""

from fastapi import status


class UserCrudError(Exception):
    """Base exception for all application errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(UserCrudError):
    """Missing or empty required input."""

    status_code = status.HTTP_400_BAD_REQUEST


class MissingHeaderError(ValidationError):
    """Protected request arrived without an Authorization header."""


class MalformedHeaderError(ValidationError):
    """Authorization header does not use the Bearer scheme."""


class ConflictError(ValidationError):
    """A user with the same email already exists."""


class NotFoundError(UserCrudError):
    """No matching user."""

    status_code = status.HTTP_404_NOT_FOUND


class UnauthorizedError(UserCrudError):
    """Bad credential or failed token/issuer check."""

    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidTokenError(UnauthorizedError):
    """Token signature, structure, algorithm or expiry check failed."""


class InternalError(UserCrudError):
    """Store or signing failure."""
