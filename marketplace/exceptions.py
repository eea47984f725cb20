"""Domain errors raised by services and repositories.

Each error carries the HTTP status it maps to; the application's exception
handlers render any of them as ``{"error": message}``.
"""

from fastapi import status


class MarketplaceError(Exception):
    """Base class for all errors the API reports to clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(MarketplaceError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthError(MarketplaceError):
    """No usable credentials were supplied."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access denied. No token provided."


class InvalidTokenError(AuthError):
    """Bearer token has a bad signature, a malformed payload, or has expired."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid or expired token"


class ForbiddenError(MarketplaceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(MarketplaceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(MarketplaceError):
    """A unique field already holds the submitted value."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class DuplicateEmailError(ConflictError):
    default_message = "Email already registered"


class StoreError(MarketplaceError):
    """The underlying database failed."""

    default_message = "Database error"


class CorruptHashError(MarketplaceError):
    """A stored password hash could not be parsed."""

    default_message = "Stored credentials are unreadable"
