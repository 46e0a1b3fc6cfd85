"""
Name: Domain Exceptions

Responsibilities:
  - Typed internal errors raised by services, repositories and validators
  - Stable error_code plus error_id for log correlation

Collaborators:
  - exception_handlers.py: maps these to AppHTTPException responses
  - logger.py
"""

from uuid import uuid4


class MarketplaceError(Exception):
    """R: Base class for internal errors."""

    error_code: str = "MARKETPLACE_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class UserAlreadyExistsError(MarketplaceError):
    """Username is already registered (Conflict)."""

    error_code: str = "USER_EXISTS"

    def __init__(self, message: str = "user with this username already exists", **kwargs):
        super().__init__(message, **kwargs)


class UserNotFoundError(MarketplaceError):
    """No user for the given username or id."""

    error_code: str = "USER_NOT_FOUND"


class InvalidPasswordError(MarketplaceError):
    """Password does not match the stored hash."""

    error_code: str = "INVALID_PASSWORD"

    def __init__(self, message: str = "invalid password", **kwargs):
        super().__init__(message, **kwargs)


class AdsNotFoundError(MarketplaceError):
    """Listing query matched no ads."""

    error_code: str = "ADS_NOT_FOUND"

    def __init__(self, message: str = "ads not found", **kwargs):
        super().__init__(message, **kwargs)


class PersistenceError(MarketplaceError):
    """Opaque storage fault (connection, query, timeout)."""

    error_code: str = "PERSISTENCE_ERROR"


class InvalidTokenError(MarketplaceError):
    """Session token is malformed, wrongly signed or expired."""

    error_code: str = "INVALID_TOKEN"


class InvalidOptionsError(MarketplaceError):
    """Listing query parameters failed parsing or validation."""

    error_code: str = "INVALID_OPTIONS"


class ImageFetchError(MarketplaceError):
    """Ad image url is unreachable, oversized, of the wrong type or undecodable."""

    error_code: str = "IMAGE_FETCH_ERROR"


class FieldValidationError(MarketplaceError):
    """One or more request fields failed their rules."""

    error_code: str = "FIELD_VALIDATION_ERROR"

    def __init__(self, errors: dict[str, str], message: str = "Request validation failed", **kwargs):
        self.errors = errors
        super().__init__(message, **kwargs)
