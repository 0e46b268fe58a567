"""
Error taxonomy for the Bookshelf API.

Every error raised by a resolver carries a stable ``code``. graphql-core copies
the ``extensions`` attribute of the original exception into the error entry of
the response, so clients see::

    {"message": "User not found", "extensions": {"code": "USER_NOT_FOUND"}, ...}
"""

from __future__ import annotations


class BookshelfError(Exception):
    """Base class for errors surfaced through the GraphQL ``errors`` array."""

    code = "INTERNAL_ERROR"
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def extensions(self) -> dict[str, str]:
        return {"code": self.code}


class ValidationError(BookshelfError):
    code = "VALIDATION_ERROR"
    default_message = "Invalid input"


class DuplicateUsername(BookshelfError):
    code = "DUPLICATE_USERNAME"
    default_message = "Username already exists"


class UserNotFound(BookshelfError):
    code = "USER_NOT_FOUND"
    default_message = "User not found"


class InvalidCredentials(BookshelfError):
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid password"


class NotFound(BookshelfError):
    code = "NOT_FOUND"
    default_message = "Not found"


class StoreUnavailable(BookshelfError):
    code = "STORE_UNAVAILABLE"
    default_message = "Store unavailable"


class StoreError(BookshelfError):
    """Any other store failure; the message never carries SQL or parameters."""

    code = "STORE_ERROR"
    default_message = "Store operation failed"


class ConfigurationError(Exception):
    """Raised at boot when required configuration is missing or invalid."""

    pass
