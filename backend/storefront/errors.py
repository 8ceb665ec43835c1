"""
Error taxonomy shared by services and routes.

Every exception carries the HTTP status it maps to and a message that is safe
to show to a client. ``main.py`` renders them as ``{"error": message}``.
"""
from typing import Optional


class StorefrontError(Exception):
    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StorefrontError):
    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(StorefrontError):
    status_code = 401
    default_message = "Wrong password"


class AuthorizationError(StorefrontError):
    status_code = 401
    default_message = "Unauthorized"


class RateLimited(StorefrontError):
    status_code = 429
    default_message = "Too many login attempts, try again later."

    def __init__(self, retry_after: int, message: Optional[str] = None):
        self.retry_after = max(1, int(retry_after))
        super().__init__(message)


class NotFound(StorefrontError):
    status_code = 404
    default_message = "Not found"


class Conflict(StorefrontError):
    status_code = 409
    default_message = "Slug already exists"


class StoreError(StorefrontError):
    """Persistence failure. The message never includes driver or SQL details."""

    status_code = 500
    default_message = "Internal error"
