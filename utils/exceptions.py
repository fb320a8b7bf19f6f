"""
Application error taxonomy.

Every error carries an HTTP status, a stable error code and a public message.
`reason` is internal detail for logs and tests; the error handlers never put
it in a response body.
"""
from __future__ import annotations


class AppError(Exception):
    status = 500
    code = "INTERNAL_ERROR"
    message = "An unexpected error occurred"

    def __init__(self, message: str | None = None, reason: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        self.reason = reason


class Unauthenticated(AppError):
    """Missing, invalid, expired or revoked token."""
    status = 401
    code = "UNAUTHENTICATED"
    message = "Authentication required"


class Forbidden(AppError):
    """Valid identity, insufficient role."""
    status = 403
    code = "FORBIDDEN"
    message = "Insufficient role"


class InvalidCredentials(AppError):
    """Unknown email or wrong password. Both look the same from outside."""
    status = 401
    code = "INVALID_CREDENTIALS"
    message = "Invalid credentials"


class DuplicateIdentity(AppError):
    status = 409
    code = "CONFLICT"
    message = "Email already registered"


class NotFound(AppError):
    status = 404
    code = "NOT_FOUND"
    message = "Resource not found"


class InternalFailure(AppError):
    """Unexpected storage or signing failure. Details stay in the log."""


class TokenError(Exception):
    """Base for token verification failures. Never leaves the process as-is."""
    kind = "invalid"


class MalformedToken(TokenError):
    kind = "malformed"


class BadSignature(TokenError):
    kind = "bad_signature"


class ExpiredToken(TokenError):
    kind = "expired"
