"""Custom exceptions for Inkwell.

Each exception maps to one HTTP status in main.py:
- ValidationError     -> 400
- DatabaseError       -> 400 (message from the database passed through)
- AuthenticationError -> 401
- InvalidTokenError   -> 403
- ResourceNotFound    -> 404

OAuthError never reaches a handler; the Google callback turns it into a
redirect to the frontend error page.
"""


class InkwellError(Exception):
    """Base exception for all Inkwell errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(InkwellError):
    """Request data failed schema validation."""


class AuthenticationError(InkwellError):
    """Missing token or bad credentials."""


class InvalidTokenError(InkwellError):
    """Bearer token is malformed, forged or expired."""


class ResourceNotFound(InkwellError):
    """Resource does not exist or is not owned by the requester."""


class DatabaseError(InkwellError):
    """The database backend rejected a query."""


class ConfigurationError(InkwellError):
    """Required settings are missing for the selected backend."""


class OAuthError(InkwellError):
    """The Google sign-in flow failed. Never shown to the client."""
