"""Authentication decorators for protected endpoints.

- @auth_required - Requires a valid JWT bearer token

The decorator stores the token's claims in flask.g:
- g.user_id: User id (int)
- g.email: User email
"""

import logging
from functools import wraps

import jwt
from flask import g, request

from ..exceptions import AuthenticationError, InvalidTokenError
from . import token

logger = logging.getLogger(__name__)


def _bearer_token() -> str | None:
    """Extract the token from 'Authorization: Bearer <token>', if any."""
    auth_header = request.headers.get("Authorization", "")
    parts = auth_header.split(" ")
    if len(parts) < 2 or not parts[1].strip():
        return None
    return parts[1].strip()


def _authenticate_request():
    """
    Shared authentication logic for requests.

    Raises:
        AuthenticationError: If no token was sent (401)
        InvalidTokenError: If the token is malformed, forged or expired (403)
    """
    token_str = _bearer_token()
    if token_str is None:
        logger.warning(f"Unauthenticated request to {request.path}")
        raise AuthenticationError("No token provided", {"code": "missing_auth"})

    try:
        payload = token.validate_access_token(token_str)
    except jwt.ExpiredSignatureError:
        logger.warning("JWT token expired")
        raise InvalidTokenError("Invalid token", {"code": "token_expired"})
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid JWT token: {e}")
        raise InvalidTokenError("Invalid token", {"code": "invalid_token"})

    g.user_id = payload.id
    g.email = payload.email
    logger.debug(f"JWT authentication successful for user {g.user_id}")


def auth_required(f):
    """
    Decorator to require a bearer token for endpoint access.

    Example:
    ```python
    @posts_bp.get("")
    @auth_required
    def list_posts():
        user_id = g.user_id
        ...
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        _authenticate_request()
        return f(*args, **kwargs)

    return wrapper
