"""JWT token service.

Tokens are HS256-signed and carry the claims:
- id: user id
- email: user email
- iat: issued-at (Unix timestamp)
- exp: expiry (Unix timestamp), jwt_expiry_minutes after iat

There are no refresh tokens. After expiry the user has to log in again.
"""

import jwt
from pydantic import ValidationError as PydanticValidationError

from ..config import settings
from ..utils import isodatetime
from .schemas import TokenPayload, UserResponse

ALGORITHM = "HS256"


def generate_access_token(user: UserResponse) -> str:
    """
    Generate a signed access token for a user.

    Args:
        user: User the token is issued to

    Returns:
        Encoded JWT string
    """
    iat = isodatetime.now_unix()
    payload = {
        "id": user.id,
        "email": user.email,
        "iat": iat,
        "exp": iat + settings.jwt_expiry_minutes * 60,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=ALGORITHM)


def validate_access_token(token: str) -> TokenPayload:
    """
    Validate signature and expiry of an access token.

    Args:
        token: Encoded JWT string

    Returns:
        Decoded claims

    Raises:
        jwt.ExpiredSignatureError: If the token has expired
        jwt.InvalidTokenError: If the token is malformed, forged or lacks claims
    """
    payload = jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[ALGORITHM],
        options={"require": ["exp", "iat"]},
    )

    try:
        return TokenPayload.model_validate(payload)
    except PydanticValidationError as e:
        raise jwt.InvalidTokenError(f"Token claims are invalid: {e.error_count()} error(s)") from e
