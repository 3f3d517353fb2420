"""Authentication service.

Password hashing and the user lookups behind signup, login, profile and
Google sign-in. Functions take the database gateway as their first argument
and raise exceptions from ..exceptions, which the app maps to HTTP responses.
"""

import logging

import bcrypt

from ..config import settings
from ..db import Database
from ..exceptions import AuthenticationError, DatabaseError, ResourceNotFound, ValidationError
from .schemas import SignupRequest, UserResponse

logger = logging.getLogger(__name__)


# ============================================================================
# Password Hashing
# ============================================================================


def hash_password(password: str) -> str:
    """Hash a password with bcrypt using the configured work factor."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_work_factor)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a bcrypt hash."""
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


# ============================================================================
# Users
# ============================================================================


def signup(db: Database, data: SignupRequest) -> UserResponse:
    """
    Register a new email/password user.

    Args:
        db: Database gateway
        data: Validated signup request

    Returns:
        The created user

    Raises:
        ValidationError: If a user with this email already exists
        DatabaseError: If the insert is rejected
    """
    if db.users.get_by_email(data.email) is not None:
        logger.warning(f"Signup attempted for existing email: {data.email}")
        raise ValidationError("User already exists", {"email": data.email})

    row = db.users.create(
        name=data.name,
        email=data.email,
        password=hash_password(data.password),
    )
    return UserResponse.model_validate(row)


def verify_credentials(db: Database, email: str, password: str) -> UserResponse:
    """
    Authenticate a user by email and password.

    Users created through Google have no password and are told to use Google;
    no password comparison happens for them.

    Raises:
        AuthenticationError: If the email is unknown or can't be looked up,
            the password is wrong, or the account has no password
    """
    try:
        row = db.users.get_by_email(email)
    except DatabaseError as e:
        logger.error(f"User lookup failed during login for {email}: {e.message}")
        raise AuthenticationError("Invalid credentials", {"email": email}) from e

    if row is None:
        raise AuthenticationError("Invalid credentials", {"email": email})

    if not row.get("password"):
        raise AuthenticationError("Please login with Google", {"email": email})

    if not verify_password(password, row["password"]):
        raise AuthenticationError("Invalid credentials", {"email": email})

    return UserResponse.model_validate(row)


def get_user_by_id(db: Database, user_id: int) -> UserResponse:
    """
    Get a user by id.

    Raises:
        ResourceNotFound: If the user doesn't exist or can't be read
    """
    try:
        row = db.users.get_by_id(user_id)
    except DatabaseError as e:
        logger.error(f"User lookup failed for id {user_id}: {e.message}")
        raise ResourceNotFound("User not found", {"user_id": user_id}) from e

    if row is None:
        raise ResourceNotFound("User not found", {"user_id": user_id})
    return UserResponse.model_validate(row)


def find_or_create_google_user(db: Database, email: str, name: str) -> UserResponse:
    """
    Resolve a Google profile to a local user, creating it on first login.

    New users are stored with a NULL password. If the insert fails because a
    concurrent sign-in created the same email, that row is used instead.

    Args:
        db: Database gateway
        email: Verified email from the Google profile
        name: Display name from the Google profile

    Raises:
        DatabaseError: If the user can neither be created nor found
    """
    row = db.users.get_by_email(email)
    if row is not None:
        return UserResponse.model_validate(row)

    logger.info(f"Creating user for Google account: {email}")
    try:
        row = db.users.create(name=name or email, email=email, password=None)
    except DatabaseError:
        row = db.users.get_by_email(email)
        if row is None:
            raise
        logger.info(f"Google user {email} was created concurrently, reusing it")

    return UserResponse.model_validate(row)
