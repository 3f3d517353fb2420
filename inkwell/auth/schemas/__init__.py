"""Authentication Pydantic schemas for API validation."""

from .auth import (
    SignupRequest,
    LoginRequest,
    UserResponse,
    TokenPayload,
    SignupResponse,
    LoginResponse,
    ProfileResponse,
)

__all__ = [
    "SignupRequest",
    "LoginRequest",
    "UserResponse",
    "TokenPayload",
    "SignupResponse",
    "LoginResponse",
    "ProfileResponse",
]
