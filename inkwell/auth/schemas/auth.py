"""Authentication schemas.

Request models are validated by @validate_request; response models shape
the JSON returned by the auth endpoints. User rows from the database carry a
password column, which UserResponse drops (extra keys are ignored).
"""

from pydantic import BaseModel, EmailStr, Field


class SignupRequest(BaseModel):
    """Body of POST /signup."""

    name: str = Field(..., min_length=3, description="Display name")
    email: EmailStr
    password: str = Field(..., min_length=6, description="Plain-text password")


class LoginRequest(BaseModel):
    """Body of POST /login."""

    email: EmailStr
    password: str = Field(..., min_length=6)


class UserResponse(BaseModel):
    """Public view of a user. Never includes the password hash."""

    id: int
    name: str
    email: str


class TokenPayload(BaseModel):
    """Decoded JWT claims."""

    id: int
    email: str
    iat: int
    exp: int


class SignupResponse(BaseModel):
    message: str
    token: str
    user: UserResponse


class LoginResponse(BaseModel):
    token: str
    user: UserResponse


class ProfileResponse(BaseModel):
    user: UserResponse
