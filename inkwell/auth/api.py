"""Authentication API endpoints for Inkwell.

These endpoints handle email/password authentication:
- POST /signup  - Register and return a JWT token
- POST /login   - Authenticate and return a JWT token
- GET  /profile - Get the authenticated user's profile

Google sign-in lives in google.py.
"""

import logging

from flask import Blueprint, g, jsonify

from ..api.validation import validate_request
from ..db import get_db
from . import service, token
from .decorators import auth_required
from .schemas import LoginRequest, LoginResponse, ProfileResponse, SignupRequest, SignupResponse

logger = logging.getLogger(__name__)


# Create blueprint
auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/signup", methods=["POST"])
@validate_request
def signup(data: SignupRequest):
    """
    Register a new user and return a JWT token.

    Example request:
    ```json
    {
        "name": "Abe",
        "email": "a@b.com",
        "password": "123456"
    }
    ```

    Example response (201):
    ```json
    {
        "message": "User registered successfully",
        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
        "user": {"id": 1, "name": "Abe", "email": "a@b.com"}
    }
    ```
    """
    user = service.signup(get_db(), data)
    access_token = token.generate_access_token(user)

    logger.info(f"User registered: {user.email}")

    return jsonify(
        SignupResponse(
            message="User registered successfully",
            token=access_token,
            user=user
        ).model_dump()
    ), 201


@auth_bp.route("/login", methods=["POST"])
@validate_request
def login(data: LoginRequest):
    """
    Authenticate user and return JWT token.

    Returns 401 "Invalid credentials" for an unknown email or wrong password,
    and 401 "Please login with Google" for accounts created through Google.
    """
    user = service.verify_credentials(get_db(), data.email, data.password)
    access_token = token.generate_access_token(user)

    logger.info(f"Successful login: {user.email}")

    return jsonify(
        LoginResponse(token=access_token, user=user).model_dump()
    ), 200


@auth_bp.route("/profile", methods=["GET"])
@auth_required
def profile():
    """Get the profile of the user identified by the bearer token."""
    user = service.get_user_by_id(get_db(), g.user_id)
    return jsonify(ProfileResponse(user=user).model_dump()), 200
