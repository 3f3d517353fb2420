"""Authentication module for Inkwell.

This module provides authentication and authorization functionality:
- Schema validation for auth operations
- JWT token generation and validation
- Password hashing and verification
- Authentication decorator for protected endpoints
- Google sign-in

Auth endpoints (top-level routes):
- POST /signup - Register with email and password
- POST /login - Authenticate and return JWT token
- GET /profile - Get current user info
- GET /auth/google - Start Google sign-in
- GET /auth/google/callback - Complete Google sign-in
"""

from . import schemas, token

__all__ = ["schemas", "token"]
