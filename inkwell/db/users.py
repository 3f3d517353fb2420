"""User operations interface.

Backends subclass UserOperations. Rows are plain dicts with the columns
id, name, email, password, created_at. The password column holds a bcrypt
hash, or None for accounts created through Google OAuth.
"""


class UserOperations:
    """User table operations."""

    def get_by_email(self, email: str) -> dict | None:
        """Get user row by email, or None if no user has that email."""
        raise NotImplementedError

    def get_by_id(self, user_id: int) -> dict | None:
        """Get user row by id, or None if it doesn't exist."""
        raise NotImplementedError

    def create(self, name: str, email: str, password: str | None) -> dict:
        """Insert a user and return the created row including its id.

        Raises:
            DatabaseError: If the insert is rejected (e.g. duplicate email)
        """
        raise NotImplementedError
