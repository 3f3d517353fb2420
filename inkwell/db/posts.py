"""Post operations interface.

Backends subclass PostOperations. Rows are plain dicts with the columns
id, title, content, user_id, created_at.
"""

from typing import Any


class PostOperations:
    """Post table operations, always scoped to an owner."""

    def list_by_owner(self, user_id: int) -> list[dict]:
        """List posts owned by user_id, newest (highest id) first."""
        raise NotImplementedError

    def create(self, title: str, content: str, user_id: int) -> dict:
        """Insert a post owned by user_id and return the created row."""
        raise NotImplementedError

    def update_owned(self, post_id: int, user_id: int, data: dict[str, Any]) -> dict | None:
        """Update a post only if user_id owns it.

        Returns:
            The updated row, or None when no row matched id and owner
        """
        raise NotImplementedError

    def delete_owned(self, post_id: int, user_id: int) -> bool:
        """Delete a post only if user_id owns it.

        Returns:
            True if a row was deleted
        """
        raise NotImplementedError
