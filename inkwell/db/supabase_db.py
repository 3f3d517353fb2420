"""Supabase database backend.

Queries go through the supabase-py table API. Rejections from PostgREST
(postgrest.exceptions.APIError) are re-raised as DatabaseError carrying the
service's message, which handlers return to the client as a 400.
"""

import logging
from typing import Any

from postgrest.exceptions import APIError
from supabase import Client, create_client

from . import Database
from .posts import PostOperations
from .users import UserOperations
from ..exceptions import DatabaseError

logger = logging.getLogger(__name__)


def _execute(query) -> list[dict]:
    """Execute a query builder and return its rows.

    Raises:
        DatabaseError: If the service rejects the query
    """
    try:
        response = query.execute()
    except APIError as e:
        message = e.message or str(e)
        logger.error(f"Supabase error: {message}")
        raise DatabaseError(message, {"code": e.code}) from e
    return response.data or []


class SupabaseDatabase(Database):
    """Database gateway backed by a hosted Supabase project."""

    backend = "supabase"

    def __init__(self, client: Client):
        """Initialize with a supabase client.

        Args:
            client: Client from supabase.create_client(), or a test double
        """
        super().__init__()
        self.client = client

    @classmethod
    def from_credentials(cls, url: str, key: str) -> "SupabaseDatabase":
        """Create a gateway for the project at url using key."""
        return cls(create_client(url, key))

    def _create_user_operations(self) -> "SupabaseUserOperations":
        return SupabaseUserOperations(self.client)

    def _create_post_operations(self) -> "SupabasePostOperations":
        return SupabasePostOperations(self.client)


class SupabaseUserOperations(UserOperations):
    """User operations for Supabase."""

    def __init__(self, client: Client):
        self._client = client

    def get_by_email(self, email: str) -> dict | None:
        rows = _execute(
            self._client.table("users").select("*").eq("email", email).limit(1)
        )
        return rows[0] if rows else None

    def get_by_id(self, user_id: int) -> dict | None:
        rows = _execute(
            self._client.table("users").select("*").eq("id", user_id).limit(1)
        )
        return rows[0] if rows else None

    def create(self, name: str, email: str, password: str | None) -> dict:
        rows = _execute(
            self._client.table("users").insert(
                {"name": name, "email": email, "password": password}
            )
        )
        if not rows:
            raise DatabaseError("Insert returned no row", {"table": "users"})
        return rows[0]


class SupabasePostOperations(PostOperations):
    """Post operations for Supabase."""

    def __init__(self, client: Client):
        self._client = client

    def list_by_owner(self, user_id: int) -> list[dict]:
        return _execute(
            self._client.table("posts")
            .select("*")
            .eq("user_id", user_id)
            .order("id", desc=True)
        )

    def create(self, title: str, content: str, user_id: int) -> dict:
        rows = _execute(
            self._client.table("posts").insert(
                {"title": title, "content": content, "user_id": user_id}
            )
        )
        if not rows:
            raise DatabaseError("Insert returned no row", {"table": "posts"})
        return rows[0]

    def update_owned(self, post_id: int, user_id: int, data: dict[str, Any]) -> dict | None:
        values = {
            k: v for k, v in data.items()
            if v is not None and k not in {"id", "user_id", "created_at"}
        }
        rows = _execute(
            self._client.table("posts")
            .update(values)
            .eq("id", post_id)
            .eq("user_id", user_id)
        )
        return rows[0] if rows else None

    def delete_owned(self, post_id: int, user_id: int) -> bool:
        rows = _execute(
            self._client.table("posts")
            .delete()
            .eq("id", post_id)
            .eq("user_id", user_id)
        )
        return len(rows) > 0
