"""Database module for Inkwell.

This module provides the database gateway used by every request handler.
A gateway is an explicitly constructed object with two operation groups:

    db.users.get_by_email(email)          -> dict | None
    db.users.get_by_id(user_id)           -> dict | None
    db.users.create(name, email, password) -> dict

    db.posts.list_by_owner(user_id)                 -> list[dict] (id descending)
    db.posts.create(title, content, user_id)        -> dict
    db.posts.update_owned(post_id, user_id, data)   -> dict | None
    db.posts.delete_owned(post_id, user_id)         -> bool

ARCHITECTURE:
- Backends: SupabaseDatabase (hosted service) and SqliteDatabase (local file)
- The app factory receives a Database instance; tests pass their own
- Handlers reach it through get_db(), never through a module global
- Backend failures are raised as exceptions.DatabaseError

OWNERSHIP:
update_owned() and delete_owned() filter on both id and user_id in a single
statement. A post owned by someone else is indistinguishable from a missing one.
"""

import logging
from typing import TYPE_CHECKING

from flask import current_app

from ..config import Settings
from ..exceptions import ConfigurationError

if TYPE_CHECKING:
    from .posts import PostOperations
    from .users import UserOperations

logger = logging.getLogger(__name__)

EXTENSION_KEY = "inkwell.database"


class Database:
    """
    Database gateway with user and post operations.

    Subclasses provide the backend-specific operation objects through
    _create_user_operations() and _create_post_operations().
    """

    backend = "abstract"

    def __init__(self):
        self._user_ops = None
        self._post_ops = None

    @property
    def users(self) -> "UserOperations":
        """User operations.

        Created on first access and cached.
        """
        if self._user_ops is None:
            self._user_ops = self._create_user_operations()
        return self._user_ops

    @property
    def posts(self) -> "PostOperations":
        """Post operations.

        Created on first access and cached.
        """
        if self._post_ops is None:
            self._post_ops = self._create_post_operations()
        return self._post_ops

    def _create_user_operations(self) -> "UserOperations":
        raise NotImplementedError

    def _create_post_operations(self) -> "PostOperations":
        raise NotImplementedError


def create_database(config: Settings) -> Database:
    """
    Build the database gateway selected by configuration.

    Args:
        config: Application settings

    Returns:
        SupabaseDatabase or SqliteDatabase

    Raises:
        ConfigurationError: If the backend is unknown or its settings are missing
    """
    backend = config.database_backend.lower()

    if backend == "supabase":
        if not config.supabase_url or not config.supabase_key:
            raise ConfigurationError(
                "Supabase backend requires SUPABASE_URL and SUPABASE_KEY",
                {"backend": backend}
            )
        from .supabase_db import SupabaseDatabase
        logger.info(f"Using Supabase database at {config.supabase_url}")
        return SupabaseDatabase.from_credentials(config.supabase_url, config.supabase_key)

    if backend == "sqlite":
        from .sqlite_db import SqliteDatabase
        database = SqliteDatabase(config.database_path)
        database.init_schema()
        logger.info(f"Using SQLite database at {config.database_path}")
        return database

    raise ConfigurationError(
        f"Unknown database backend '{config.database_backend}'",
        {"expected": ["supabase", "sqlite"]}
    )


def get_db() -> Database:
    """
    Get the database gateway of the current application.

    Returns:
        The Database instance passed to create_app()
    """
    return current_app.extensions[EXTENSION_KEY]
