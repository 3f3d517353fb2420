"""Shared test fixtures for inkwell."""

import pytest

from inkwell.auth import service, token as auth_token
from inkwell.auth.schemas import UserResponse
from inkwell.config import settings
from inkwell.db.sqlite_db import SqliteDatabase
from inkwell.main import create_app

TEST_PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def fast_bcrypt():
    """Use the minimum bcrypt work factor to keep tests fast."""
    original = settings.bcrypt_work_factor
    settings.bcrypt_work_factor = 4
    yield
    settings.bcrypt_work_factor = original


@pytest.fixture
def database(tmp_path):
    """Fresh SQLite database with schema applied."""
    db = SqliteDatabase(tmp_path / "inkwell.db")
    db.init_schema()
    return db


@pytest.fixture
def app(database):
    """App wired to the test database."""
    app = create_app(database=database)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Create test client for API testing."""
    with app.test_client() as client:
        yield client


def _create_user(database, name: str, email: str, password: str | None) -> UserResponse:
    password_hash = service.hash_password(password) if password else None
    row = database.users.create(name=name, email=email, password=password_hash)
    return UserResponse.model_validate(row)


@pytest.fixture
def test_user(database):
    """Create an email/password user.

    Returns a tuple of (user, password).
    """
    user = _create_user(database, "Test User", "test@example.com", TEST_PASSWORD)
    return user, TEST_PASSWORD


@pytest.fixture
def google_user(database):
    """Create a user the way Google sign-in does (no password)."""
    return _create_user(database, "Google User", "google@example.com", None)


@pytest.fixture
def other_user(database):
    """A second email/password user for ownership tests."""
    return _create_user(database, "Other User", "other@example.com", TEST_PASSWORD)


@pytest.fixture
def jwt_token(test_user):
    """JWT token for the test user."""
    user, _password = test_user
    return auth_token.generate_access_token(user)


@pytest.fixture
def auth_headers(jwt_token):
    """Authorization header for the test user."""
    return {"Authorization": f"Bearer {jwt_token}"}


@pytest.fixture
def other_auth_headers(other_user):
    """Authorization header for the other user."""
    return {"Authorization": f"Bearer {auth_token.generate_access_token(other_user)}"}
