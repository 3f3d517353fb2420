"""Tests for the application factory, headers and routing."""

import pytest

from inkwell.auth import token as auth_token
from inkwell.auth.schemas import UserResponse
from inkwell.config import settings
from inkwell.db import Database
from inkwell.db.posts import PostOperations
from inkwell.exceptions import ConfigurationError
from inkwell.main import create_app


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.get_json() == {"status": "ok"}


class TestSecurityHeaders:

    def test_headers_on_every_response(self, client):
        response = client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
        assert response.headers["Referrer-Policy"] == "no-referrer"
        assert "default-src 'none'" in response.headers["Content-Security-Policy"]
        assert "Strict-Transport-Security" not in response.headers

    def test_hsts_in_production(self, client):
        settings.production = True
        try:
            response = client.get("/health")
        finally:
            settings.production = False

        assert "max-age=" in response.headers["Strict-Transport-Security"]


class TestCors:

    def test_frontend_origin_allowed(self, client):
        response = client.get("/health", headers={"Origin": settings.frontend_origin})

        assert response.headers["Access-Control-Allow-Origin"] == settings.frontend_origin
        assert response.headers["Access-Control-Allow-Credentials"] == "true"

    def test_other_origin_not_allowed(self, client):
        response = client.get("/health", headers={"Origin": "https://evil.example.net"})

        assert "Access-Control-Allow-Origin" not in response.headers


class TestRouting:

    def test_unknown_route_is_json_404(self, client):
        response = client.get("/nope")

        assert response.status_code == 404
        assert "error" in response.get_json()

    def test_wrong_method_is_json_405(self, client):
        response = client.get("/signup")

        assert response.status_code == 405
        assert "error" in response.get_json()


class TestCreateApp:

    def test_no_flask_session_secret(self, app):
        """OAuth state is signed with SESSION_SECRET_KEY directly; Flask sessions are unused."""
        assert app.config["SECRET_KEY"] is None

    def test_missing_supabase_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "database_backend", "supabase")
        monkeypatch.setattr(settings, "supabase_url", "")

        with pytest.raises(ConfigurationError):
            create_app()

    def test_injected_database_is_used(self):
        """A stand-in database answers GET /posts for user 5 with []."""
        calls = []

        class EmptyPosts(PostOperations):
            def list_by_owner(self, user_id):
                calls.append(user_id)
                return []

        class StubDatabase(Database):
            backend = "stub"

            def _create_post_operations(self):
                return EmptyPosts()

        app = create_app(database=StubDatabase())
        app.config["TESTING"] = True
        token = auth_token.generate_access_token(UserResponse(id=5, name="Five", email="five@b.com"))

        with app.test_client() as client:
            response = client.get("/posts", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.get_json() == {"posts": []}
        assert calls == [5]
