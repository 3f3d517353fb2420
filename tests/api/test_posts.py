"""API tests for post CRUD endpoints."""

import pytest

VALID_POST = {
    "title": "First post",
    "content": "Hello from the very first post.",
}


@pytest.fixture
def create_post(database, test_user):
    """Insert posts directly for the test user."""
    user, _password = test_user

    def _create(title="Seeded title", content="Seeded content body", user_id=None):
        return database.posts.create(
            title=title,
            content=content,
            user_id=user_id if user_id is not None else user.id,
        )

    return _create


class TestListPosts:
    """Tests for GET /posts"""

    def test_empty_list(self, client, auth_headers):
        """A user without posts gets an empty list, not an error."""
        response = client.get("/posts", headers=auth_headers)

        assert response.status_code == 200
        assert response.get_json() == {"posts": []}

    def test_ordered_by_id_descending(self, client, auth_headers, create_post):
        """Posts are returned newest (highest id) first."""
        ids = [create_post(title=f"Post {i}")["id"] for i in range(3)]

        response = client.get("/posts", headers=auth_headers)

        assert response.status_code == 200
        returned = [post["id"] for post in response.get_json()["posts"]]
        assert returned == sorted(ids, reverse=True)

    def test_only_own_posts(self, client, auth_headers, create_post, other_user):
        """Posts of other users are not listed."""
        mine = create_post(title="Mine")
        create_post(title="Theirs", user_id=other_user.id)

        response = client.get("/posts", headers=auth_headers)

        posts = response.get_json()["posts"]
        assert [post["id"] for post in posts] == [mine["id"]]

    def test_requires_token(self, client):
        """Listing without a token is rejected."""
        response = client.get("/posts")
        assert response.status_code == 401


class TestCreatePost:
    """Tests for POST /posts"""

    def test_create_valid(self, client, auth_headers, test_user):
        """Valid post is created and returned with its id."""
        user, _password = test_user

        response = client.post("/posts", json=VALID_POST, headers=auth_headers)

        assert response.status_code == 201
        post = response.get_json()["post"]
        assert isinstance(post["id"], int)
        assert post["title"] == VALID_POST["title"]
        assert post["content"] == VALID_POST["content"]
        assert post["user_id"] == user.id

    def test_client_user_id_ignored(self, client, auth_headers, test_user, other_user, database):
        """A user_id in the body never overrides the token's user."""
        user, _password = test_user

        response = client.post(
            "/posts",
            json={**VALID_POST, "user_id": other_user.id},
            headers=auth_headers
        )

        assert response.status_code == 201
        assert response.get_json()["post"]["user_id"] == user.id
        assert database.posts.list_by_owner(other_user.id) == []

    def test_short_title_rejected(self, client, auth_headers):
        """Title shorter than 3 characters fails validation."""
        response = client.post(
            "/posts",
            json={"title": "Hi", "content": VALID_POST["content"]},
            headers=auth_headers
        )

        assert response.status_code == 400
        data = response.get_json()
        assert data["error"] == "Validation failed"
        fields = [e["field"] for e in data["details"]["errors"]]
        assert fields == ["title"]

    def test_all_violations_reported(self, client, auth_headers):
        """Every invalid field is listed, not just the first."""
        response = client.post(
            "/posts",
            json={"title": "x", "content": "short"},
            headers=auth_headers
        )

        assert response.status_code == 400
        fields = {e["field"] for e in response.get_json()["details"]["errors"]}
        assert fields == {"title", "content"}

    def test_missing_body(self, client, auth_headers):
        """No JSON body reports both required fields."""
        response = client.post("/posts", headers=auth_headers)

        assert response.status_code == 400
        fields = {e["field"] for e in response.get_json()["details"]["errors"]}
        assert fields == {"title", "content"}

    def test_auth_checked_before_validation(self, client):
        """Invalid body without a token is an auth error, not a validation error."""
        response = client.post("/posts", json={"title": "x"})
        assert response.status_code == 401


class TestUpdatePost:
    """Tests for PUT /posts/<id>"""

    def test_update_own_post(self, client, auth_headers, create_post):
        """Owner can replace title and content."""
        post = create_post()

        response = client.put(
            f"/posts/{post['id']}",
            json={"title": "Updated title", "content": "Updated content here"},
            headers=auth_headers
        )

        assert response.status_code == 200
        updated = response.get_json()["post"]
        assert updated["id"] == post["id"]
        assert updated["title"] == "Updated title"
        assert updated["content"] == "Updated content here"

    def test_update_nonexistent_post(self, client, auth_headers):
        """Updating a missing post answers 404."""
        response = client.put("/posts/9999", json=VALID_POST, headers=auth_headers)

        assert response.status_code == 404
        assert response.get_json()["error"] == "Post not found or unauthorized"

    def test_update_other_users_post(self, client, other_auth_headers, create_post, database):
        """Another user's post looks exactly like a missing post."""
        post = create_post()

        response = client.put(f"/posts/{post['id']}", json=VALID_POST, headers=other_auth_headers)
        missing = client.put("/posts/9999", json=VALID_POST, headers=other_auth_headers)

        assert response.status_code == 404
        assert response.get_json()["error"] == missing.get_json()["error"]

        # Unchanged in the database
        owner_posts = database.posts.list_by_owner(post["user_id"])
        assert owner_posts[0]["title"] == post["title"]

    def test_update_validates_body(self, client, auth_headers, create_post):
        """Update uses the same schema as create."""
        post = create_post()

        response = client.put(
            f"/posts/{post['id']}",
            json={"title": "ok title", "content": "short"},
            headers=auth_headers
        )

        assert response.status_code == 400

    def test_non_integer_id(self, client, auth_headers):
        """A non-numeric id does not match the route."""
        response = client.put("/posts/abc", json=VALID_POST, headers=auth_headers)

        assert response.status_code == 404
        assert "error" in response.get_json()

    def test_id_too_large_for_database(self, client, auth_headers):
        """An id beyond the integer column range is a missing post."""
        response = client.put("/posts/99999999999999999999", json=VALID_POST, headers=auth_headers)

        assert response.status_code == 404
        assert response.get_json()["error"] == "Post not found or unauthorized"


class TestDeletePost:
    """Tests for DELETE /posts/<id>"""

    def test_delete_own_post(self, client, auth_headers, create_post, database, test_user):
        """Owner can delete a post."""
        user, _password = test_user
        post = create_post()

        response = client.delete(f"/posts/{post['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.get_json() == {"message": "Post deleted successfully"}
        assert database.posts.list_by_owner(user.id) == []

    def test_delete_nonexistent_post(self, client, auth_headers):
        """Deleting a missing post answers 404, same as update."""
        response = client.delete("/posts/9999", headers=auth_headers)

        assert response.status_code == 404
        assert response.get_json()["error"] == "Post not found or unauthorized"

    def test_delete_other_users_post(self, client, other_auth_headers, create_post, database):
        """Another user's post cannot be deleted and is left in place."""
        post = create_post()

        response = client.delete(f"/posts/{post['id']}", headers=other_auth_headers)

        assert response.status_code == 404
        assert len(database.posts.list_by_owner(post["user_id"])) == 1

    def test_delete_twice(self, client, auth_headers, create_post):
        """Second delete of the same post is 404."""
        post = create_post()

        first = client.delete(f"/posts/{post['id']}", headers=auth_headers)
        second = client.delete(f"/posts/{post['id']}", headers=auth_headers)

        assert first.status_code == 200
        assert second.status_code == 404

    def test_delete_id_too_large_for_database(self, client, auth_headers):
        response = client.delete("/posts/99999999999999999999", headers=auth_headers)

        assert response.status_code == 404


class TestDatabaseErrors:
    """Database failures surface as 400 with the database's message."""

    def test_database_error_passed_through(self, client, auth_headers, database, monkeypatch):
        from inkwell.exceptions import DatabaseError

        def failing_list(user_id):
            raise DatabaseError("relation \"posts\" does not exist")

        monkeypatch.setattr(database.posts, "list_by_owner", failing_list)

        response = client.get("/posts", headers=auth_headers)

        assert response.status_code == 400
        assert response.get_json()["error"] == "relation \"posts\" does not exist"

    def test_unexpected_error_is_500(self, client, auth_headers, database, monkeypatch):
        def broken_create(title, content, user_id):
            raise RuntimeError("connection reset")

        monkeypatch.setattr(database.posts, "create", broken_create)

        response = client.post("/posts", json=VALID_POST, headers=auth_headers)

        assert response.status_code == 500
        assert response.get_json() == {"error": "Server error"}
