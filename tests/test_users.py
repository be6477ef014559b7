"""
Tests for user directory endpoints.
"""
from userprefs.models.user import User
from userprefs.sanitize import is_safe_display_text


class TestUsersEndpoints:
    """Test users endpoints."""

    def test_get_users(self, client, seeded_db):
        """Test listing the seeded users."""
        response = client.get("/users")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Users found"
        assert [u["name"] for u in body["data"]] == ["Alice", "Robert"]
        assert body["data"][0]["email"] == "alice@example.com"

    def test_get_users_filter(self, client, seeded_db):
        """Test the name filter is a case-insensitive substring match."""
        response = client.get("/users", params={"filter": "rob"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data) == 1
        assert data[0]["name"] == "Robert"

    def test_get_users_empty(self, client):
        """Test an empty directory reports not found."""
        response = client.get("/users")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "No Users found"
        assert body["data"] is None

    def test_get_user_by_id(self, client, seeded_db):
        response = client.get("/users/2")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == 2
        assert data["age"] == 21

    def test_get_user_added_later(self, client, db):
        db.add(User(name="Carol", email="carol@example.com", age=33))
        db.commit()

        response = client.get("/users", params={"filter": "carol"})
        assert response.json()["data"][0]["email"] == "carol@example.com"

    def test_get_user_not_found(self, client, seeded_db):
        response = client.get("/users/999")

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    def test_get_user_invalid_id(self, client):
        response = client.get("/users/abc")

        assert response.status_code == 400
        assert response.json()["status"] == "validation-error"


class TestHelloComponent:
    """Test the greeting component endpoint."""

    def test_default_name(self, client):
        response = client.get("/users/hello")

        assert response.status_code == 200
        assert response.text == "<h1>Hello, World!</h1>"

    def test_named(self, client):
        response = client.get("/users/hello", params={"name": "Alice"})

        assert response.text == "<h1>Hello, Alice!</h1>"

    def test_markup_rejected(self, client):
        response = client.get("/users/hello", params={"name": "<script>alert(1)</script>"})

        assert response.status_code == 400
        assert response.text == "Bad input detected!"

    def test_is_safe_display_text(self):
        assert is_safe_display_text("Robert Smith")
        for bad in ["a<b", "a>b", "a&b", 'a"b', "a'b", "a/b", "a=b"]:
            assert not is_safe_display_text(bad)


class TestHealthCheck:

    def test_health_check(self, client):
        response = client.get("/health-check")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Service is healthy"
        assert body["data"]["process"]["rss_mb"] > 0
        assert body["data"]["settings_documents"] == 0
