"""
Integration tests for the HTTP routes.

The app's startup hook is not run: the routes are wired to a reconciled
SQLite database through dependency overrides.
Run: pytest tests/integration/test_api_routes.py -v
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from api.main import app
from api.routes.content import get_content_service
from services.content_service import ContentService
from utils.database import get_db
from utils.errors import ContentReadError, ContentWriteError


class FailingContentService:

    def get_content(self):
        raise ContentReadError("no such table: news")

    def save_content(self, content):
        raise ContentWriteError("Duplicate entry 'w1' for key 'PRIMARY'")


@pytest.fixture
def client(reconciled_engine):
    def override_db():
        with Session(reconciled_engine) as session:
            yield session

    app.dependency_overrides[get_content_service] = lambda: ContentService(reconciled_engine, max_workers=2)
    app.dependency_overrides[get_db] = override_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def failing_client():
    app.dependency_overrides[get_content_service] = FailingContentService
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:

    def test_ping(self, client):
        response = client.get("/ping")
        assert response.status_code == 200
        assert response.json() == {"message": "pong"}

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"


class TestContentRoutes:

    def test_get_data_on_fresh_database(self, client):
        response = client.get("/api/data")

        assert response.status_code == 200
        data = response.json()
        assert data["news"] == []
        assert data["settings"]["branding"]["siteName"] == ""
        assert data["privacy"]["sections"] == []

    def test_post_data_returns_stored_tree(self, client):
        payload = {
            "news": [{"id": "n1", "title": "Patch 1.2", "tag": "Update"}],
            "classes": [],
        }

        response = client.post("/api/data", json=payload)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Data saved successfully"
        assert [item["id"] for item in body["data"]["news"]] == ["n1"]
        assert body["data"]["news"][0]["createdAt"]
        assert client.get("/api/data").json()["news"] == body["data"]["news"]

    def test_read_failure_is_500(self, failing_client):
        response = failing_client.get("/api/data")

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to fetch content: no such table: news"

    def test_write_failure_is_500(self, failing_client):
        response = failing_client.post("/api/data", json={"weapons": []})

        assert response.status_code == 500
        assert response.json()["detail"].startswith("Failed to save content: Duplicate entry")


class TestUserRoutes:

    def test_list_users_hides_hashes(self, client, test_settings):
        response = client.get("/api/users")

        assert response.status_code == 200
        users = response.json()
        assert [user["username"] for user in users] == [test_settings.DEFAULT_ADMIN_USERNAME]
        assert "password_hash" not in users[0]

    def test_create_and_delete_user(self, client):
        response = client.post("/api/users", json={"username": "editor", "password": "pw", "role": "admin"})
        assert response.status_code == 201

        duplicate = client.post("/api/users", json={"username": "editor", "password": "pw", "role": "admin"})
        assert duplicate.status_code == 409

        user_id = next(user["id"] for user in client.get("/api/users").json() if user["username"] == "editor")
        assert client.delete(f"/api/users/{user_id}").status_code == 200
        assert client.delete(f"/api/users/{user_id}").status_code == 404

    def test_change_password(self, client, test_settings):
        username = test_settings.DEFAULT_ADMIN_USERNAME
        current = test_settings.DEFAULT_ADMIN_PASSWORD

        wrong = client.post("/api/change-password", json={
            "username": username, "currentPassword": "nope", "newPassword": "next"
        })
        assert wrong.status_code == 401

        ok = client.post("/api/change-password", json={
            "username": username, "currentPassword": current, "newPassword": "next"
        })
        assert ok.status_code == 200

        again = client.post("/api/change-password", json={
            "username": username, "currentPassword": current, "newPassword": "other"
        })
        assert again.status_code == 401

    def test_change_password_unknown_user(self, client):
        response = client.post("/api/change-password", json={
            "username": "ghost", "currentPassword": "a", "newPassword": "b"
        })
        assert response.status_code == 404
