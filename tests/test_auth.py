"""
Tests for registration, login, token resolution and the developer list
"""
import uuid
from datetime import timedelta

from project_tracker.core.security import create_access_token

from conftest import DEV_PASSWORD, STUDENT_PASSWORD, auth_headers


class TestRegister:
    """Developer registration"""

    def test_register_returns_developer_with_token(self, client):
        response = client.post(
            "/api/auth/register",
            json={"name": "Asha", "username": "asha", "password": DEV_PASSWORD},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["username"] == "asha"
        assert data["role"] == "developer"
        assert data["token"]
        assert "password" not in data

    def test_register_duplicate_username(self, client, register_developer):
        register_developer(client, username="asha")

        response = client.post(
            "/api/auth/register",
            json={"name": "Other", "username": "asha", "password": DEV_PASSWORD},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "User already exists"

    def test_register_short_password(self, client):
        response = client.post(
            "/api/auth/register",
            json={"name": "Asha", "username": "asha", "password": "short"},
        )

        assert response.status_code == 400
        assert "at least 8 characters" in response.json()["message"]

    def test_register_missing_field(self, client):
        response = client.post("/api/auth/register", json={"username": "asha"})

        assert response.status_code == 422


class TestLogin:
    """Login and the /me lookup"""

    def test_login_token_resolves_to_same_identity(self, client, developer):
        response = client.post(
            "/api/auth/login",
            json={"username": "dev1", "password": DEV_PASSWORD},
        )
        assert response.status_code == 200
        token = response.json()["token"]

        me = client.get("/api/auth/me", headers=auth_headers(token))

        assert me.status_code == 200
        assert me.json()["id"] == developer["id"]
        assert "password" not in me.json()

    def test_login_wrong_password(self, client, developer):
        response = client.post(
            "/api/auth/login",
            json={"username": "dev1", "password": "not-the-password"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid username or password"

    def test_login_unknown_user(self, client):
        response = client.post(
            "/api/auth/login",
            json={"username": "nobody", "password": DEV_PASSWORD},
        )

        assert response.status_code == 401

    def test_student_can_login(self, client, student):
        response = client.post(
            "/api/auth/login",
            json={"username": "stud1", "password": STUDENT_PASSWORD},
        )

        assert response.status_code == 200
        assert response.json()["role"] == "student"


class TestTokenResolution:
    """Bearer token handling on protected routes"""

    def test_me_without_token(self, client):
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_me_with_garbage_token(self, client):
        response = client.get("/api/auth/me", headers=auth_headers("not-a-jwt"))

        assert response.status_code == 401

    def test_me_with_expired_token(self, client, settings, developer):
        token = create_access_token(developer["id"], settings, expires_delta=timedelta(seconds=-10))

        response = client.get("/api/auth/me", headers=auth_headers(token))

        assert response.status_code == 401

    def test_me_with_token_signed_by_other_key(self, client, settings, developer):
        other = settings.model_copy(update={"SECRET_KEY": "another-key"})
        token = create_access_token(developer["id"], other)

        response = client.get("/api/auth/me", headers=auth_headers(token))

        assert response.status_code == 401

    def test_me_for_missing_user(self, client, settings):
        token = create_access_token(str(uuid.uuid4()), settings)

        response = client.get("/api/auth/me", headers=auth_headers(token))

        assert response.status_code == 401


class TestDevelopers:
    """Public developer list"""

    def test_lists_only_developers(self, client, developer, student, register_developer):
        register_developer(client, username="dev2")

        response = client.get("/api/auth/developers")

        assert response.status_code == 200
        usernames = {d["username"] for d in response.json()}
        assert usernames == {"dev1", "dev2"}
        assert all("password" not in d for d in response.json())
