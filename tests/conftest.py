"""
Project Tracker - Test Configuration and Fixtures
"""
import os
import tempfile

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

# Keep the module-level app in project_tracker.main away from real files
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="tracker-uploads-"))
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only")

from project_tracker.core.config import Settings
from project_tracker.main import create_app

DEV_PASSWORD = "devpassword123"
STUDENT_PASSWORD = "studentpass1"


def make_settings(tmp_path, **overrides) -> Settings:
    values = dict(
        DATABASE_URL="sqlite://",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        SECRET_KEY="test-secret-key-for-testing-only",
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
    )
    values.update(overrides)
    return Settings(**values)


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def strict_client(tmp_path):
    """Client for an app that checks ownership on per-ID routes."""
    strict_app = create_app(make_settings(tmp_path, ENFORCE_OWNERSHIP=True))
    with TestClient(strict_app) as test_client:
        yield test_client


@pytest.fixture
def db_session(app):
    with Session(app.state.context.engine) as session:
        yield session


@pytest.fixture
def register_developer():
    """Register a developer through the API and return its auth payload."""
    def _register(client: TestClient, username: str = "dev", name: str = "Dev") -> dict:
        response = client.post(
            "/api/auth/register",
            json={"name": name, "username": username, "password": DEV_PASSWORD},
        )
        assert response.status_code == 201, response.text
        data = response.json()
        data["headers"] = auth_headers(data["token"])
        return data
    return _register


@pytest.fixture
def create_student():
    """Create a student owned by the given developer and return it."""
    def _create(client: TestClient, developer: dict, username: str = "student", name: str = "Student") -> dict:
        response = client.post(
            "/api/students",
            json={"name": name, "username": username, "password": STUDENT_PASSWORD},
            headers=developer["headers"],
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def assign_project():
    def _assign(client: TestClient, developer: dict, student: dict, **fields) -> dict:
        payload = {
            "title": "Library Management",
            "description": "Book lending system",
            "student_id": student["id"],
            "submission_date": "2026-12-01",
            "frontend": "React",
            "backend": "FastAPI",
            "database": "PostgreSQL",
            "amount": 100,
        }
        payload.update(fields)
        response = client.post("/api/students/assign-project", json=payload, headers=developer["headers"])
        assert response.status_code == 201, response.text
        return response.json()
    return _assign


@pytest.fixture
def developer(client, register_developer) -> dict:
    return register_developer(client, username="dev1", name="Dev One")


@pytest.fixture
def student(client, developer, create_student) -> dict:
    return create_student(client, developer, username="stud1", name="Student One")


@pytest.fixture
def student_headers(client, student) -> dict:
    response = client.post(
        "/api/auth/login",
        json={"username": student["username"], "password": STUDENT_PASSWORD},
    )
    assert response.status_code == 200, response.text
    return auth_headers(response.json()["token"])
