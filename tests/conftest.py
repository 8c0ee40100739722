"""Shared fixtures: an application per test on its own SQLite file."""

import pytest
from fastapi.testclient import TestClient

from survey_api.app.core.config import Settings
from survey_api.app.core.db import Database
from survey_api.app.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=str(tmp_path / "test.db"), secret_key="test-secret")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(settings):
    database = Database(settings.database_url)
    database.init()
    return database


def register(client, email, first_name="", last_name="", password="secret"):
    """Register a user and return ``(user, auth headers)``."""
    res = client.post(
        "/api/users",
        json={"email": email, "password": password, "first_name": first_name, "last_name": last_name},
    )
    assert res.status_code == 200, res.text
    login = client.post("/api/users/login", json={"email": email, "password": password})
    assert login.status_code == 200, login.text
    token = login.json()["access_token"]
    return res.json(), {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin(client):
    """The first registered user, who is given the admin role."""
    return register(client, "admin@example.com", "Ada", "Admin")


@pytest.fixture
def user(client, admin):
    return register(client, "user@example.com", "Uma", "User")


@pytest.fixture
def other_user(client, admin):
    return register(client, "other@example.com", "Otto", "Other")
