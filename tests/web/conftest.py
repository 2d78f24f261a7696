"""Fixtures for end-to-end tests through the FastAPI app."""

import pytest
from fastapi.testclient import TestClient

from basicauth.app import App
from basicauth.config import Config
from basicauth.web.server import create_fastapi_app


@pytest.fixture
def config():
    return Config(_env_file=None, admin_username="admin", admin_password="Admin2025", database_url=None)


@pytest.fixture
def app_instance(config, store, clock):
    return App(config, store=store, clock=clock)


@pytest.fixture
def fastapi_app(app_instance, config):
    return create_fastapi_app(app_instance, config)


@pytest.fixture
def client(fastapi_app):
    with TestClient(fastapi_app) as client:
        yield client


@pytest.fixture
def admin_client(client):
    response = client.post("/api/v1/auth/login", json={"username": "admin", "password": "Admin2025"})
    assert response.status_code == 200
    return client


@pytest.fixture
def alice_client(admin_client, fastapi_app):
    """Second browser logged in as a regular user created by the admin."""
    response = admin_client.post("/api/v1/users", json={"username": "alice", "password": "wonderland", "full_name": "Alice"})
    assert response.status_code == 201

    other = TestClient(fastapi_app)
    response = other.post("/api/v1/auth/login", json={"username": "alice", "password": "wonderland"})
    assert response.status_code == 200
    return other
