"""HTTP tests for the current-user route."""

import pytest
from fastapi.testclient import TestClient

from app.core.auth_jwt import create_access_token
from app.main import app


@pytest.fixture
def client(auth_secret):
    return TestClient(app)


def test_returns_subject_and_optional_claims(client):
    token = create_access_token("user-1", email="dana@example.com", name="Dana Reyes")

    response = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})

    assert response.json() == {"subject": "user-1", "email": "dana@example.com", "name": "Dana Reyes"}


def test_missing_claims_are_null(client):
    response = client.get("/api/me", headers={"Authorization": f"Bearer {create_access_token('user-2')}"})

    assert response.json() == {"subject": "user-2", "email": None, "name": None}


def test_requires_token(client):
    assert client.get("/api/me").status_code == 401
