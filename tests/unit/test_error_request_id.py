"""Tests for request_id and security headers on error responses."""

import pytest
from fastapi.testclient import TestClient

from src.taskflow.main import create_app

pytestmark = pytest.mark.unit


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def test_unknown_route_includes_request_id(client: TestClient) -> None:
    response = client.get("/api/v1/nonexistent-endpoint")

    assert response.status_code == 404
    body = response.json()
    assert body["detail"] == "Not Found"
    assert isinstance(body["request_id"], str)
    assert body["request_id"] == response.headers["X-Request-ID"]


def test_missing_token_is_401_with_request_id(client: TestClient) -> None:
    response = client.get("/api/v1/time/active")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert response.json()["request_id"]


def test_garbage_token_is_401(client: TestClient) -> None:
    response = client.post(
        "/api/v1/time/stop", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or expired token"


def test_client_request_id_is_echoed(client: TestClient) -> None:
    request_id = "0b8a3e2c-6f1d-4d5e-9a7b-2c4d6e8f0a1b"

    response = client.get("/api/v1/nope", headers={"X-Request-ID": request_id})

    assert response.json()["request_id"] == request_id


def test_different_requests_have_different_ids(client: TestClient) -> None:
    first = client.get("/api/v1/one").json()["request_id"]
    second = client.get("/api/v1/two").json()["request_id"]

    assert first != second


def test_security_headers_present(client: TestClient) -> None:
    response = client.get("/api/v1/nope")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
