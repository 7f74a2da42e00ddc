"""Tests for health, root and error-shape behaviour"""
from fastapi.testclient import TestClient


def test_health(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_readiness(client: TestClient):
    response = client.get("/health/ready")
    assert response.status_code == 200
    assert response.json()["checks"]["database"] is True


def test_liveness(client: TestClient):
    response = client.get("/health/live")
    assert response.status_code == 200
    assert response.json()["status"] == "alive"


def test_root(client: TestClient):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["api"] == "/api"


def test_unknown_route_uses_error_shape(client: TestClient):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_request_id_header(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers.get("X-Request-ID") == "abc-123"
