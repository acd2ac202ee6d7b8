"""Root, health and homepage routes."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from extrev import rate_limiter


def test_root(client: TestClient) -> None:
    assert client.get("/").json() == {"message": "ExtRev is running"}


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "healthy"}


def test_redis_health(client: TestClient) -> None:
    body = client.get("/health/redis").json()

    assert body["status"] == "healthy"
    assert body["redis"]["connected"] is True


def test_redis_health_degraded(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def unavailable():
        raise ConnectionError("redis down")

    monkeypatch.setattr(rate_limiter, "get_redis_client", unavailable)

    body = client.get("/health/redis").json()

    assert body["status"] == "degraded"
    assert body["redis"]["connected"] is False


def test_homepage_returns_user_and_feed(auth_client: TestClient) -> None:
    body = auth_client.get("/homepage").json()

    assert body["user"]["username"] == "alice"
    assert body["feed"] == []


def test_security_headers_present(client: TestClient) -> None:
    response = client.get("/")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
    assert "default-src 'self'" in response.headers["Content-Security-Policy"]


def test_validation_errors_are_listed_per_field(auth_client: TestClient) -> None:
    response = auth_client.get("/client/list", params={"dir": "sideways"})

    assert response.status_code == 400
    assert response.json()["detail"][0]["field"] == "dir"
    assert "HX-Retarget" not in response.headers
