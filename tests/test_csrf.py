"""Double-submit CSRF middleware."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from extrev.csrf import CSRF_COOKIE_NAME, CSRF_HEADER_NAME, CSRFMiddleware, is_path_exempt


@pytest.fixture
def csrf_client() -> TestClient:
    app = FastAPI()
    app.add_middleware(CSRFMiddleware)

    @app.get("/page")
    def page():
        return {"ok": True}

    @app.post("/client/form")
    def submit():
        return {"ok": True}

    @app.post("/auth/login")
    def login():
        return {"ok": True}

    return TestClient(app)


def test_safe_request_sets_cookie(csrf_client: TestClient) -> None:
    response = csrf_client.get("/page")

    assert response.status_code == 200
    assert response.cookies.get(CSRF_COOKIE_NAME)


def test_post_without_cookie_is_rejected(csrf_client: TestClient) -> None:
    response = csrf_client.post("/client/form")

    assert response.status_code == 403
    assert "missing" in response.json()["detail"]


def test_post_without_header_is_rejected(csrf_client: TestClient) -> None:
    csrf_client.get("/page")

    assert csrf_client.post("/client/form").status_code == 403


def test_post_with_mismatched_header_is_rejected(csrf_client: TestClient) -> None:
    csrf_client.get("/page")

    response = csrf_client.post("/client/form", headers={CSRF_HEADER_NAME: "forged"})

    assert response.status_code == 403
    assert "invalid" in response.json()["detail"]


def test_post_with_matching_header_passes(csrf_client: TestClient) -> None:
    token = csrf_client.get("/page").cookies.get(CSRF_COOKIE_NAME)

    response = csrf_client.post("/client/form", headers={CSRF_HEADER_NAME: token})

    assert response.status_code == 200


def test_login_is_exempt(csrf_client: TestClient) -> None:
    assert csrf_client.post("/auth/login").status_code == 200


def test_exempt_paths_match_whole_segments() -> None:
    assert is_path_exempt("/health")
    assert is_path_exempt("/health/redis")
    assert not is_path_exempt("/healthcheck")
    assert not is_path_exempt("/client/form")
